"""
함수 추출에 사용되는 기본 정규식 패턴과 패턴 컴파일 헬퍼를 정의한 모듈입니다.

기본값은 Rust 소스(fn / pub fn)에 맞춰져 있으며, 모든 패턴은 CLI 또는
YAML 설정으로 바꿀 수 있습니다.
"""
import re

from .exceptions import ConfigurationError

# 함수 시작: 라인 맨 앞의 "fn " 또는 "pub fn "
DEFAULT_START_PATTERN = r'^fn |^pub fn '

# 함수 끝: 닫는 중괄호 한 글자만 있는 라인
DEFAULT_END_PATTERN = r'^}$'

# 이름 정리: 가시성/키워드 토큰과 제네릭/인자 목록 이후 전체를 제거
# 가장 왼쪽 매칭부터 하나씩 제거되므로 "pub(crate) async fn foo<T>(x: T)" -> "foo"
DEFAULT_NAME_CLEANUP_PATTERN = (
    r'\bpub(\([^)]*\))?\s+'
    r'|\b(async|const|unsafe|default)\s+'
    r'|\bextern(\s+"[^"]*")?\s+'
    r'|\bfn\s+'
    r'|[<(].*$'
)

# 무시할 함수 이름: 기본값은 어떤 문자열에도 매칭되지 않음
DEFAULT_IGNORE_PATTERN = r'(?!)'

# 호출 감지: 단어 경계 + 함수 이름 + 여는 괄호
CALL_PATTERN_TEMPLATE = r'\b{name}\('

# 클러스터 ID에 허용되지 않는 문자 (영숫자 외 전부)
PATTERN_NON_ALNUM = re.compile(r'[^0-9A-Za-z]')


def compile_pattern(pattern: str, option_name: str):
    """
    사용자 패턴 문자열을 컴파일합니다.

    Args:
        pattern: 정규식 문자열 (이미 컴파일된 패턴이면 그대로 반환)
        option_name: 오류 메시지에 표시할 설정 이름 (예: "start")

    Returns:
        컴파일된 정규식 객체

    Raises:
        ConfigurationError: 문자열이 아니거나 컴파일에 실패한 경우
    """
    if isinstance(pattern, re.Pattern):
        return pattern
    if not isinstance(pattern, str):
        raise ConfigurationError(f"'{option_name}' 패턴은 문자열이어야 합니다: {pattern!r}")
    try:
        return re.compile(pattern)
    except re.error as e:
        raise ConfigurationError(f"'{option_name}' 패턴이 올바르지 않습니다: {pattern!r} ({e})") from e


def call_pattern_for(name: str):
    """함수 이름에 대한 호출 감지 패턴을 컴파일합니다."""
    return re.compile(CALL_PATTERN_TEMPLATE.format(name=re.escape(name)))


def sanitize_identifier(text: str) -> str:
    """영숫자가 아닌 모든 문자를 '_'로 치환합니다 (그래프 클러스터 ID용)."""
    return PATTERN_NON_ALNUM.sub('_', text)
