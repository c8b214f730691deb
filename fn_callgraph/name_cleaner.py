"""
함수 시작 라인에서 순수한 함수 이름을 추출하는 이름 정리 전략 모듈입니다.

- RegexStripNameCleaner: 정리 패턴의 가장 왼쪽 매칭을 반복 제거 (기본 전략)
- ParenPrefixNameCleaner: 첫 '(' 앞 부분의 마지막 토큰 사용
"""
from abc import ABC, abstractmethod

from .exceptions import ConfigurationError, MalformedDeclarationError
from .patterns import DEFAULT_NAME_CLEANUP_PATTERN, compile_pattern


class NameCleaner(ABC):
    """
    이름 정리 전략을 위한 추상 기본 클래스입니다.
    선언 라인(예: "pub fn main() {")을 함수 이름(예: "main")으로 변환합니다.
    """

    @abstractmethod
    def clean(self, line: str) -> str:
        """
        선언 라인에서 함수 이름을 추출합니다.

        Args:
            line: 시작 패턴에 매칭된 원본 라인

        Returns:
            함수 이름 (앞뒤 공백 제거)

        Raises:
            MalformedDeclarationError: 이름을 추출할 수 없는 경우
        """
        pass


class RegexStripNameCleaner(NameCleaner):
    """
    정리 패턴의 가장 왼쪽 매칭을 더 이상 매칭이 없을 때까지 하나씩 제거합니다.

    예 (기본 패턴):
        "pub fn main() {" -> "fn main() {" -> "main() {" -> "main"
    """

    # 생성 시 빈 매칭 여부를 미리 확인할 대표 선언 라인
    SAMPLE_DECLARATIONS = (
        "",
        "fn main() {",
        "pub fn main() {",
        "int main(void) {",
        "static void do_work(int a)",
        "def main():",
    )

    def __init__(self, cleanup_pattern=DEFAULT_NAME_CLEANUP_PATTERN):
        self.pattern = compile_pattern(cleanup_pattern, "name_cleanup")

        # 빈 매칭이 생기는 패턴(예: "x*", "\b")은 파일을 읽기 전에 거부
        for sample in self.SAMPLE_DECLARATIONS:
            self._strip(sample)

    def _strip(self, line: str) -> str:
        working = line
        while True:
            match = self.pattern.search(working)
            if match is None:
                return working
            if match.start() == match.end():
                raise ConfigurationError(
                    f"'name_cleanup' 패턴이 빈 매칭을 반환했습니다: "
                    f"{self.pattern.pattern!r} (라인: {line!r})"
                )
            working = working[:match.start()] + working[match.end():]

    def clean(self, line: str) -> str:
        name = self._strip(line).strip()
        if not name:
            raise MalformedDeclarationError(line)
        return name


class ParenPrefixNameCleaner(NameCleaner):
    """
    첫 번째 '(' 앞의 문자열을 공백으로 나누어 마지막 토큰을 이름으로 사용합니다.

    예:
        "static int do_work(int a)" -> "do_work"
    """

    def clean(self, line: str) -> str:
        idx = line.find('(')
        if idx < 0:
            raise MalformedDeclarationError(line)

        tokens = line[:idx].split()
        if not tokens:
            raise MalformedDeclarationError(line)
        return tokens[-1]


# 전략 이름 -> 정리 패턴을 받아 정리기를 만드는 함수
NAME_CLEANER_STRATEGIES = {
    "regex": lambda pattern: RegexStripNameCleaner(pattern),
    "paren": lambda pattern: ParenPrefixNameCleaner(),
}


def create_name_cleaner(strategy: str = "regex", cleanup_pattern=DEFAULT_NAME_CLEANUP_PATTERN) -> NameCleaner:
    """
    전략 이름으로 이름 정리기를 생성합니다.

    Args:
        strategy: "regex" 또는 "paren"
        cleanup_pattern: regex 전략에서 사용할 정리 패턴 (paren 전략은 무시)

    Raises:
        ConfigurationError: 알 수 없는 전략 이름이거나 패턴이 올바르지 않은 경우
    """
    if strategy not in NAME_CLEANER_STRATEGIES:
        available = ", ".join(sorted(NAME_CLEANER_STRATEGIES))
        raise ConfigurationError(f"알 수 없는 이름 정리 전략: {strategy!r} (사용 가능: {available})")

    return NAME_CLEANER_STRATEGIES[strategy](cleanup_pattern)
