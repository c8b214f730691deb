"""
호출 그래프 생성기 설정 모듈

CallGraphConfig 클래스로 패턴과 동작 옵션을 설정하고, YAML 파일에서 읽어올 수 있습니다.
"""

import re
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict

import yaml
from loguru import logger

from .exceptions import ConfigurationError
from .extractor import FunctionExtractor, UnterminatedPolicy
from .name_cleaner import NameCleaner, create_name_cleaner
from .patterns import (
    DEFAULT_START_PATTERN,
    DEFAULT_END_PATTERN,
    DEFAULT_NAME_CLEANUP_PATTERN,
    DEFAULT_IGNORE_PATTERN,
    compile_pattern,
)


@dataclass(frozen=True)
class CompiledPatterns:
    """검증/컴파일이 끝난 설정 (파일을 읽기 전에 생성)"""
    start: re.Pattern
    end: re.Pattern
    ignore: re.Pattern
    name_cleaner: NameCleaner
    unterminated_policy: UnterminatedPolicy

    def create_extractor(self) -> FunctionExtractor:
        return FunctionExtractor(
            start_pattern=self.start,
            end_pattern=self.end,
            name_cleaner=self.name_cleaner,
            unterminated_policy=self.unterminated_policy,
        )


@dataclass
class CallGraphConfig:
    """호출 그래프 생성기 설정"""

    # 함수 시작/끝 패턴
    start: str = DEFAULT_START_PATTERN
    end: str = DEFAULT_END_PATTERN

    # 이름 정리 패턴 (name_strategy가 "regex"일 때 사용)
    name_cleanup: str = DEFAULT_NAME_CLEANUP_PATTERN

    # 이 패턴에 매칭되는 함수 이름은 그래프에서 제외
    ignore: str = DEFAULT_IGNORE_PATTERN

    # 이름 정리 전략 (regex, paren)
    name_strategy: str = "regex"

    # 파일 끝에서 닫히지 않은 함수를 결과에 포함할지 여부
    flush_unterminated: bool = False

    # 범례의 라인 수를 함수 본문 라인 수 합으로 계산할지 여부
    loc_from_functions: bool = False

    def compile(self) -> CompiledPatterns:
        """
        모든 패턴을 컴파일하고 검증합니다.

        Raises:
            ConfigurationError: 패턴이 올바르지 않거나 전략 이름을 알 수 없는 경우
        """
        policy = UnterminatedPolicy.FLUSH if self.flush_unterminated else UnterminatedPolicy.DROP
        start = compile_pattern(self.start, "start")
        end = compile_pattern(self.end, "end")
        # paren 전략에서도 정리 패턴은 항상 검증
        cleanup = compile_pattern(self.name_cleanup, "name_cleanup")
        ignore = compile_pattern(self.ignore, "ignore")
        return CompiledPatterns(
            start=start,
            end=end,
            ignore=ignore,
            name_cleaner=create_name_cleaner(self.name_strategy, cleanup),
            unterminated_policy=policy,
        )

    def merged(self, overrides: Dict[str, Any]) -> "CallGraphConfig":
        """None이 아닌 값만 덮어쓴 새 설정을 반환합니다."""
        values = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **values)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CallGraphConfig":
        """
        딕셔너리에서 설정을 생성합니다.

        Raises:
            ConfigurationError: 알 수 없는 키나 잘못된 타입이 있는 경우
        """
        known = {f.name: f for f in fields(cls)}
        unknown = sorted(set(data) - set(known))
        if unknown:
            raise ConfigurationError(f"알 수 없는 설정 키: {', '.join(unknown)}")

        for key, value in data.items():
            expected = bool if isinstance(known[key].default, bool) else str
            if not isinstance(value, expected):
                raise ConfigurationError(
                    f"설정 '{key}'의 타입이 올바르지 않습니다: {type(value).__name__} "
                    f"({expected.__name__} 필요)"
                )
        return cls(**data)

    @classmethod
    def from_yaml(cls, path) -> "CallGraphConfig":
        """
        YAML 파일에서 설정을 로드합니다.

        Args:
            path: YAML 파일 경로 (최상위는 매핑이어야 함)

        Raises:
            ConfigurationError: 파일을 읽을 수 없거나 형식이 잘못된 경우
        """
        file_path = Path(path)
        logger.info(f"설정 파일 로드: {file_path}")

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise ConfigurationError(f"설정 파일을 읽을 수 없습니다: {file_path} ({e})") from e
        except yaml.YAMLError as e:
            raise ConfigurationError(f"설정 파일 YAML 파싱 오류: {file_path} ({e})") from e

        if data is None:
            logger.warning(f"빈 설정 파일입니다: {file_path}")
            return cls()

        if not isinstance(data, dict):
            raise ConfigurationError(f"잘못된 설정 형식: 매핑이 필요합니다 ({file_path})")

        return cls.from_dict(data)
