"""
함수 추출 모듈

모듈 소스를 라인 단위로 훑으며 시작/끝 패턴으로 함수 영역을 잘라냅니다.
실제 파서가 아닌 휴리스틱이며, 상태는 Idle / InFunction 두 가지뿐입니다.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Iterable

from shared_config.logger import logger

from .exceptions import MalformedDeclarationError
from .models import Module, Function
from .name_cleaner import NameCleaner, RegexStripNameCleaner
from .patterns import DEFAULT_START_PATTERN, DEFAULT_END_PATTERN, compile_pattern


class UnterminatedPolicy(Enum):
    """파일 끝까지 끝 패턴을 만나지 못한 함수 처리 방식"""
    DROP = "drop"      # 버림 (기본)
    FLUSH = "flush"    # 마지막 함수로 결과에 추가


@dataclass
class _PartialFunction:
    """InFunction 상태에서 누적 중인 함수"""
    name: str
    line_number: int
    lines: List[str] = field(default_factory=list)

    def finalize(self, module: Module) -> Function:
        body = "".join(f"{line}\n" for line in self.lines)
        return Function(name=self.name, body=body, module=module)


class FunctionExtractor:
    """라인 기반 함수 추출기"""

    def __init__(self,
                 start_pattern=DEFAULT_START_PATTERN,
                 end_pattern=DEFAULT_END_PATTERN,
                 name_cleaner: Optional[NameCleaner] = None,
                 unterminated_policy: UnterminatedPolicy = UnterminatedPolicy.DROP):
        """
        Args:
            start_pattern: 함수 시작 라인 패턴 (라인 어디든 매칭되면 시작)
            end_pattern: 함수 끝 라인 패턴
            name_cleaner: 시작 라인에서 이름을 뽑는 전략 (기본: RegexStripNameCleaner)
            unterminated_policy: 파일 끝에서 닫히지 않은 함수 처리 방식
        """
        self.start_pattern = compile_pattern(start_pattern, "start")
        self.end_pattern = compile_pattern(end_pattern, "end")
        self.name_cleaner = name_cleaner or RegexStripNameCleaner()
        self.unterminated_policy = UnterminatedPolicy(unterminated_policy)

    def extract(self, modules: Iterable[Module]) -> List[Function]:
        """
        모든 모듈에서 함수를 추출합니다.

        Returns:
            추출된 함수 목록 (모듈 순서, 모듈 내 등장 순서)
        """
        functions = []
        for module in modules:
            functions.extend(self.extract_module(module))
        return functions

    def extract_module(self, module: Module) -> List[Function]:
        """단일 모듈에서 함수를 추출합니다."""
        functions = []
        # None이면 Idle, 아니면 InFunction
        current: Optional[_PartialFunction] = None

        for line_number, line in enumerate(module.lines(), start=1):
            # 함수 시작 (누적 중이던 함수는 버려짐)
            if self.start_pattern.search(line):
                if current is not None:
                    logger.debug(
                        f"닫히지 않은 함수 폐기: {current.name} "
                        f"({module.filename}:{current.line_number})"
                    )
                current = _PartialFunction(
                    name=self._clean_name(line, module, line_number),
                    line_number=line_number,
                    lines=[line],
                )
                continue

            if current is None:
                continue

            current.lines.append(line)

            # 함수 끝
            if self.end_pattern.search(line):
                function = current.finalize(module)
                logger.debug(f"함수 발견: {function.label} ({module.filename}:{current.line_number})")
                functions.append(function)
                current = None

        if current is not None:
            if self.unterminated_policy is UnterminatedPolicy.FLUSH:
                function = current.finalize(module)
                logger.debug(f"닫히지 않은 함수 추가: {function.label} ({module.filename}:{current.line_number})")
                functions.append(function)
            else:
                logger.debug(
                    f"닫히지 않은 함수 폐기: {current.name} "
                    f"({module.filename}:{current.line_number})"
                )

        logger.info(f"모듈 스캔 완료: {module.label} (함수: {len(functions)}개)")
        return functions

    def _clean_name(self, line: str, module: Module, line_number: int) -> str:
        try:
            return self.name_cleaner.clean(line)
        except MalformedDeclarationError as e:
            raise e.with_location(module.filename, line_number) from e


def extract_functions(modules: Iterable[Module],
                      start_pattern=DEFAULT_START_PATTERN,
                      end_pattern=DEFAULT_END_PATTERN,
                      name_cleaner: Optional[NameCleaner] = None,
                      unterminated_policy: UnterminatedPolicy = UnterminatedPolicy.DROP) -> List[Function]:
    """FunctionExtractor 편의 함수"""
    extractor = FunctionExtractor(start_pattern, end_pattern, name_cleaner, unterminated_policy)
    return extractor.extract(modules)
