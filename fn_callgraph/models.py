"""
호출 그래프 데이터 모델 정의

Module, Function 및 결과 컨테이너 CallGraph 클래스를 정의합니다.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Tuple, Any

from .patterns import sanitize_identifier


def split_lines(text: str) -> List[str]:
    """
    '\\n' 기준으로만 라인을 나눕니다.

    str.splitlines()와 달리 폼피드(\\x0c) 등은 라인 구분자로 보지 않습니다.
    마지막 개행 뒤의 빈 조각은 버리고, 각 라인 끝의 '\\r'은 제거합니다.
    """
    lines = text.split('\n')
    if lines[-1] == '':
        lines.pop()
    return [line[:-1] if line.endswith('\r') else line for line in lines]


def count_lines(text: str) -> int:
    """텍스트의 라인 수 (빈 문자열은 0)"""
    return len(split_lines(text))


@dataclass(frozen=True)
class Module:
    """입력 파일 하나 (파일명 + 전체 소스)"""
    filename: str
    source: str

    @property
    def line_count(self) -> int:
        return count_lines(self.source)

    @property
    def label(self) -> str:
        return f"{self.filename}:{self.line_count}"

    @property
    def cluster_id(self) -> str:
        return sanitize_identifier(self.filename)

    def lines(self) -> List[str]:
        return split_lines(self.source)


@dataclass(frozen=True)
class Function:
    """
    추출된 함수 레코드

    body는 시작 라인부터 끝 라인까지(포함) 각 라인 뒤에 개행을 붙여 이어 붙인 원문입니다.
    렌더링 시 식별자는 이름이 아니라 label("<name>:<body_line_count>")입니다.
    """
    name: str
    body: str
    module: Module = field(repr=False)

    @property
    def body_line_count(self) -> int:
        return count_lines(self.body)

    @property
    def label(self) -> str:
        return f"{self.name}:{self.body_line_count}"

    @property
    def signature(self) -> str:
        """본문의 첫 라인 (선언 라인)"""
        return self.body.split('\n', 1)[0]

    @property
    def body_without_signature(self) -> str:
        """선언 라인을 제외한 본문 (호출 검사 대상)"""
        return self.body[len(self.signature) + 1:]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "label": self.label,
            "module": self.module.filename,
            "lines": self.body_line_count,
        }


Edge = Tuple[Function, Function]


@dataclass
class CallGraph:
    """호출 그래프 전체 구조 (모듈, 함수, 호출 엣지)"""
    modules: List[Module] = field(default_factory=list)
    functions: List[Function] = field(default_factory=list)
    edges: List[Edge] = field(default_factory=list)

    @property
    def distinct_modules(self) -> List[Module]:
        """파일명 기준 중복을 제거한 모듈 목록 (입력 순서 유지)"""
        seen = set()
        result = []
        for module in self.modules:
            if module.filename in seen:
                continue
            seen.add(module.filename)
            result.append(module)
        return result

    def functions_in(self, module: Module) -> List[Function]:
        """모듈(파일명 기준)에 속한 함수 목록"""
        return [f for f in self.functions if f.module.filename == module.filename]

    def total_lines(self, from_functions: bool = False) -> int:
        """
        총 코드 라인 수

        Args:
            from_functions: True면 함수 본문 라인 수의 합, False면 모듈 소스 라인 수의 합
        """
        if from_functions:
            return sum(f.body_line_count for f in self.functions)
        return sum(m.line_count for m in self.distinct_modules)

    def get_callees(self, func_name: str) -> List[str]:
        """특정 함수가 호출하는 함수 이름 목록 (중복 제거, 등장 순서 유지)"""
        result = []
        for caller, callee in self.edges:
            if caller.name == func_name and callee.name not in result:
                result.append(callee.name)
        return result

    def get_callers(self, func_name: str) -> List[str]:
        """특정 함수를 호출하는 함수 이름 목록 (중복 제거, 등장 순서 유지)"""
        result = []
        for caller, callee in self.edges:
            if callee.name == func_name and caller.name not in result:
                result.append(caller.name)
        return result

    def get_call_chain(self, func_name: str, max_depth: int = 10) -> Dict:
        """
        함수의 호출 체인을 반환합니다.

        Args:
            func_name: 시작 함수명
            max_depth: 최대 탐색 깊이

        Returns:
            호출 체인 트리 구조 ({"name": ..., "calls": [...]})
        """
        visited = set()

        def _build_chain(name: str, depth: int) -> Dict:
            if depth > max_depth or name in visited:
                return {"name": name, "calls": [], "truncated": depth > max_depth}

            visited.add(name)
            return {
                "name": name,
                "calls": [_build_chain(c, depth + 1) for c in self.get_callees(name)]
            }

        return _build_chain(func_name, 0)

    def to_dict(self) -> Dict[str, Any]:
        """딕셔너리로 변환"""
        return {
            "modules": [
                {
                    "filename": m.filename,
                    "label": m.label,
                    "lines": m.line_count,
                    "functions": [f.label for f in self.functions_in(m)],
                }
                for m in self.distinct_modules
            ],
            "functions": [f.to_dict() for f in self.functions],
            "edges": [
                {"source": caller.label, "target": callee.label}
                for caller, callee in self.edges
            ],
            "summary": {
                "total_modules": len(self.distinct_modules),
                "total_functions": len(self.functions),
                "total_edges": len(self.edges),
                "total_lines": self.total_lines(),
            }
        }

    def summary(self) -> str:
        """호출 그래프 요약 정보 반환"""
        lines = ["=" * 50]
        lines.append("Call Graph Summary")
        lines.append("=" * 50)
        lines.append(f"모듈 수: {len(self.distinct_modules)}")
        lines.append(f"함수 수: {len(self.functions)}")
        lines.append(f"호출 엣지 수: {len(self.edges)}")
        lines.append(f"총 라인 수: {self.total_lines()}")
        lines.append("")

        lines.append("모듈별 함수 수:")
        for module in self.distinct_modules:
            lines.append(f"  - {module.label}: {len(self.functions_in(module))}")

        lines.append("=" * 50)
        return "\n".join(lines)
