"""
함수 호출 그래프 추출 모듈

추출된 함수의 모든 (호출자, 피호출자) 쌍에 대해 호출자 본문에
"피호출자 이름(" 이 단어 단위로 등장하는지 검사하여 호출 엣지를 만듭니다.
"""

import re
from typing import List, Dict, Iterable

from shared_config.logger import logger

from .models import CallGraph, Function, Module, Edge
from .patterns import call_pattern_for


class CallGraphBuilder:
    """함수 호출 그래프 빌더"""

    def __init__(self):
        # 호출 감지 패턴 캐시: {함수명: 컴파일된 패턴}
        self._call_patterns: Dict[str, re.Pattern] = {}

    def _pattern_for(self, name: str):
        pattern = self._call_patterns.get(name)
        if pattern is None:
            pattern = call_pattern_for(name)
            self._call_patterns[name] = pattern
        return pattern

    def calls_in_body(self, caller: Function, callee: Function) -> bool:
        """
        caller 본문(선언 라인 제외)에 callee 호출이 있는지 확인합니다.

        같은 이름이 여러 번 나와도 존재 여부만 봅니다.
        """
        return self._pattern_for(callee.name).search(caller.body_without_signature) is not None

    def build_edges(self, functions: List[Function]) -> List[Edge]:
        """
        모든 순서쌍을 검사하여 호출 엣지를 생성합니다.

        엣지 순서: 호출자의 추출 순서, 같은 호출자 안에서는 피호출자의 추출 순서.

        Returns:
            (caller, callee) 튜플 목록
        """
        # 이름별 패턴을 먼저 컴파일 (O(F) 컴파일, O(F^2) 검색)
        for callee in functions:
            self._pattern_for(callee.name)

        edges = []
        for caller in functions:
            text = caller.body_without_signature
            for callee in functions:
                if self._call_patterns[callee.name].search(text):
                    edges.append((caller, callee))

        logger.info(f"호출 엣지 {len(edges)}개 생성 (함수: {len(functions)}개)")
        return edges

    def build(self, modules: Iterable[Module], functions: List[Function]) -> CallGraph:
        """모듈/함수 목록으로 CallGraph를 생성합니다."""
        return CallGraph(
            modules=list(modules),
            functions=list(functions),
            edges=self.build_edges(functions),
        )


def build_edges(functions: List[Function]) -> List[Edge]:
    """CallGraphBuilder 편의 함수"""
    return CallGraphBuilder().build_edges(functions)
