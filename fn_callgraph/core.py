"""
호출 그래프 생성 통합 모듈

파일 로드 -> 함수 추출 -> 무시 필터 -> 호출 엣지 생성 -> 렌더링을 차례로 수행합니다.
패턴 검증은 파일을 읽기 전에 끝나므로 설정 오류 시에는 아무 파일도 읽지 않습니다.
"""

from typing import List, Iterable, Optional

from shared_config.logger import logger, LogStage

from .call_graph import CallGraphBuilder
from .config import CallGraphConfig
from .file_handler import load_modules
from .models import CallGraph, Function, Module
from .renderer import DotRenderer, render_json


class CallGraphGenerator:
    """호출 그래프 생성기"""

    OUTPUT_FORMATS = ("dot", "json")

    def __init__(self, config: Optional[CallGraphConfig] = None):
        """
        Args:
            config: 생성기 설정 (None이면 기본값)

        Raises:
            ConfigurationError: 설정의 패턴이 올바르지 않은 경우
        """
        self.config = config or CallGraphConfig()
        self.compiled = self.config.compile()
        self.extractor = self.compiled.create_extractor()

    def filter_ignored(self, functions: List[Function]) -> List[Function]:
        """무시 패턴에 매칭되는 이름의 함수를 제외합니다."""
        kept = []
        for function in functions:
            if self.compiled.ignore.search(function.name):
                logger.debug(f"함수 제외: {function.label} ({function.module.filename})")
                continue
            kept.append(function)
        return kept

    def build_from_modules(self, modules: Iterable[Module]) -> CallGraph:
        """이미 로드된 모듈로 CallGraph를 생성합니다."""
        modules = list(modules)

        with LogStage("함수 추출", modules=len(modules)):
            functions = self.extractor.extract(modules)
            functions = self.filter_ignored(functions)

        with LogStage("호출 엣지 생성", functions=len(functions)):
            graph = CallGraphBuilder().build(modules, functions)

        return graph

    def build_from_files(self, paths: Iterable) -> CallGraph:
        """파일 경로 목록으로 CallGraph를 생성합니다."""
        paths = list(paths)
        with LogStage("파일 로드", files=len(paths)):
            modules = load_modules(paths)
        return self.build_from_modules(modules)

    def render(self, graph: CallGraph, output_format: str = "dot") -> str:
        """CallGraph를 지정한 형식의 텍스트로 변환합니다."""
        if output_format == "json":
            return render_json(graph)
        return DotRenderer(loc_from_functions=self.config.loc_from_functions).render(graph)

    def generate(self, paths: Iterable, output_format: str = "dot") -> str:
        """파일 경로 목록에서 최종 그래프 텍스트를 생성합니다."""
        graph = self.build_from_files(paths)
        logger.debug("\n" + graph.summary())
        return self.render(graph, output_format)


def generate_callgraph(paths: Iterable, config: Optional[CallGraphConfig] = None,
                       output_format: str = "dot") -> str:
    """CallGraphGenerator 편의 함수"""
    return CallGraphGenerator(config).generate(paths, output_format)
