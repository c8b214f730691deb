"""
fn_callgraph - 휴리스틱 함수 호출 그래프 생성기

소스 파일을 시작/끝 정규식 패턴으로 함수 단위로 자르고, 함수 본문에
다른 함수 이름이 "name(" 형태로 나오면 호출 관계로 간주하여
모듈별 클러스터를 가진 Graphviz DOT 그래프를 생성합니다.

주요 클래스:
- CallGraphGenerator: 로드/추출/엣지 생성/렌더링 통합
- FunctionExtractor: 라인 기반 함수 추출기
- CallGraphBuilder: 호출 엣지 생성기
- DotRenderer: DOT 출력

Example:
    from fn_callgraph import CallGraphGenerator, CallGraphConfig

    generator = CallGraphGenerator(CallGraphConfig(ignore=r'^test_'))
    print(generator.generate(["src/main.rs", "src/lib.rs"]))
"""

from .models import Module, Function, CallGraph
from .exceptions import (
    CallGraphError,
    ConfigurationError,
    ModuleReadError,
    MalformedDeclarationError,
)
from .name_cleaner import (
    NameCleaner,
    RegexStripNameCleaner,
    ParenPrefixNameCleaner,
    create_name_cleaner,
)
from .extractor import FunctionExtractor, UnterminatedPolicy, extract_functions
from .call_graph import CallGraphBuilder, build_edges
from .renderer import DotRenderer, render, render_dot, render_json
from .config import CallGraphConfig, CompiledPatterns
from .file_handler import load_module, load_modules
from .core import CallGraphGenerator, generate_callgraph

__all__ = [
    # 데이터 모델
    "Module",
    "Function",
    "CallGraph",

    # 예외
    "CallGraphError",
    "ConfigurationError",
    "ModuleReadError",
    "MalformedDeclarationError",

    # 이름 정리
    "NameCleaner",
    "RegexStripNameCleaner",
    "ParenPrefixNameCleaner",
    "create_name_cleaner",

    # 추출 / 엣지 / 렌더링
    "FunctionExtractor",
    "UnterminatedPolicy",
    "extract_functions",
    "CallGraphBuilder",
    "build_edges",
    "DotRenderer",
    "render",
    "render_dot",
    "render_json",

    # 설정 / 파일
    "CallGraphConfig",
    "CompiledPatterns",
    "load_module",
    "load_modules",

    # 통합
    "CallGraphGenerator",
    "generate_callgraph",
]
