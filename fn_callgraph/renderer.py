"""
호출 그래프 출력 모듈

CallGraph를 Graphviz DOT(모듈별 클러스터 + 범례 + 호출 엣지) 또는 JSON으로 변환합니다.
"""

import json
from typing import List, Dict, Optional

from .call_graph import CallGraphBuilder
from .models import CallGraph, Module, Function, Edge

# 기본 스타일
GRAPH_ATTRIBUTES = 'graph [rankdir=LR];'
NODE_ATTRIBUTES = 'node [shape=box, style=filled, fillcolor="#ffffff"];'
CLUSTER_BGCOLOR = "#eeeeee"


def quote(text: str) -> str:
    """DOT 문자열 리터럴로 감쌉니다 (역슬래시와 큰따옴표 이스케이프)."""
    escaped = text.replace('\\', '\\\\').replace('"', '\\"')
    return f'"{escaped}"'


def html_escape(text: str) -> str:
    """HTML 형식 라벨용 이스케이프"""
    return (text.replace('&', '&amp;')
                .replace('<', '&lt;')
                .replace('>', '&gt;')
                .replace('"', '&quot;'))


class DotRenderer:
    """Graphviz DOT 렌더러"""

    def __init__(self, loc_from_functions: bool = False, indent: str = "  "):
        """
        Args:
            loc_from_functions: True면 범례의 라인 수를 함수 본문 라인 수 합으로 계산
                                (기본: 모듈 소스 라인 수 합)
            indent: 들여쓰기 문자열
        """
        self.loc_from_functions = loc_from_functions
        self.indent = indent

    def render(self, graph: CallGraph) -> str:
        """범례 -> 클러스터 -> 엣지 순서로 DOT 텍스트를 생성합니다."""
        lines = ['strict digraph {']
        lines.append(self.indent + GRAPH_ATTRIBUTES)
        lines.append(self.indent + NODE_ATTRIBUTES)
        lines.append(self.indent + self.render_legend(graph))

        for cluster_id, module in self.cluster_ids(graph.distinct_modules).items():
            lines.extend(self.render_cluster(cluster_id, module, graph))

        for caller, callee in graph.edges:
            lines.append(f'{self.indent}{quote(caller.label)} -> {quote(callee.label)};')

        lines.append('}')
        return '\n'.join(lines) + '\n'

    def render_legend(self, graph: CallGraph) -> str:
        """모듈 수, 함수 수, 총 라인 수를 담은 범례 노드"""
        rows = [
            ("Modules", len(graph.distinct_modules)),
            ("Functions", len(graph.functions)),
            ("Lines of code", graph.total_lines(from_functions=self.loc_from_functions)),
        ]
        cells = "".join(
            f'<tr><td align="left">{html_escape(title)}</td><td align="right">{value}</td></tr>'
            for title, value in rows
        )
        table = f'<table border="0" cellborder="1" cellspacing="0">{cells}</table>'
        return f'legend [shape=plaintext, label=<{table}>];'

    def render_cluster(self, cluster_id: str, module: Module, graph: CallGraph) -> List[str]:
        """모듈 하나의 서브그래프 클러스터"""
        inner = self.indent * 2
        lines = [f'{self.indent}subgraph cluster_{cluster_id} {{']
        lines.append(f'{inner}label={quote(module.label)};')
        lines.append(f'{inner}bgcolor={quote(CLUSTER_BGCOLOR)};')

        # 같은 라벨은 하나의 노드로 합쳐짐
        seen = set()
        for function in graph.functions_in(module):
            if function.label in seen:
                continue
            seen.add(function.label)
            lines.append(f'{inner}{quote(function.label)};')

        lines.append(f'{self.indent}}}')
        return lines

    @staticmethod
    def cluster_ids(modules: List[Module]) -> Dict[str, Module]:
        """
        모듈별 클러스터 ID를 만듭니다 (입력 순서 유지).

        치환 후 ID가 겹치면 뒤의 모듈에 _2, _3 ... 접미사를 붙입니다.
        """
        result = {}
        for module in modules:
            cluster_id = module.cluster_id
            suffix = 2
            while cluster_id in result:
                cluster_id = f"{module.cluster_id}_{suffix}"
                suffix += 1
            result[cluster_id] = module
        return result


def render_dot(graph: CallGraph, loc_from_functions: bool = False) -> str:
    """DotRenderer 편의 함수"""
    return DotRenderer(loc_from_functions=loc_from_functions).render(graph)


def render(modules: List[Module], functions: List[Function],
           edges: Optional[List[Edge]] = None, loc_from_functions: bool = False) -> str:
    """
    모듈/함수 목록에서 바로 DOT 텍스트를 생성합니다.

    edges가 None이면 CallGraphBuilder로 계산합니다.
    """
    if edges is None:
        edges = CallGraphBuilder().build_edges(functions)
    graph = CallGraph(modules=list(modules), functions=list(functions), edges=list(edges))
    return render_dot(graph, loc_from_functions=loc_from_functions)


def render_json(graph: CallGraph, indent: int = 2) -> str:
    """CallGraph를 JSON 문자열로 변환합니다."""
    return json.dumps(graph.to_dict(), ensure_ascii=False, indent=indent) + '\n'
