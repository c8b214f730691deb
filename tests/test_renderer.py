"""
DOT/JSON 렌더러 및 CallGraph 모델 테스트
"""
import json
import pytest
import os
import sys

# 상위 디렉토리를 path에 추가
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fn_callgraph import (
    Module,
    Function,
    CallGraph,
    CallGraphConfig,
    CallGraphGenerator,
    DotRenderer,
    render,
    render_json,
)
from fn_callgraph.renderer import quote


HELPER_MAIN = "fn helper() {\nreturn 1;\n}\nfn main() {\nhelper();\n}\n"


def legend_row(title, value):
    return f'<tr><td align="left">{title}</td><td align="right">{value}</td></tr>'


def build(*modules, **config):
    generator = CallGraphGenerator(CallGraphConfig(**config))
    return generator.build_from_modules(list(modules))


class TestModels:

    def test_module_derived_values(self):
        module = Module("src/main-1.rs", "a\nb\nc\n")

        assert module.line_count == 3
        assert module.label == "src/main-1.rs:3"
        assert module.cluster_id == "src_main_1_rs"

    def test_empty_module(self):
        module = Module("empty.rs", "")

        assert module.line_count == 0
        assert module.label == "empty.rs:0"

    def test_form_feed_is_not_a_line_break(self):
        module = Module("ff.rs", "fn a() {\n\x0c\n}\n")
        graph = build(module)

        assert module.line_count == 3
        assert module.label == "ff.rs:3"
        assert [f.label for f in graph.functions] == ["a:3"]
        assert '    label="ff.rs:3";\n' in DotRenderer().render(graph)

    def test_other_unicode_separators_kept_in_line(self):
        module = Module("sep.rs", "a\x0bb\x1cc\x85d e\n")

        assert module.line_count == 1
        assert module.lines() == ["a\x0bb\x1cc\x85d e"]

    def test_crlf_line_endings(self):
        module = Module("win.rs", "fn a() {\r\n}\r\n")

        assert module.lines() == ["fn a() {", "}"]
        assert [f.label for f in build(module).functions] == ["a:2"]

    def test_missing_final_newline(self):
        assert Module("m.rs", "a\nb").line_count == 2

    def test_function_signature_split(self):
        graph = build(Module("m.rs", HELPER_MAIN))
        helper = graph.functions[0]

        assert helper.signature == "fn helper() {"
        assert helper.body_without_signature == "return 1;\n}\n"

    def test_signature_only_body(self):
        function = Function("a", "fn a() {}\n", Module("m.rs", "fn a() {}\n"))

        assert function.signature == "fn a() {}"
        assert function.body_without_signature == ""

    def test_queries(self):
        source = "fn c() {\n}\nfn b() {\nc();\n}\nfn a() {\nb();\nc();\n}\n"
        graph = build(Module("m.rs", source))

        assert graph.get_callees("a") == ["c", "b"]
        assert graph.get_callers("c") == ["b", "a"]
        assert graph.get_call_chain("a") == {
            "name": "a",
            "calls": [
                {"name": "c", "calls": []},
                {"name": "b", "calls": [{"name": "c", "calls": [], "truncated": False}]},
            ],
        }

    def test_summary_text(self):
        summary = build(Module("main.rs", HELPER_MAIN)).summary()

        assert "함수 수: 2" in summary
        assert "main.rs:6: 2" in summary


class TestDotRenderer:

    @pytest.fixture
    def dot(self):
        return DotRenderer().render(build(Module("main.rs", HELPER_MAIN)))

    def test_helper_main_scenario(self, dot):
        assert dot == (
            'strict digraph {\n'
            '  graph [rankdir=LR];\n'
            '  node [shape=box, style=filled, fillcolor="#ffffff"];\n'
            '  legend [shape=plaintext, label=<<table border="0" cellborder="1" cellspacing="0">'
            + legend_row("Modules", 1)
            + legend_row("Functions", 2)
            + legend_row("Lines of code", 6)
            + '</table>>];\n'
            '  subgraph cluster_main_rs {\n'
            '    label="main.rs:6";\n'
            '    bgcolor="#eeeeee";\n'
            '    "helper:3";\n'
            '    "main:3";\n'
            '  }\n'
            '  "main:3" -> "helper:3";\n'
            '}\n'
        )

    def test_section_order(self, dot):
        assert dot.index("legend") < dot.index("subgraph") < dot.index("->")

    def test_empty_file(self):
        dot = DotRenderer().render(build(Module("empty.rs", "")))

        assert dot.count("subgraph cluster_") == 1
        assert '    label="empty.rs:0";\n    bgcolor="#eeeeee";\n  }\n' in dot
        assert legend_row("Modules", 1) in dot
        assert legend_row("Functions", 0) in dot
        assert legend_row("Lines of code", 0) in dot
        assert "->" not in dot

    def test_same_name_in_two_modules(self):
        graph = build(
            Module("a.rs", "fn run() {\n}\n"),
            Module("b.rs", "fn run() {\nlet x = 1;\n}\n"),
        )
        dot = DotRenderer().render(graph)

        assert dot.count("subgraph cluster_") == 2
        assert "subgraph cluster_a_rs {" in dot
        assert "subgraph cluster_b_rs {" in dot
        assert '"run:2";' in dot
        assert '"run:3";' in dot

    def test_duplicate_filenames_form_one_cluster(self):
        module = Module("a.rs", "fn run() {\n}\n")
        graph = CallGraph(modules=[module, Module("a.rs", "")], functions=[], edges=[])
        dot = DotRenderer().render(graph)

        assert dot.count("subgraph cluster_") == 1
        assert legend_row("Modules", 1) in dot

    def test_colliding_cluster_ids_are_suffixed(self):
        graph = build(Module("a.rs", ""), Module("a_rs", ""))
        dot = DotRenderer().render(graph)

        assert "subgraph cluster_a_rs {" in dot
        assert "subgraph cluster_a_rs_2 {" in dot

    def test_same_label_in_one_module_is_one_node(self):
        graph = build(Module("m.rs", "fn run() {\n}\nfn run() {\n}\n"))
        dot = DotRenderer().render(graph)

        assert len(graph.functions) == 2
        assert dot.count('    "run:2";') == 1
        assert legend_row("Functions", 2) in dot

    def test_loc_from_functions(self):
        source = "// header\n\nfn helper() {\n}\n"
        graph = build(Module("m.rs", source))

        assert legend_row("Lines of code", 4) in DotRenderer().render(graph)
        assert legend_row("Lines of code", 2) in DotRenderer(loc_from_functions=True).render(graph)

    def test_labels_with_quotes_escaped(self):
        graph = CallGraph(modules=[Module('we"ird\\.rs', "")])
        dot = DotRenderer().render(graph)

        assert 'label="we\\"ird\\\\.rs:0";' in dot
        assert "subgraph cluster_we_ird__rs {" in dot

    def test_ignored_functions_absent(self):
        graph = build(Module("main.rs", HELPER_MAIN), ignore=r"^helper$")
        dot = DotRenderer().render(graph)

        assert "helper" not in dot
        assert '"main:3";' in dot
        assert "->" not in dot
        assert legend_row("Functions", 1) in dot

    def test_render_from_lists(self):
        graph = build(Module("main.rs", HELPER_MAIN))
        dot = render(graph.modules, graph.functions)

        assert dot == DotRenderer().render(graph)

    def test_deterministic(self):
        modules = [Module("a.rs", HELPER_MAIN), Module("b.rs", "fn run() {\nmain();\n}\n")]

        assert DotRenderer().render(build(*modules)) == DotRenderer().render(build(*modules))


class TestQuote:

    def test_plain(self):
        assert quote("main:3") == '"main:3"'

    def test_escapes(self):
        assert quote('a"b\\c') == '"a\\"b\\\\c"'


class TestJsonRenderer:

    def test_helper_main(self):
        data = json.loads(render_json(build(Module("main.rs", HELPER_MAIN))))

        assert data["summary"] == {
            "total_modules": 1,
            "total_functions": 2,
            "total_edges": 1,
            "total_lines": 6,
        }
        assert data["edges"] == [{"source": "main:3", "target": "helper:3"}]
        assert data["modules"][0]["functions"] == ["helper:3", "main:3"]
        assert data["functions"][0] == {"name": "helper", "label": "helper:3", "module": "main.rs", "lines": 3}
