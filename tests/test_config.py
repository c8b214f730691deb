"""
설정 및 패턴 검증 테스트
"""
import pytest
import os
import sys

# 상위 디렉토리를 path에 추가
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fn_callgraph import (
    CallGraphConfig,
    ConfigurationError,
    ParenPrefixNameCleaner,
    RegexStripNameCleaner,
    UnterminatedPolicy,
)


class TestCallGraphConfig:

    def test_defaults_compile(self):
        compiled = CallGraphConfig().compile()

        assert compiled.start.search("pub fn main() {")
        assert compiled.end.search("}")
        assert not compiled.end.search("    }")
        assert compiled.ignore.search("anything") is None
        assert compiled.ignore.search("") is None
        assert isinstance(compiled.name_cleaner, RegexStripNameCleaner)
        assert compiled.unterminated_policy is UnterminatedPolicy.DROP

    def test_flush_and_paren_strategy(self):
        compiled = CallGraphConfig(flush_unterminated=True, name_strategy="paren").compile()

        assert compiled.unterminated_policy is UnterminatedPolicy.FLUSH
        assert isinstance(compiled.name_cleaner, ParenPrefixNameCleaner)

    @pytest.mark.parametrize("key", ["start", "end", "name_cleanup", "ignore"])
    def test_invalid_pattern_rejected(self, key):
        with pytest.raises(ConfigurationError) as exc_info:
            CallGraphConfig(**{key: "(unclosed"}).compile()

        assert key in str(exc_info.value)

    def test_empty_matching_cleanup_rejected(self):
        with pytest.raises(ConfigurationError):
            CallGraphConfig(name_cleanup=r"\s*").compile()

    def test_cleanup_validated_with_paren_strategy(self):
        with pytest.raises(ConfigurationError) as exc_info:
            CallGraphConfig(name_strategy="paren", name_cleanup="(").compile()

        assert "'name_cleanup'" in str(exc_info.value)

    def test_cleanup_with_empty_match_on_declaration_rejected(self):
        with pytest.raises(ConfigurationError):
            CallGraphConfig(name_cleanup=r"\b").compile()

    def test_unknown_strategy_rejected(self):
        with pytest.raises(ConfigurationError):
            CallGraphConfig(name_strategy="clang").compile()

    def test_merged_skips_none(self):
        config = CallGraphConfig(start=r"^def ").merged({"start": None, "end": r"^end$"})

        assert config.start == r"^def "
        assert config.end == r"^end$"


class TestConfigFromYaml:

    def test_load(self, tmp_path):
        path = tmp_path / "callgraph.yaml"
        path.write_text(
            'start: "^def "\n'
            'end: "^end$"\n'
            'name_strategy: paren\n'
            'flush_unterminated: true\n',
            encoding="utf-8",
        )
        config = CallGraphConfig.from_yaml(path)

        assert config.start == "^def "
        assert config.end == "^end$"
        assert config.name_strategy == "paren"
        assert config.flush_unterminated is True
        assert config.ignore == CallGraphConfig().ignore

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        assert CallGraphConfig.from_yaml(path) == CallGraphConfig()

    def test_unknown_key(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("begin: '^fn '\n", encoding="utf-8")

        with pytest.raises(ConfigurationError):
            CallGraphConfig.from_yaml(path)

    def test_wrong_type(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("flush_unterminated: 'yes please'\n", encoding="utf-8")

        with pytest.raises(ConfigurationError):
            CallGraphConfig.from_yaml(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("- start\n- end\n", encoding="utf-8")

        with pytest.raises(ConfigurationError):
            CallGraphConfig.from_yaml(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("start: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigurationError):
            CallGraphConfig.from_yaml(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            CallGraphConfig.from_yaml(tmp_path / "missing.yaml")
