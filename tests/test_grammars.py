"""Test the comment grammar registry and user-defined grammars."""

from __future__ import annotations

import pytest

from native2ascii.errors import GrammarError, UnknownLanguageTag
from native2ascii.grammars import GRAMMARS, Delimiters, build_registry, get_grammar


class TestBuiltinGrammars:
    def test_registered_tags(self):
        assert set(GRAMMARS) == {"default", "python"}

    def test_default_is_c_style(self):
        g = GRAMMARS["default"]
        assert g.multi_line == Delimiters(starts=("/*",), ends=("*/",))
        assert g.single_line == Delimiters(starts=("//",), ends=("\n",))

    def test_python_triple_quotes_and_hash(self):
        g = GRAMMARS["python"]
        assert g.multi_line.starts == ("'''", '"""')
        assert g.multi_line.ends == ("'''", '"""')
        assert g.single_line.starts == ("#",)
        assert g.single_line.ends == ("\n",)

    def test_registry_is_read_only(self):
        with pytest.raises(TypeError):
            GRAMMARS["rust"] = GRAMMARS["default"]  # type: ignore[index]

    def test_grammar_is_frozen(self):
        with pytest.raises(AttributeError):
            GRAMMARS["default"].tag = "other"  # type: ignore[misc]


class TestGetGrammar:
    def test_known_tag(self):
        assert get_grammar("python").tag == "python"

    def test_unknown_tag_raises(self):
        with pytest.raises(UnknownLanguageTag) as exc_info:
            get_grammar("rust")
        err = exc_info.value
        assert err.tag == "rust"
        assert err.known == ("default", "python")

    def test_custom_registry(self):
        registry = build_registry({"sql": {"multi_line": {"starts": ["/*"], "ends": ["*/"]}, "single_line": {"starts": ["--"]}}})
        assert get_grammar("sql", registry).single_line.starts == ("--",)
        with pytest.raises(UnknownLanguageTag):
            get_grammar("sql")


class TestBuildRegistry:
    def test_no_extra_gives_builtins(self):
        assert set(build_registry()) == {"default", "python"}

    def test_single_line_ends_default_to_newline(self):
        registry = build_registry(
            {"sql": {"multi_line": {"starts": ["/*"], "ends": ["*/"]}, "single_line": {"starts": ["--"]}}}
        )
        assert registry["sql"].single_line.ends == ("\n",)
        assert registry["sql"].tag == "sql"

    def test_builtins_untouched(self):
        build_registry({"sql": {"multi_line": {"starts": ["/*"], "ends": ["*/"]}, "single_line": {"starts": ["--"]}}})
        assert "sql" not in GRAMMARS

    def test_user_grammar_replaces_builtin(self):
        registry = build_registry(
            {"default": {"multi_line": {"starts": ["{-"], "ends": ["-}"]}, "single_line": {"starts": ["--"]}}}
        )
        assert registry["default"].multi_line.starts == ("{-",)
        assert GRAMMARS["default"].multi_line.starts == ("/*",)

    def test_result_is_read_only(self):
        registry = build_registry()
        with pytest.raises(TypeError):
            registry["x"] = GRAMMARS["default"]  # type: ignore[index]


class TestGrammarErrors:
    def test_language_not_a_table(self):
        with pytest.raises(GrammarError, match="must be a table"):
            build_registry({"sql": "--"})

    def test_missing_multi_line(self):
        with pytest.raises(GrammarError, match="multi_line"):
            build_registry({"sql": {"single_line": {"starts": ["--"]}}})

    def test_missing_multi_line_ends(self):
        with pytest.raises(GrammarError, match="multi_line.ends"):
            build_registry({"sql": {"multi_line": {"starts": ["/*"]}, "single_line": {"starts": ["--"]}}})

    def test_empty_starts(self):
        with pytest.raises(GrammarError, match="must not be empty"):
            build_registry({"sql": {"multi_line": {"starts": [], "ends": ["*/"]}, "single_line": {"starts": ["--"]}}})

    def test_non_string_delimiter(self):
        with pytest.raises(GrammarError, match="non-empty strings"):
            build_registry({"sql": {"multi_line": {"starts": [1], "ends": ["*/"]}, "single_line": {"starts": ["--"]}}})

    def test_empty_string_delimiter(self):
        with pytest.raises(GrammarError):
            build_registry({"sql": {"multi_line": {"starts": [""], "ends": ["*/"]}, "single_line": {"starts": ["--"]}}})

    def test_error_carries_tag(self):
        with pytest.raises(GrammarError) as exc_info:
            build_registry({"sql": {}})
        assert exc_info.value.tag == "sql"

    def test_languages_not_a_table(self):
        with pytest.raises(GrammarError) as exc_info:
            build_registry(["sql"])
        assert exc_info.value.tag is None
        assert "[languages]" in exc_info.value.format()
