"""Tests for the component preprocessing pipeline."""

import logging

import pytest

from stylescope import Preprocessor, PreprocessConfig
from stylescope.errors import PreprocessError
from stylescope.model import Severity
from stylescope.preprocess import prepare_content, strip_indent
from stylescope.selector import ParseError


def process(source: str, **config) -> str:
    return Preprocessor(PreprocessConfig(**config)).process(source).code


# ---------------------------------------------------------------------------
# Content preparation
# ---------------------------------------------------------------------------


class TestPrepareContent:
    def test_strip_indent(self):
        assert strip_indent("  a\n    b\n") == "a\n  b\n"

    def test_strip_indent_ignores_blank_lines(self):
        assert strip_indent("\n    a\n\n    b") == "\na\n\nb"

    def test_strip_indent_noop(self):
        assert strip_indent("a\n  b") == "a\n  b"

    def test_prepend_data(self):
        config = PreprocessConfig(prepend_data="/* x */")
        assert prepare_content("a{}", config) == "/* x */\na{}"

    def test_defaults_leave_content_alone(self):
        assert prepare_content("  a{}", PreprocessConfig()) == "  a{}"


# ---------------------------------------------------------------------------
# Style blocks
# ---------------------------------------------------------------------------


class TestStyle:
    def test_bare_global(self):
        result = Preprocessor().style(":global div{color:red}:global .test{}")
        assert result.code == ":global(div){color:red}:global(.test){}"
        assert result.dependencies == ()
        assert result.diagnostics == ()

    def test_global_attribute(self):
        result = Preprocessor().style("div{}", {"global": True})
        assert result.code == ":global(div){}"

    def test_global_rule_disabled(self):
        config = PreprocessConfig(global_rule=False)
        assert Preprocessor(config).style(":global div{}").code == ":global div{}"

    def test_global_style_disabled(self):
        config = PreprocessConfig(global_style=False)
        assert Preprocessor(config).style("div{}", {"global": True}).code == "div{}"

    def test_prepend_before_rewrite(self):
        config = PreprocessConfig(prepend_data=":global .reset{}")
        assert Preprocessor(config).style(".a{}").code == ":global(.reset){}\n.a{}"

    def test_postcss_is_plain_css(self):
        assert Preprocessor().style(".a{}", {"lang": "postcss"}).code == ".a{}"

    def test_unsupported_language(self):
        with pytest.raises(PreprocessError) as exc_info:
            Preprocessor().style("a{}", {"lang": "stylus"})
        assert str(exc_info.value).startswith("[stylescope] ")

    def test_scss_without_libsass(self, monkeypatch):
        from stylescope import deps

        monkeypatch.setitem(deps._cached_result, "sass", False)
        with pytest.raises(PreprocessError, match="libsass"):
            Preprocessor().style("$c: red;", {"lang": "scss"})

    def test_scss_then_global(self):
        pytest.importorskip("sass")
        result = Preprocessor().style("$c: red;\n.a { color: $c; }", {"lang": "scss", "global": True})
        assert ":global(.a)" in result.code
        assert "color: red" in result.code

    def test_diagnostics_surface(self):
        result = Preprocessor().style(".a >{}", {"global": True})
        (diag,) = result.diagnostics
        assert diag.severity is Severity.WARNING

    def test_strict(self):
        with pytest.raises(ParseError):
            Preprocessor(PreprocessConfig(strict=True)).style(".a >{}", {"global": True})


class TestSrcAttribute:
    def test_loads_local_file(self, tmp_path):
        component = tmp_path / "App.svelte"
        stylesheet = tmp_path / "style.css"
        stylesheet.write_text(":global .x{}", encoding="utf-8")

        result = Preprocessor().style("", {"src": "./style.css"}, str(component))
        assert result.code == ":global(.x){}"
        assert result.dependencies == (str(stylesheet.resolve()),)

    def test_inline_content_wins(self, tmp_path):
        (tmp_path / "style.css").write_text(".x{}", encoding="utf-8")
        result = Preprocessor().style(".y{}", {"src": "./style.css"}, str(tmp_path / "App.svelte"))
        assert result.code == ".y{}"
        assert result.dependencies == ()

    def test_missing_file_warns(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING, logger="stylescope.preprocess"):
            result = Preprocessor().style("", {"src": "./nope.css"}, str(tmp_path / "App.svelte"))
        assert result.code == ""
        assert result.dependencies == ()
        assert "was not found" in caplog.text

    def test_remote_src_ignored(self):
        result = Preprocessor().style("", {"src": "https://example.com/a.css"})
        assert result.code == ""
        assert result.dependencies == ()

    def test_src_extension_picks_language(self, tmp_path):
        (tmp_path / "style.styl").write_text("a\n  color red", encoding="utf-8")
        with pytest.raises(PreprocessError, match="styl"):
            Preprocessor().style("", {"src": "./style.styl"}, str(tmp_path / "App.svelte"))


# ---------------------------------------------------------------------------
# Markup and whole files
# ---------------------------------------------------------------------------


class TestMarkup:
    def test_unwraps_template(self):
        assert Preprocessor().markup("<template><p>hi</p></template>").code == "<p>hi</p>"

    def test_replace_runs_first(self):
        config = PreprocessConfig(replace=(("foo", "bar"),))
        assert Preprocessor(config).markup("<p>foo</p>").code == "<p>bar</p>"

    def test_custom_markup_tag(self):
        config = PreprocessConfig(markup_tag_name="markup")
        assert Preprocessor(config).markup("<markup>x</markup>").code == "x"


class TestProcess:
    def test_bare_global_in_component(self):
        source = "<div/><style>:global div{color:red}:global .test{}</style>"
        assert process(source) == "<div/><style>:global(div){color:red}:global(.test){}</style>"

    def test_global_attribute_in_component(self):
        source = "<style global>div{color:red}.test{}</style>"
        assert process(source) == "<style global>:global(div){color:red}:global(.test){}</style>"

    def test_removes_lone_global_rules(self):
        source = "<style>:global{/*comment*/}:global,div{/*comment*/}</style>"
        assert process(source) == "<style>div{/*comment*/}</style>"

    def test_global_keyframes(self):
        source = (
            "<style global>\n@keyframes a {from{} to{}}@keyframes -global-b {from{} to{}}\n</style>"
        )
        assert process(source) == (
            "<style global>\n@keyframes -global-a {from{} to{}}@keyframes -global-b {from{} to{}}\n</style>"
        )

    def test_template_and_style(self):
        source = "<template><p>hi</p></template><style>:global p{}</style>"
        assert process(source) == "<p>hi</p><style>:global(p){}</style>"

    def test_style_in_comment_untouched(self):
        source = "<!-- <style>:global a{}</style> --><style>:global b{}</style>"
        assert process(source) == "<!-- <style>:global a{}</style> --><style>:global(b){}</style>"

    def test_strip_indent(self):
        source = "<style>\n    :global .a {}\n</style>"
        assert process(source, strip_indent=True) == "<style>\n:global(.a) {}\n</style>"

    def test_collects_dependencies_once(self, tmp_path):
        (tmp_path / "a.css").write_text(".a{}", encoding="utf-8")
        component = tmp_path / "App.svelte"
        source = '<style src="./a.css"></style><style src="./a.css" global></style>'

        result = Preprocessor().process(source, str(component))
        assert result.code == (
            '<style src="./a.css">.a{}</style><style src="./a.css" global>:global(.a){}</style>'
        )
        assert result.dependencies == (str((tmp_path / "a.css").resolve()),)

    def test_collects_diagnostics(self):
        result = Preprocessor().process("<style global>.a >{}</style><style global>.b >{}</style>")
        assert len(result.diagnostics) == 2
