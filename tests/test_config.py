"""Tests for engine configuration and the TOML config file."""

from __future__ import annotations

from pathlib import Path

import pytest

from mkcomp.cli import build_parser, engine_config, load_config, main, resolve_options
from mkcomp.config import DEFAULT_MAX_REPEAT, resolve_config, syntax_options


class TestResolveConfig:
    def test_html_defaults(self) -> None:
        config = resolve_config()
        assert config.syntax == "html"
        assert config.options.self_closing_style == "html"
        assert config.max_repeat == DEFAULT_MAX_REPEAT
        assert "btn:s" in config.snippets

    def test_jsx_options(self) -> None:
        options = resolve_config("tsx").options
        assert options.jsx_enabled
        assert options.self_closing_style == "xhtml"
        assert options.markup_attributes["class"] == "className"

    def test_explicit_options_beat_syntax(self) -> None:
        config = resolve_config("xhtml", options={"self_closing_style": "xml"})
        assert config.options.self_closing_style == "xml"

    def test_variables_layered(self) -> None:
        config = resolve_config(variables={"lang": "fr"})
        assert config.variables["lang"] == "fr"
        assert config.variables["charset"] == "UTF-8"

    @pytest.mark.parametrize("syntax", ["pug", "haml", "slim", "html"])
    def test_no_syntax_overrides(self, syntax: str) -> None:
        assert syntax_options(syntax) == {}

    def test_unknown_option(self) -> None:
        with pytest.raises(ValueError, match="unknown option"):
            resolve_config(options={"nope": 1})


class TestLoadConfig:
    def test_missing_config_returns_empty(self, tmp_path: Path) -> None:
        assert load_config(None, tmp_path) == {}

    def test_explicit_path(self, tmp_path: Path) -> None:
        cfg = tmp_path / "custom.toml"
        cfg.write_text('[defaults]\nstyle = "scss"\n')
        assert load_config(cfg, tmp_path)["defaults"] == {"style": "scss"}

    def test_auto_discover_mkcomp_toml(self, tmp_path: Path) -> None:
        (tmp_path / "mkcomp.toml").write_text('[defaults]\ntype = "jsx"\n')
        assert load_config(None, tmp_path)["defaults"] == {"type": "jsx"}


class TestEngineConfig:
    def test_output_table(self) -> None:
        config = engine_config({"output": {"attribute_quotes": "single"}}, "html")
        assert config.options.attribute_quotes == "single"
        assert config.options.indent == "  "

    def test_output_indent_overrides_default(self) -> None:
        assert engine_config({"output": {"indent": "    "}}, "jsx").options.indent == "    "

    def test_unknown_output_key(self) -> None:
        with pytest.raises(ValueError):
            engine_config({"output": {"colour": "red"}}, "html")

    def test_engine_table(self) -> None:
        config = engine_config({"engine": {"bem": True, "max_repeat": 5}}, "html")
        assert config.options.bem_enabled
        assert config.max_repeat == 5

    def test_snippets_and_variables(self) -> None:
        config = engine_config(
            {"snippets": {"card": "div.card>h2"}, "variables": {"lang": "de"}}, "html"
        )
        assert config.snippets["card"].value == "div.card>h2"
        assert config.variables["lang"] == "de"


class TestConfigMerge:
    def test_defaults_table(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        (tmp_path / "mkcomp.toml").write_text(
            '[defaults]\ntype = "jsx"\nstyle = "scss"\ndirectory = "ui"\n'
        )
        opts = resolve_options(build_parser().parse_args(["Box"]), ["Box"])
        assert opts.project_type == "jsx"
        assert opts.style == "scss"
        assert opts.directory == "ui"
        assert opts.directory_override is None

    def test_cli_overrides_defaults(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        (tmp_path / "mkcomp.toml").write_text('[defaults]\ntype = "jsx"\nstyle = "scss"\n')
        argv = ["Box", "--tsx", "-s", "none", "-d", "out"]
        opts = resolve_options(build_parser().parse_args(argv), argv)
        assert opts.project_type == "tsx"
        assert opts.style == "none"
        assert opts.directory_override == "out"

    def test_explicit_config_flag(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        cfg = tmp_path / "other.toml"
        cfg.write_text('[defaults]\nstyle = "tailwind"\n')
        argv = ["Box", "--config", str(cfg)]
        assert resolve_options(build_parser().parse_args(argv), argv).style == "tailwind"

    def test_user_snippet_used_for_expand(self, tmp_path: Path, monkeypatch, capsys) -> None:
        monkeypatch.chdir(tmp_path)
        (tmp_path / "mkcomp.toml").write_text('[snippets]\ncard = "div.card>h2"\n')
        assert main(["--expand", "card"]) == 0
        assert capsys.readouterr().out == '<div class="card">\n\t<h2></h2>\n</div>\n'

    def test_invalid_type_returns_2(self, tmp_path: Path, monkeypatch, capsys) -> None:
        monkeypatch.chdir(tmp_path)
        (tmp_path / "mkcomp.toml").write_text('[defaults]\ntype = "vue"\n')
        assert main(["Box"]) == 2
        assert "unknown component type: vue" in capsys.readouterr().err

    def test_unknown_output_key_returns_2(self, tmp_path: Path, monkeypatch, capsys) -> None:
        monkeypatch.chdir(tmp_path)
        (tmp_path / "mkcomp.toml").write_text('[output]\ncolour = "red"\n')
        assert main(["Box"]) == 2
        assert "unknown option(s): colour" in capsys.readouterr().err
