"""Tests for component and stylesheet source generation."""

from __future__ import annotations

from mkcomp.templates import Effect, component_template, style_template


class TestComponentTemplate:
    def test_typescript(self) -> None:
        template = component_template(
            "Button", "label:string", "<button></button>", "tsx", "css", "mkcomp Button"
        )
        assert template.imports == (
            "// Generated by: mkcomp Button\n"
            "import React from 'react';\n"
            "import './Button.css';"
        )
        assert template.component == (
            "interface ButtonProps {\n"
            "  label: string;\n"
            "}\n"
            "\n"
            "const Button = (props: ButtonProps) => {\n"
            "  return (\n"
            "    <button></button>\n"
            "  );\n"
            "};\n"
            "\n"
            "export default Button;\n"
        )
        assert template.full_content == f"{template.imports}\n\n{template.component}"

    def test_javascript_prop_types(self) -> None:
        template = component_template("Card", "title:string", "<div></div>", "jsx", "scss")
        assert "import PropTypes from 'prop-types';" in template.imports
        assert "import './Card.scss';" in template.imports
        assert "const Card = (props) => {" in template.component
        assert "interface" not in template.component
        assert template.component.endswith(
            "\nCard.propTypes = {\n  title: PropTypes.string.isRequired,\n};\n"
            "\nexport default Card;\n"
        )

    def test_no_props(self) -> None:
        template = component_template("Box", "", "<div></div>", "tsx", "none")
        assert "const Box = () => {" in template.component
        assert template.imports == "import React from 'react';"

    def test_inline_styles_have_no_import(self) -> None:
        for style in ("tailwind", "styled", "none"):
            template = component_template("Box", "", "<div></div>", "tsx", style)
            assert "import './" not in template.imports

    def test_multiline_markup_indented(self) -> None:
        markup = "<div>\n  <p></p>\n</div>"
        template = component_template("Box", "", markup, "tsx", "none")
        assert "    <div>\n      <p></p>\n    </div>\n" in template.component

    def test_hooks_imports_and_effects(self) -> None:
        template = component_template(
            "Modal",
            "",
            "<div></div>",
            "tsx",
            "none",
            hooks=["useState", "useEffect"],
            imports=["import Portal from './Portal';"],
            effects=[Effect("isOpen", "document.body.focus()")],
        )
        assert template.imports == (
            "import React, { useState, useEffect } from 'react';\n"
            "import Portal from './Portal';"
        )
        assert (
            "  useEffect(() => {\n    document.body.focus();\n  }, [isOpen]);\n\n"
            in template.component
        )


class TestStyleTemplate:
    def test_css(self) -> None:
        assert style_template(["a"], ["m"], "css", "mkcomp Box") == (
            "/* Generated by: mkcomp Box */\n"
            "/* Generated styles */\n"
            "\n"
            ".a {\n  /* Add your styles here */\n}\n"
            "\n"
            "#m {\n  /* Add your styles here */\n}\n"
        )

    def test_scss(self) -> None:
        assert style_template(["a"], [], "scss") == (
            "// Generated styles\n\n.a {\n  // Add your styles here\n}\n"
        )

    def test_no_selectors(self) -> None:
        assert style_template([], [], "css") == "/* Generated styles */\n"

    def test_inline_styles_produce_nothing(self) -> None:
        assert style_template(["a"], [], "tailwind") == ""
        assert style_template(["a"], [], "styled") == ""
