"""Tests for prop string parsing and declaration generation."""

from __future__ import annotations

from mkcomp.props import (
    ParsedProps,
    PropDefinition,
    generate_interface,
    generate_prop_types,
    generate_props,
    parse_props,
)


class TestParseProps:
    def test_types_and_optional(self) -> None:
        assert parse_props("title:string,count?:number") == [
            PropDefinition("title", "string"),
            PropDefinition("count", "number", True),
        ]

    def test_children_shorthand(self) -> None:
        assert parse_props("children") == [PropDefinition("children", "React.ReactNode", True)]

    def test_missing_type_is_any(self) -> None:
        assert parse_props("value") == [PropDefinition("value", "any")]

    def test_whitespace_and_empty_items(self) -> None:
        assert parse_props(" a : string , ,b:boolean ") == [
            PropDefinition("a", "string"),
            PropDefinition("b", "boolean"),
        ]

    def test_function_type(self) -> None:
        assert parse_props("onClick:()=>void")[0].type == "()=>void"


class TestInterface:
    def test_interface(self) -> None:
        props = parse_props("title:string,count?:number")
        assert generate_interface(props, "Button") == (
            "interface ButtonProps {\n  title: string;\n  count?: number;\n}"
        )

    def test_no_props(self) -> None:
        assert generate_interface([], "Button") == ""


class TestPropTypes:
    def test_required_and_optional(self) -> None:
        props = parse_props("title:string,count?:number,onClick:()=>void")
        assert generate_prop_types(props, "Button") == (
            "Button.propTypes = {\n"
            "  title: PropTypes.string.isRequired,\n"
            "  count: PropTypes.number,\n"
            "  onClick: PropTypes.func.isRequired,\n"
            "};"
        )

    def test_unknown_type(self) -> None:
        props = parse_props("data:object")
        assert "PropTypes.any.isRequired" in generate_prop_types(props, "Chart")

    def test_children_node(self) -> None:
        assert "children: PropTypes.node," in generate_prop_types(parse_props("children"), "Card")


def test_generate_props_empty() -> None:
    assert generate_props("", "Button") == ParsedProps("", "")


def test_generate_props_both_forms() -> None:
    parsed = generate_props("open:boolean", "Modal")
    assert parsed.interface.startswith("interface ModalProps {")
    assert parsed.prop_types == "Modal.propTypes = {\n  open: PropTypes.bool.isRequired,\n};"
