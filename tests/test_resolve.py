"""Tests for snippet lookup and resolution."""

from __future__ import annotations

import logging

from conftest import attr, attr_value, names
from mkcomp.config import resolve_config
from mkcomp.convert import parse_abbreviation
from mkcomp.resolve import resolve_snippets
from mkcomp.snippets import Snippet, load_snippets, snippets_for


def resolved(source: str, **kwargs):
    config = resolve_config("html", **kwargs)
    return resolve_snippets(parse_abbreviation(source, config), config)


class TestSnippetTables:
    def test_aliases_expand(self) -> None:
        table = load_snippets({"a|b": "div"})
        assert table == {"a": Snippet("a", "div"), "b": Snippet("b", "div")}

    def test_html_table(self) -> None:
        table = snippets_for("html")
        assert table["btn:s"].value == "button[type=submit]"
        assert table["button:submit"].value == "button[type=submit]"

    def test_xml_has_no_snippets(self) -> None:
        assert snippets_for("xml") == {}

    def test_tables_are_fresh_copies(self) -> None:
        snippets_for("html").clear()
        assert snippets_for("html")

    def test_user_snippets_override_builtins(self) -> None:
        config = resolve_config("html", snippets={"btn": "button.primary"})
        assert config.snippets["btn"].value == "button.primary"


class TestResolution:
    def test_builtin_snippet(self) -> None:
        node = resolved("input").children[0]
        assert node.name == "input"
        assert node.self_closing
        assert attr_value(node, "type") == "text"

    def test_plain_element_untouched(self) -> None:
        abbr = resolved("div>span")
        assert names(abbr.children) == ["div"]
        assert names(abbr.children[0].children) == ["span"]

    def test_nested_snippet(self) -> None:
        node = resolved("input:email").children[0]
        assert node.name == "input"
        types = [a.value for a in node.attributes if a.name == "type"]
        # Outer declaration comes last so it wins when attributes are merged
        assert types[-1] == ["email"]
        assert [a.name for a in node.attributes] == ["type", "name", "id", "type"]

    def test_children_go_to_deepest_node(self) -> None:
        abbr = resolved("x>span", snippets={"x": "div>p"})
        div = abbr.children[0]
        p = div.children[0]
        assert names(p.children) == ["span"]

    def test_children_go_into_body(self) -> None:
        abbr = resolved("!>p")
        html = abbr.children[-1]
        body = html.children[-1]
        assert body.name == "body"
        assert names(body.children) == ["p"]

    def test_attributes_merge_into_first_node(self) -> None:
        abbr = resolved("x.foo", snippets={"x": "div+p"})
        div, p = abbr.children
        assert attr_value(div, "class") == "foo"
        assert p.attributes is None

    def test_repeat_carried_over(self) -> None:
        abbr = resolved("x*2", snippets={"x": "div.a"})
        assert names(abbr.children) == ["div", "div"]
        assert [n.repeat.value for n in abbr.children] == [0, 1]

    def test_attribute_order(self) -> None:
        node = resolved("btn:b[type=reset]").children[0]
        assert [a.name for a in node.attributes] == ["type", "type"]
        assert attr(node, "type").value == ["button"]

    def test_reverse_attribute_order(self) -> None:
        node = resolved("btn:b[type=reset]", options={"reverse_attributes": True}).children[0]
        assert node.attributes[0].value == ["reset"]


class TestCycles:
    def test_self_reference(self) -> None:
        node = resolved("div", snippets={"div": "div.wrap"}).children[0]
        assert node.name == "div"
        assert attr_value(node, "class") == "wrap"
        assert node.children == []

    def test_mutual_reference(self) -> None:
        node = resolved("a", snippets={"a": "b", "b": "a"}).children[0]
        assert node.name == "a"


class TestMalformedSnippets:
    def test_warn_callback(self) -> None:
        calls = []
        abbr = resolved(
            "bad",
            snippets={"bad": "div["},
            warn=lambda message, exc: calls.append((message, exc)),
        )
        assert abbr.children[0].name == "bad"
        assert calls[0][0] == 'Unable to parse "div[" snippet'

    def test_logged_without_callback(self, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="mkcomp.resolve"):
            abbr = resolved("bad", snippets={"bad": "div["})
        assert abbr.children[0].name == "bad"
        assert 'Unable to parse "div[" snippet' in caplog.text
