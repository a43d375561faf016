"""Tests for statement-to-tree conversion: repeaters, numbering, text insertion."""

from __future__ import annotations

from conftest import attr, attr_value, names, text
from mkcomp.ast import ValueType
from mkcomp.tokens import Field


class TestRepeat:
    def test_repeat_unrolls(self, parse_tree) -> None:
        abbr = parse_tree("li*3")
        assert names(abbr.children) == ["li", "li", "li"]
        assert [n.repeat.value for n in abbr.children] == [0, 1, 2]
        assert all(n.repeat.count == 3 for n in abbr.children)

    def test_children_copied_per_iteration(self, parse_tree) -> None:
        abbr = parse_tree("div*3>span")
        assert len(abbr.children) == 3
        for div in abbr.children:
            assert names(div.children) == ["span"]
        assert abbr.children[0].children[0] is not abbr.children[1].children[0]

    def test_group_repeat_marks_items(self, parse_tree) -> None:
        abbr = parse_tree("(a+b)*2")
        assert names(abbr.children) == ["a", "b", "a", "b"]
        assert [n.repeat.value for n in abbr.children] == [0, 0, 1, 1]

    def test_guard_stops_runaway_repeat(self, parse_tree) -> None:
        abbr = parse_tree("div*100000000", max_repeat=50)
        assert len(abbr.children) == 50

    def test_guard_keeps_one_iteration(self, parse_tree) -> None:
        abbr = parse_tree("div*3", max_repeat=0)
        assert len(abbr.children) == 1


class TestNumbering:
    def test_number_in_text(self, parse_tree) -> None:
        abbr = parse_tree("div*3>span{$}")
        assert [text(d.children[0]) for d in abbr.children] == ["1", "2", "3"]

    def test_padding(self, parse_tree) -> None:
        abbr = parse_tree("li.item$$$*2")
        assert [attr_value(n, "class") for n in abbr.children] == ["item001", "item002"]

    def test_reverse(self, parse_tree) -> None:
        abbr = parse_tree("li{$@-}*3")
        assert [text(n) for n in abbr.children] == ["3", "2", "1"]

    def test_base(self, parse_tree) -> None:
        abbr = parse_tree("li{$@5}*2")
        assert [text(n) for n in abbr.children] == ["5", "6"]

    def test_number_in_name(self, parse_tree) -> None:
        abbr = parse_tree("h$*2")
        assert names(abbr.children) == ["h1", "h2"]

    def test_parent_number(self, parse_tree) -> None:
        abbr = parse_tree("div*2>span{$@^}*2")
        values = [text(s) for d in abbr.children for s in d.children]
        assert values == ["1", "2", "3", "4"]

    def test_number_outside_repeat(self, parse_tree) -> None:
        abbr = parse_tree("div{$}")
        assert text(abbr.children[0]) == "1"


class TestAttributes:
    def test_quoted_value_type(self, parse_tree) -> None:
        node = parse_tree("a[title='x' href=\"y\" data=z]").children[0]
        assert attr(node, "title").value_type is ValueType.SINGLE_QUOTE
        assert attr(node, "href").value_type is ValueType.DOUBLE_QUOTE
        assert attr(node, "data").value_type is ValueType.RAW
        assert attr_value(node, "title") == "x"

    def test_expression_value(self, parse_tree) -> None:
        node = parse_tree("a[onClick={handle}]").children[0]
        assert attr(node, "onClick").value_type is ValueType.EXPRESSION
        assert attr_value(node, "onClick") == "handle"

    def test_implied_and_boolean(self, parse_tree) -> None:
        node = parse_tree("input[!name checked.]").children[0]
        assert attr(node, "name").implied
        assert attr(node, "checked").boolean

    def test_field_kept_as_token(self, parse_tree) -> None:
        node = parse_tree("a[href=${1:url}]").children[0]
        (field,) = attr(node, "href").value
        assert isinstance(field, Field)
        assert (field.index, field.name) == (1, "url")

    def test_variable_substituted(self, parse_tree) -> None:
        node = parse_tree("meta[charset=${charset}]", variables={"charset": "UTF-8"}).children[0]
        assert attr_value(node, "charset") == "UTF-8"

    def test_unknown_variable_keeps_name(self, parse_tree) -> None:
        node = parse_tree("{${nope}}").children[0]
        assert text(node) == "nope"

    def test_repeater_kept_in_quoted_value(self, parse_tree) -> None:
        node = parse_tree('a[title="*"]').children[0]
        assert attr_value(node, "title") == "*"


class TestTextNodes:
    def test_text_node_children_become_siblings(self, parse_tree) -> None:
        abbr = parse_tree("{hello}>div")
        assert names(abbr.children) == [None, "div"]

    def test_text_with_field_keeps_children(self, parse_tree) -> None:
        abbr = parse_tree("{<!-- ${0} -->}>div")
        assert len(abbr.children) == 1
        assert names(abbr.children[0].children) == ["div"]


class TestTextInsertion:
    def test_text_goes_to_deepest_node(self, parse_tree) -> None:
        abbr = parse_tree("div>p", text="hello")
        assert text(abbr.children[0].children[0]) == "hello"

    def test_implicit_repeat_uses_lines(self, parse_tree) -> None:
        abbr = parse_tree("ul>li*", text=["one", "", "two"])
        items = abbr.children[0].children
        assert [text(li) for li in items] == ["one", "two"]

    def test_each_implicit_repeat_gets_text(self, parse_tree) -> None:
        ul, ol = parse_tree("(ul>li*)+(ol>li*)", text=["one", "two"]).children
        assert [text(li) for li in ul.children] == ["one", "two"]
        assert [text(li) for li in ol.children] == ["one", "two"]

    def test_placeholder_only_affects_its_own_repeat(self, parse_tree) -> None:
        a, b = parse_tree("(p*>b{$#})+(i*)", text=["x", "y"]).children[::2]
        assert text(a.children[0]) == "x"
        assert text(b) == "x"

    def test_placeholder(self, parse_tree) -> None:
        abbr = parse_tree("li*>a{$#}", text=["x", "y"])
        assert [text(li.children[0]) for li in abbr.children] == ["x", "y"]

    def test_url_becomes_href(self, parse_tree) -> None:
        node = parse_tree("a", text="www.example.com").children[0]
        assert attr_value(node, "href") == "http://www.example.com"

    def test_email_becomes_mailto(self, parse_tree) -> None:
        node = parse_tree("a", text="me@example.com").children[0]
        assert attr_value(node, "href") == "mailto:me@example.com"

    def test_plain_text_no_href(self, parse_tree) -> None:
        node = parse_tree("a", text="click here").children[0]
        assert node.attributes is None

    def test_href_disabled(self, parse_tree) -> None:
        node = parse_tree("a", text="www.example.com", href=False).children[0]
        assert node.attributes is None
