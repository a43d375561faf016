"""Tests for the pug, haml and slim stringifiers."""

from __future__ import annotations

import pytest


class TestPug:
    def test_nesting(self, expand_html) -> None:
        assert expand_html("ul>li*2", syntax="pug") == "ul\n\tli \n\tli "

    def test_div_with_class_omits_name(self, expand_html) -> None:
        assert expand_html(".a.b", syntax="pug") == ".a.b "

    def test_id_and_class(self, expand_html) -> None:
        assert expand_html("p#x.y", syntax="pug") == "p#x.y "

    def test_attributes(self, expand_html) -> None:
        result = expand_html("a[href=x title=t]", syntax="pug")
        assert result == 'a(href="x", title="t") '

    def test_text(self, expand_html) -> None:
        assert expand_html("p{hi}", syntax="pug") == "p hi"

    def test_self_closing(self, expand_html) -> None:
        assert expand_html("br/", syntax="pug") == "br/"

    def test_boolean_without_value(self, expand_html) -> None:
        assert expand_html("input[disabled]", syntax="pug") == 'input(type="text", disabled)/'

    def test_multiline_text(self, expand_html) -> None:
        result = expand_html("p", syntax="pug", text="one\ntwo")
        assert result == "p\n\t| one\n\t| two"


class TestHaml:
    def test_tag_prefix(self, expand_html) -> None:
        assert expand_html("div>p", syntax="haml") == "%div\n\t%p "

    def test_class_shorthand(self, expand_html) -> None:
        assert expand_html("div.a", syntax="haml") == ".a "

    def test_attributes_space_separated(self, expand_html) -> None:
        assert expand_html("a[href=x title=y]", syntax="haml") == '%a(href="x" title="y") '

    def test_boolean_value(self, expand_html) -> None:
        assert expand_html("input[disabled]", syntax="haml") == '%input(type="text" disabled=true)/'

    def test_multiline_text_padded(self, expand_html) -> None:
        result = expand_html("p", syntax="haml", text="a\nbbb")
        assert result == "%p\n\ta   |\n\tbbb |"


class TestSlim:
    def test_attributes(self, expand_html) -> None:
        assert expand_html("a[href=x title=y]", syntax="slim") == 'a href="x" title="y" '

    def test_boolean_value(self, expand_html) -> None:
        assert expand_html("input[disabled]", syntax="slim") == 'input type="text" disabled=true/'

    def test_compact_boolean(self, expand_html) -> None:
        result = expand_html("input[disabled]", syntax="slim", options={"compact_boolean": True})
        assert result == 'input type="text" disabled/'


@pytest.mark.parametrize("syntax", ["pug", "haml", "slim"])
def test_text_node_stays_on_line(expand_html, syntax: str) -> None:
    result = expand_html("p>{Hello}", syntax=syntax)
    assert result.endswith("Hello")
    assert "\n" not in result
