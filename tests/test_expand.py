"""End-to-end expansion: parse, resolve, transform and render together."""

from __future__ import annotations

import pytest

from mkcomp import expand, parse, stringify
from mkcomp.config import DEFAULT_MAX_REPEAT, SYNTAXES, resolve_config
from mkcomp.errors import AbbreviationError


class TestStructure:
    def test_child_and_sibling(self) -> None:
        assert expand("div+ul>li") == "<div></div>\n<ul>\n\t<li></li>\n</ul>"

    def test_climb(self) -> None:
        assert expand("div>p^span") == "<div>\n\t<p></p>\n</div>\n<span></span>"

    def test_group(self) -> None:
        assert expand("(div>p)+em") == "<div>\n\t<p></p>\n</div>\n<em></em>"

    def test_repeat(self) -> None:
        assert expand("div*3") == "<div></div>\n<div></div>\n<div></div>"

    def test_repeat_with_children(self) -> None:
        result = expand("div*3>span")
        assert result.count("<div><span></span></div>") == 3

    def test_numbering(self) -> None:
        assert expand("div*3>span{$}") == (
            "<div><span>1</span></div>\n"
            "<div><span>2</span></div>\n"
            "<div><span>3</span></div>"
        )

    def test_implicit_list_items(self) -> None:
        assert expand("ul>.item*2") == (
            '<ul>\n\t<li class="item"></li>\n\t<li class="item"></li>\n</ul>'
        )


class TestAttributes:
    def test_classes_merge(self) -> None:
        assert expand("div.a.b[class=c]") == '<div class="a b c"></div>'

    def test_duplicate_attribute_last_wins(self) -> None:
        assert expand("div[title=a title=b]") == '<div title="b"></div>'

    def test_self_closing_html(self) -> None:
        assert expand("br/") == "<br>"

    def test_self_closing_xhtml(self) -> None:
        assert expand("br/", resolve_config("xhtml")) == "<br />"


class TestText:
    def test_text_list_fills_implicit_repeat(self) -> None:
        config = resolve_config(text=["one", "two"])
        assert expand("ul>li*", config) == "<ul>\n\t<li>one</li>\n\t<li>two</li>\n</ul>"

    def test_text_goes_to_deepest_node(self) -> None:
        config = resolve_config(text="hi")
        assert expand("div>p", config) == "<div>\n\t<p>hi</p>\n</div>"


class TestLimits:
    def test_repeat_is_bounded(self) -> None:
        result = expand("div*100000000")
        assert result.count("<div></div>") == DEFAULT_MAX_REPEAT

    def test_custom_bound(self) -> None:
        assert expand("i*5", resolve_config(max_repeat=2)) == "<i></i><i></i>"

    def test_bound_shared_with_snippets(self) -> None:
        config = resolve_config(snippets={"x": "p*10"}, max_repeat=10)
        assert expand("x*10", config).count("<p>") == 10

    def test_snippet_repeats_count_against_bound(self) -> None:
        config = resolve_config(snippets={"x": "li*4"}, max_repeat=6)
        assert expand("x+x", config).count("<li>") == 6


class TestErrors:
    def test_deep_nesting(self) -> None:
        with pytest.raises(AbbreviationError, match="nested too deeply"):
            expand("div>" * 1000 + "span")

    def test_unclosed_attribute_set(self) -> None:
        with pytest.raises(AbbreviationError) as excinfo:
            expand("div[")
        assert excinfo.value.offset == 3

    def test_unclosed_group(self) -> None:
        with pytest.raises(AbbreviationError):
            expand("(div")

    def test_unknown_syntax(self) -> None:
        with pytest.raises(ValueError, match="unknown syntax"):
            resolve_config("markdown")

    def test_unknown_option(self) -> None:
        with pytest.raises(ValueError, match="unknown option"):
            resolve_config(options={"colour": True})


@pytest.mark.parametrize("syntax", SYNTAXES)
def test_deterministic(syntax: str) -> None:
    config = resolve_config(syntax)
    source = "div#app>ul.nav>li.item*3>a[title=x]{Item $}"
    assert expand(source, config) == expand(source, config)


def test_parse_then_stringify_matches_expand() -> None:
    config = resolve_config("jsx")
    source = "section.hero>h1{Title}+p.lead"
    assert stringify(parse(source, config), config) == expand(source, config)
