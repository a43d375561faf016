"""Expansion options and per-syntax defaults."""

from __future__ import annotations

import dataclasses
import random
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from mkcomp.snippets import Snippet, load_snippets, snippets_for

DEFAULT_MAX_REPEAT = 10_000

INLINE_ELEMENTS = frozenset(
    (
        "a abbr acronym applet b basefont bdo big br button cite code del dfn em font "
        "i iframe img input ins kbd label map object q s samp select small span strike "
        "strong sub sup textarea tt u var"
    ).split()
)

BOOLEAN_ATTRIBUTES = frozenset(
    (
        "contenteditable seamless async autofocus autoplay checked controls defer "
        "disabled formnovalidate hidden ismap loop multiple muted novalidate readonly "
        "required reversed selected typemustmatch"
    ).split()
)

# Parent tag -> tag of an anonymous child, e.g. `ul>.item` is `ul>li.item`
ELEMENT_MAP: Mapping[str, str] = {
    "p": "span",
    "ul": "li",
    "ol": "li",
    "table": "tr",
    "tr": "td",
    "tbody": "tr",
    "thead": "tr",
    "tfoot": "tr",
    "colgroup": "col",
    "select": "option",
    "optgroup": "option",
    "audio": "source",
    "video": "source",
    "object": "param",
    "map": "area",
}

JSX_ATTRIBUTES: Mapping[str, str] = {
    "class": "className",
    "class*": "styleName",
    "for": "htmlFor",
}

JSX_VALUE_PREFIX: Mapping[str, str] = {"class*": "styles"}

DEFAULT_VARIABLES: Mapping[str, str] = {
    "lang": "en",
    "locale": "en-US",
    "charset": "UTF-8",
    "indentation": "\t",
    "newline": "\n",
}

SYNTAXES = ("html", "xhtml", "xml", "xsl", "jsx", "tsx", "pug", "haml", "slim")

SELF_CLOSING_STYLES = ("html", "xhtml", "xml")


def _placeholder_field(index: int, placeholder: str) -> str:
    return placeholder


def _identity(text: str) -> str:
    return text


@dataclass(frozen=True, slots=True)
class Options:
    """Output formatting and transform switches."""

    inline_elements: frozenset[str] = INLINE_ELEMENTS
    indent: str = "\t"
    base_indent: str = ""
    newline: str = "\n"
    tag_case: str = ""  # "", "upper" or "lower"
    attribute_case: str = ""
    attribute_quotes: str = "double"  # "double" or "single"
    format: bool = True
    format_leaf_node: bool = False
    format_skip: frozenset[str] = frozenset({"html"})
    format_force: frozenset[str] = frozenset({"body"})
    inline_break: int = 3
    compact_boolean: bool = False
    boolean_attributes: frozenset[str] = BOOLEAN_ATTRIBUTES
    reverse_attributes: bool = False
    self_closing_style: str = "html"
    output_field: Callable[[int, str], str] = _placeholder_field
    output_text: Callable[[str], str] = _identity
    markup_href: bool = True
    element_map: Mapping[str, str] = field(default_factory=lambda: dict(ELEMENT_MAP))
    jsx_enabled: bool = False
    markup_attributes: Mapping[str, str] = field(default_factory=dict)
    value_prefix: Mapping[str, str] = field(default_factory=dict)
    bem_enabled: bool = False
    bem_element: str = "__"
    bem_modifier: str = "_"


@dataclass(frozen=True, slots=True)
class Config:
    """Everything a single ``expand()`` call needs; nothing is module-global."""

    syntax: str = "html"
    type: str = "markup"
    options: Options = field(default_factory=Options)
    snippets: Mapping[str, Snippet] = field(default_factory=lambda: snippets_for("html"))
    variables: Mapping[str, str] = field(default_factory=lambda: dict(DEFAULT_VARIABLES))
    text: str | Sequence[str] | None = None
    max_repeat: int = DEFAULT_MAX_REPEAT
    context: str | None = None
    warn: Callable[[str, Exception], None] | None = None
    random: random.Random | None = None


def syntax_options(syntax: str) -> dict[str, Any]:
    """Option overrides implied by an output syntax."""
    match syntax:
        case "xhtml":
            return {"self_closing_style": "xhtml"}
        case "xml" | "xsl":
            return {"self_closing_style": "xml"}
        case "jsx" | "tsx":
            return {
                "jsx_enabled": True,
                "self_closing_style": "xhtml",
                "markup_attributes": dict(JSX_ATTRIBUTES),
                "value_prefix": dict(JSX_VALUE_PREFIX),
            }
        case _:
            return {}


def resolve_config(
    syntax: str = "html",
    *,
    options: Mapping[str, Any] | None = None,
    snippets: Mapping[str, str] | None = None,
    variables: Mapping[str, str] | None = None,
    **kwargs: Any,
) -> Config:
    """Build a Config for *syntax*.

    Precedence: built-in defaults < syntax defaults < explicit overrides.
    ``snippets`` are raw ``key -> abbreviation`` entries layered on top of
    the syntax's built-in table; ``kwargs`` are passed to Config as-is.
    """
    if syntax not in SYNTAXES:
        raise ValueError(f"unknown syntax: {syntax}")

    opts = {**syntax_options(syntax), **(options or {})}
    unknown = set(opts) - {f.name for f in dataclasses.fields(Options)}
    if unknown:
        raise ValueError(f"unknown option(s): {', '.join(sorted(unknown))}")

    table = snippets_for(syntax)
    if snippets:
        table.update(load_snippets(snippets))

    return Config(
        syntax=syntax,
        options=Options(**opts),
        snippets=table,
        variables={**DEFAULT_VARIABLES, **(variables or {})},
        **kwargs,
    )
