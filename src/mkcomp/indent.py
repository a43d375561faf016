"""Indentation-based renderers: pug, haml and slim."""

from __future__ import annotations

import re
from dataclasses import dataclass

from mkcomp.ast import Abbreviation, AbbreviationAttribute, AbbreviationNode, Value
from mkcomp.config import Config
from mkcomp.output import (
    CARET,
    Next,
    WalkState,
    attr_name,
    attr_quote,
    create_walk_state,
    is_boolean_attribute,
    is_snippet,
    push,
    push_newline,
    push_string,
    push_tokens,
    should_output_attribute,
    split_by_lines,
    walk,
    walk_children,
)

_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True, slots=True)
class IndentStyle:
    """Punctuation of one indentation-based syntax."""

    before_name: str = ""
    after_name: str = ""
    before_attribute: str = ""
    after_attribute: str = ""
    glue_attribute: str = ""
    boolean_value: str = ""
    before_text_line: str = ""
    after_text_line: str = ""
    self_close: str = ""


PUG = IndentStyle(
    before_attribute="(",
    after_attribute=")",
    glue_attribute=", ",
    before_text_line="| ",
    self_close="/",
)

HAML = IndentStyle(
    before_name="%",
    before_attribute="(",
    after_attribute=")",
    glue_attribute=" ",
    boolean_value="true",
    after_text_line=" |",
    self_close="/",
)

SLIM = IndentStyle(
    before_attribute=" ",
    glue_attribute=" ",
    boolean_value="true",
    before_text_line="| ",
    self_close="/",
)

STYLES: dict[str, IndentStyle] = {"pug": PUG, "haml": HAML, "slim": SLIM}


def render_indent(abbr: Abbreviation, config: Config, style: IndentStyle) -> str:
    """Render *abbr* with nesting expressed by indentation only."""
    state = create_walk_state(config)

    def element(
        node: AbbreviationNode,
        index: int,
        items: list[AbbreviationNode],
        state: WalkState,
        next_: Next,
    ) -> None:
        _element(node, index, state, next_, style)

    walk(abbr, element, state)
    return state.out.value


def _element(
    node: AbbreviationNode, index: int, state: WalkState, next_: Next, style: IndentStyle
) -> None:
    out = state.out
    primary, secondary = _collect_attributes(node)

    level = 1 if state.parent is not None else 0
    out.level += level

    # The first top-level node and text nodes stay on the current line
    if not (state.parent is None and index == 0) and not is_snippet(node):
        push_newline(out, True)

    if node.name and (node.name != "div" or not primary):
        push_string(out, style.before_name + node.name + style.after_name)

    _push_primary_attributes(primary, state)
    _push_secondary_attributes([a for a in secondary if should_output_attribute(a)], state, style)

    if node.self_closing and not node.value and not node.children:
        if style.self_close:
            push_string(out, style.self_close)
    else:
        _push_value(node, state, style)
        walk_children(node, next_)

    out.level -= level


def _collect_attributes(
    node: AbbreviationNode,
) -> tuple[list[AbbreviationAttribute], list[AbbreviationAttribute]]:
    primary: list[AbbreviationAttribute] = []
    secondary: list[AbbreviationAttribute] = []
    for attr in node.attributes or ():
        if attr.name in ("class", "id"):
            primary.append(attr)
        else:
            secondary.append(attr)
    return primary, secondary


def _push_primary_attributes(attrs: list[AbbreviationAttribute], state: WalkState) -> None:
    out = state.out
    for attr in attrs:
        if not attr.value:
            continue
        if attr.name == "class":
            push_string(out, ".")
            # `.a.b` notation: whitespace separates class names
            tokens = [
                _WHITESPACE_RE.sub(".", t) if isinstance(t, str) else t for t in attr.value
            ]
            push_tokens(out, tokens)
        else:
            push_string(out, "#")
            push_tokens(out, attr.value)


def _push_secondary_attributes(
    attrs: list[AbbreviationAttribute], state: WalkState, style: IndentStyle
) -> None:
    if not attrs:
        return

    out = state.out
    options = state.config.options
    if style.before_attribute:
        push_string(out, style.before_attribute)

    for i, attr in enumerate(attrs):
        push_string(out, attr_name(attr.name or "", options))
        if is_boolean_attribute(attr, options) and not attr.value:
            if not options.compact_boolean and style.boolean_value:
                push_string(out, "=" + style.boolean_value)
        else:
            push_string(out, "=" + attr_quote(attr, options, True))
            push_tokens(out, attr.value or CARET)
            push_string(out, attr_quote(attr, options))
        if i != len(attrs) - 1 and style.glue_attribute:
            push_string(out, style.glue_attribute)

    if style.after_attribute:
        push_string(out, style.after_attribute)


def _push_value(node: AbbreviationNode, state: WalkState, style: IndentStyle) -> None:
    # Only leaf nodes get the caret
    if not node.value and node.children:
        return

    out = state.out
    value = node.value or list(CARET)
    lines = split_by_lines(value)

    if len(lines) == 1:
        if node.name or node.attributes is not None:
            push(out, " ")
        push_tokens(out, value)
        return

    # Multi-line text: one text line each, padded to the longest when terminated
    lengths = [_value_length(line) for line in lines]
    longest = max(lengths)
    out.level += 1
    for line, length in zip(lines, lengths):
        push_newline(out, True)
        if style.before_text_line:
            push(out, style.before_text_line)
        push_tokens(out, line)
        if style.after_text_line:
            push(out, " " * (longest - length))
            push(out, style.after_text_line)
    out.level -= 1


def _value_length(tokens: list[Value]) -> int:
    return sum(len(t) if isinstance(t, str) else len(t.name) for t in tokens)
