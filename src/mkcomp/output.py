"""Output stream and tree walker shared by the markup stringifiers."""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from mkcomp.ast import Abbreviation, AbbreviationAttribute, AbbreviationNode, Value, ValueType
from mkcomp.config import Config, Options
from mkcomp.tokens import Field

_NEWLINE_RE = re.compile(r"\r\n|\r|\n")

# Renders as nothing by default; marks where the cursor would go
CARET: tuple[Value, ...] = (Field(0, ""),)


@dataclass(slots=True)
class OutputStream:
    """Accumulates output text and tracks the current line and column."""

    options: Options
    level: int = 0
    offset: int = 0
    line: int = 0
    column: int = 0
    _parts: list[str] = field(default_factory=list)

    @property
    def value(self) -> str:
        return "".join(self._parts)

    def _push(self, text: str) -> None:
        self._parts.append(text)
        self.offset += len(text)
        self.column += len(text)


def push(out: OutputStream, text: str) -> None:
    """Push text through the ``output_text`` hook."""
    out._push(out.options.output_text(text))


def push_string(out: OutputStream, value: str) -> None:
    """Push text line by line so that line tracking and indentation stay correct."""
    lines = _NEWLINE_RE.split(value)
    for i, line in enumerate(lines):
        push(out, line)
        if i != len(lines) - 1:
            push_newline(out, True)


def push_newline(out: OutputStream, indent: bool | int = False) -> None:
    """Start a new line; ``True`` indents to the current level, an int to that level."""
    base = out.options.base_indent
    push(out, out.options.newline + base)
    out.line += 1
    out.column = len(base)
    # bool is an int: check it first
    if indent is True:
        push_indent(out, out.level)
    elif indent:
        push_indent(out, indent)


def push_indent(out: OutputStream, size: int | None = None) -> None:
    level = out.level if size is None else size
    push(out, out.options.indent * max(level, 0))


def push_field(out: OutputStream, index: int, placeholder: str) -> None:
    # Fields bypass the text hook
    out._push(out.options.output_field(index, placeholder))


def push_tokens(out: OutputStream, tokens: Sequence[Value]) -> None:
    for token in tokens:
        if isinstance(token, str):
            push_string(out, token)
        else:
            push_field(out, token.index or 0, token.name)


def split_by_lines(tokens: Sequence[Value]) -> list[list[Value]]:
    """Split value tokens into lines; fields stay on the line they appear on."""
    result: list[list[Value]] = []
    line: list[Value] = []
    for token in tokens:
        if isinstance(token, str):
            parts = _NEWLINE_RE.split(token)
            line.append(parts[0])
            for part in parts[1:]:
                result.append(line)
                line = [part]
        else:
            line.append(token)
    if line:
        result.append(line)
    return result


# ----------------------------------------------------------------------
# Tree walking
# ----------------------------------------------------------------------


@dataclass(slots=True)
class WalkState:
    config: Config
    out: OutputStream
    current: AbbreviationNode | None = None
    parent: AbbreviationNode | None = None
    ancestors: list[AbbreviationNode] = field(default_factory=list)


Next = Callable[[AbbreviationNode, int, list[AbbreviationNode]], None]
Visitor = Callable[[AbbreviationNode, int, list[AbbreviationNode], WalkState, Next], None]


def create_walk_state(config: Config) -> WalkState:
    return WalkState(config, OutputStream(config.options))


def walk(abbr: Abbreviation, visitor: Visitor, state: WalkState) -> None:
    """Visit top-level nodes; the visitor calls ``next`` to descend into children."""

    def callback(node: AbbreviationNode, index: int, items: list[AbbreviationNode]) -> None:
        parent, current = state.parent, state.current
        state.parent = current
        state.current = node
        visitor(node, index, items, state, descend)
        state.current = current
        state.parent = parent

    def descend(node: AbbreviationNode, index: int, items: list[AbbreviationNode]) -> None:
        assert state.current is not None
        state.ancestors.append(state.current)
        callback(node, index, items)
        state.ancestors.pop()

    for i, child in enumerate(abbr.children):
        callback(child, i, abbr.children)


def walk_children(node: AbbreviationNode, next_: Next) -> None:
    for i, child in enumerate(node.children):
        next_(child, i, node.children)


# ----------------------------------------------------------------------
# Node and attribute helpers
# ----------------------------------------------------------------------


def is_snippet(node: AbbreviationNode | None) -> bool:
    """A node with neither name nor attributes is plain text."""
    return node is not None and not node.name and node.attributes is None


def is_inline(node: AbbreviationNode | None, options: Options) -> bool:
    if node is None:
        return False
    if node.name:
        return node.name.lower() in options.inline_elements
    return bool(node.value) and node.attributes is None


def is_field_token(token: Value) -> bool:
    return isinstance(token, Field)


def _apply_case(text: str, case: str) -> str:
    if case:
        return text.upper() if case == "upper" else text.lower()
    return text


def tag_name(name: str, options: Options) -> str:
    return _apply_case(name, options.tag_case)


def attr_name(name: str, options: Options) -> str:
    return _apply_case(name, options.attribute_case)


def attr_quote(attr: AbbreviationAttribute, options: Options, is_open: bool = False) -> str:
    if attr.value_type is ValueType.EXPRESSION:
        return "{" if is_open else "}"
    return "'" if options.attribute_quotes == "single" else '"'


def is_boolean_attribute(attr: AbbreviationAttribute, options: Options) -> bool:
    return attr.boolean or (attr.name or "").lower() in options.boolean_attributes


def self_close(options: Options) -> str:
    match options.self_closing_style:
        case "xhtml":
            return " /"
        case "xml":
            return "/"
        case _:
            return ""


def should_output_attribute(attr: AbbreviationAttribute) -> bool:
    """Implied attributes are only written when given a value (or empty quotes)."""
    return not attr.implied or attr.value_type is not ValueType.RAW or bool(attr.value)


def item_at(items: Sequence[AbbreviationNode], index: int) -> AbbreviationNode | None:
    """Like ``items[index]`` but None out of range, including negative indexes."""
    if 0 <= index < len(items):
        return items[index]
    return None
