"""HTML renderer: converts a transformed abbreviation tree to markup text."""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence

from mkcomp.ast import Abbreviation, AbbreviationAttribute, AbbreviationNode, Value
from mkcomp.config import Config, Options
from mkcomp.output import (
    CARET,
    Next,
    WalkState,
    attr_name,
    attr_quote,
    create_walk_state,
    is_boolean_attribute,
    is_field_token,
    is_inline,
    is_snippet,
    item_at,
    push_newline,
    push_string,
    push_tokens,
    self_close,
    should_output_attribute,
    tag_name,
    walk,
    walk_children,
)

_HTML_TAG_RE = re.compile(r"^<([\w\-:]+)[\s>]")
_PROP_KEY_RE = re.compile(r"^[a-zA-Z_$][\w$]*$")

_RESERVED_KEYWORDS = frozenset(
    (
        "for while of async await const let var continue break debugger do export import "
        "in instanceof new return switch this throw try catch typeof void with yield"
    ).split()
)


def render(abbr: Abbreviation, config: Config) -> str:
    """Render *abbr* as HTML/XML/JSX markup."""
    state = create_walk_state(config)
    walk(abbr, _element, state)
    return state.out.value


# ---------------------------------------------------------------------------
# Elements
# ---------------------------------------------------------------------------


def _element(
    node: AbbreviationNode,
    index: int,
    items: list[AbbreviationNode],
    state: WalkState,
    next_: Next,
) -> None:
    out = state.out
    options = state.config.options
    fmt = _should_format(node, index, items, state)

    level = _get_indent(state)
    out.level += level
    if fmt:
        push_newline(out, True)

    if node.name:
        name = tag_name(node.name, options)
        push_string(out, f"<{name}")
        for attr in node.attributes or ():
            if should_output_attribute(attr):
                _push_attribute(attr, state)

        if node.self_closing and not node.children and not node.value:
            push_string(out, f"{self_close(options)}>")
        else:
            push_string(out, ">")
            if not _push_snippet(node, state, next_):
                if node.value:
                    inner = any(_has_newline(v) for v in node.value) or _starts_with_block_tag(
                        node.value, options
                    )
                    if inner:
                        out.level += 1
                        push_newline(out, out.level)
                    push_tokens(out, node.value)
                    if inner:
                        out.level -= 1
                        push_newline(out, out.level)

                walk_children(node, next_)

                if not node.value and not node.children:
                    inner = options.format_leaf_node or node.name in options.format_force
                    if inner:
                        out.level += 1
                        push_newline(out, out.level)
                    push_tokens(out, CARET)
                    if inner:
                        out.level -= 1
                        push_newline(out, out.level)

            push_string(out, f"</{name}>")
    elif not _push_snippet(node, state, next_) and node.value:
        # Text-only node
        push_tokens(out, node.value)
        walk_children(node, next_)

    if fmt and index == len(items) - 1 and state.parent is not None:
        offset = 0 if is_snippet(state.parent) else 1
        push_newline(out, out.level - offset)

    out.level -= level


def _push_attribute(attr: AbbreviationAttribute, state: WalkState) -> None:
    if not attr.name:
        return

    out = state.out
    options = state.config.options
    name = attr.name
    value: Sequence[Value] | None = attr.value
    l_quote = attr_quote(attr, options, True)
    r_quote = attr_quote(attr, options)

    if options.markup_attributes:
        name = _multi_value(name, options.markup_attributes, attr.multiple) or name
    name = attr_name(name, options)

    if options.jsx_enabled and attr.multiple:
        l_quote, r_quote = "{", "}"

    prefix = (
        _multi_value(attr.name, options.value_prefix, attr.multiple)
        if options.value_prefix
        else None
    )
    if prefix and value is not None and len(value) == 1 and isinstance(value[0], str):
        # Object notation, e.g. `styles.foo` or `styles['foo-bar']`
        val = value[0]
        value = [f"{prefix}.{val}" if _is_prop_key(val) else f"{prefix}['{val}']"]
        if options.jsx_enabled:
            l_quote, r_quote = "{", "}"

    if is_boolean_attribute(attr, options) and not value:
        # Compact boolean omits the value, otherwise repeat the name (XML style)
        value = None if options.compact_boolean else [name]
    elif not value:
        value = CARET

    push_string(out, f" {name}")
    if value:
        push_string(out, f"={l_quote}")
        push_tokens(out, value)
        push_string(out, r_quote)
    elif options.self_closing_style != "html":
        push_string(out, f"={l_quote}{r_quote}")


def _push_snippet(node: AbbreviationNode, state: WalkState, next_: Next) -> bool:
    """Output children in place of the first field of a text value, e.g. `{<!-- ${0} -->}>div`."""
    if not node.value or not node.children:
        return False

    field_ix = next((i for i, v in enumerate(node.value) if is_field_token(v)), -1)
    if field_ix == -1:
        return False

    out = state.out
    push_tokens(out, node.value[:field_ix])
    line = out.line
    pos = field_ix + 1
    walk_children(node, next_)

    # Children broke the line: drop leading whitespace of the rest
    if out.line != line and pos < len(node.value) and isinstance(node.value[pos], str):
        push_string(out, node.value[pos].lstrip())  # type: ignore[union-attr]
        pos += 1

    push_tokens(out, node.value[pos:])
    return True


# ---------------------------------------------------------------------------
# Formatting decisions
# ---------------------------------------------------------------------------


def _should_format(
    node: AbbreviationNode, index: int, items: list[AbbreviationNode], state: WalkState
) -> bool:
    options = state.config.options
    parent = state.parent
    if not options.format:
        return False
    if index == 0 and parent is None:
        # Never break before the very first node
        return False
    if parent is not None and is_snippet(parent) and len(items) == 1:
        return False

    if is_snippet(node):
        value = node.value or []
        if (
            is_snippet(item_at(items, index - 1))
            or is_snippet(item_at(items, index + 1))
            or any(_has_newline(v) for v in value)
            or (any(is_field_token(v) for v in value) and node.children)
        ):
            return True

    if not is_inline(node, options):
        return True

    if index == 0:
        # First inline child: break when any sibling is block-level
        if any(not is_inline(item, options) for item in items):
            return True
    elif not is_inline(items[index - 1], options):
        return True

    if options.inline_break:
        adjacent = 1
        before = index - 1
        while is_inline(item_at(items, before), options):
            adjacent += 1
            before -= 1
        after = index + 1
        while is_inline(item_at(items, after), options):
            adjacent += 1
            after += 1
        if adjacent >= options.inline_break:
            return True

    # Inline node wrapping something that breaks
    return any(
        _should_format(child, i, node.children, state) for i, child in enumerate(node.children)
    )


def _get_indent(state: WalkState) -> int:
    parent = state.parent
    if (
        parent is None
        or is_snippet(parent)
        or (parent.name and parent.name in state.config.options.format_skip)
    ):
        return 0
    return 1


def _has_newline(value: Value) -> bool:
    return isinstance(value, str) and ("\r" in value or "\n" in value)


def _starts_with_block_tag(value: Sequence[Value], options: Options) -> bool:
    if value and isinstance(value[0], str):
        m = _HTML_TAG_RE.match(value[0])
        if m and m.group(1).lower() not in options.inline_elements:
            return True
    return False


def _multi_value(key: str, data: Mapping[str, str], multiple: bool) -> str | None:
    return (data.get(f"{key}*") if multiple else None) or data.get(key)


def _is_prop_key(text: str) -> bool:
    return text not in _RESERVED_KEYWORDS and bool(_PROP_KEY_RE.match(text))
