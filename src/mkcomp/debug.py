"""--debug tree dump to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

from mkcomp.ast import Abbreviation, AbbreviationAttribute, AbbreviationNode, Value
from mkcomp.tokens import Field


def dump_tree(abbr: Abbreviation, *, file: TextIO | None = None) -> None:
    """Print a human-readable abbreviation tree to *file* (default stderr)."""
    file = file or sys.stderr
    file.write("Abbreviation\n")
    for child in abbr.children:
        _dump_node(child, 1, file)


def _indent(depth: int) -> str:
    return "  " * depth


def _dump_node(node: AbbreviationNode, depth: int, f: TextIO) -> None:
    if node.name:
        f.write(f"{_indent(depth)}Element {node.name}")
    else:
        f.write(f"{_indent(depth)}Text")
    if node.self_closing:
        f.write(" /")
    if node.repeat is not None:
        f.write(f" *{node.repeat.count}@{node.repeat.value}")
    f.write("\n")

    for attr in node.attributes or ():
        _dump_attribute(attr, depth + 1, f)
    if node.value is not None:
        f.write(f"{_indent(depth + 1)}Value {_value_repr(node.value)}\n")
    for child in node.children:
        _dump_node(child, depth + 1, f)


def _dump_attribute(attr: AbbreviationAttribute, depth: int, f: TextIO) -> None:
    flags = []
    if attr.boolean:
        flags.append("boolean")
    if attr.implied:
        flags.append("implied")
    if attr.multiple:
        flags.append("multiple")
    suffix = f" ({', '.join(flags)})" if flags else ""
    value = _value_repr(attr.value) if attr.value is not None else "-"
    f.write(f"{_indent(depth)}Attr {attr.name}={value} [{attr.value_type.value}]{suffix}\n")


def _value_repr(value: list[Value]) -> str:
    parts = []
    for token in value:
        if isinstance(token, Field):
            parts.append(f"${{{token.index}:{token.name}}}")
        else:
            parts.append(repr(token))
    return " ".join(parts) if parts else "''"
