"""Tree node types: parsed statements and the resolved abbreviation tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from mkcomp.tokens import Field, Repeater, Token

# ----------------------------------------------------------------------
# Statement tree (parser output)
# ----------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class TokenAttribute:
    """Attribute as written: raw name and value tokens."""

    name: tuple[Token, ...] | None = None
    value: tuple[Token, ...] | None = None
    multiple: bool = False
    expression: bool = False


@dataclass(frozen=True, slots=True)
class TokenElement:
    """Element statement: ``name.class#id[attrs]{text}*N/``."""

    name: tuple[Token, ...] | None = None
    attributes: tuple[TokenAttribute, ...] | None = None
    value: tuple[Token, ...] | None = None
    repeat: Repeater | None = None
    self_close: bool = False
    elements: list[Statement] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class TokenGroup:
    """Parenthesized group, also used for the top-level statement list."""

    elements: list[Statement] = field(default_factory=list)
    repeat: Repeater | None = None


Statement = TokenElement | TokenGroup


# ----------------------------------------------------------------------
# Abbreviation tree (converter output)
# ----------------------------------------------------------------------

Value = str | Field


class ValueType(Enum):
    RAW = "raw"
    SINGLE_QUOTE = "singleQuote"
    DOUBLE_QUOTE = "doubleQuote"
    EXPRESSION = "expression"


@dataclass(frozen=True, slots=True)
class RepeatState:
    """Iteration ``value`` (0-based) of a repeater producing ``count`` copies."""

    count: int
    value: int
    implicit: bool = False


@dataclass(slots=True)
class AbbreviationAttribute:
    name: str | None
    value: list[Value] | None = None
    boolean: bool = False
    implied: bool = False
    value_type: ValueType = ValueType.RAW
    multiple: bool = False


@dataclass(slots=True)
class AbbreviationNode:
    """Element or text node.

    A node without ``name`` is a text node; a node without ``name`` and
    ``attributes`` is a snippet (text-only) node.
    """

    name: str | None = None
    value: list[Value] | None = None
    attributes: list[AbbreviationAttribute] | None = None
    children: list[AbbreviationNode] = field(default_factory=list)
    repeat: RepeatState | None = None
    self_closing: bool = False


@dataclass(slots=True)
class Abbreviation:
    """Root container of an abbreviation tree."""

    children: list[AbbreviationNode] = field(default_factory=list)


Container = Abbreviation | AbbreviationNode


def deepest_node(node: AbbreviationNode) -> AbbreviationNode:
    """Follow the last child down to a leaf."""
    while node.children:
        node = node.children[-1]
    return node


def is_field(value: object) -> bool:
    """Return True for a tab-stop field (not a variable)."""
    return isinstance(value, Field) and value.index is not None
