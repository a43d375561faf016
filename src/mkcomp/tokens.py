"""Token types, data structures, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class OperatorType(Enum):
    CHILD = ">"
    SIBLING = "+"
    CLIMB = "^"
    CLASS = "."
    ID = "#"
    CLOSE = "/"
    EQUAL = "="


class BracketType(Enum):
    GROUP = "group"  # ( )
    ATTRIBUTE = "attribute"  # [ ]
    EXPRESSION = "expression"  # { }


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based character offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """Source range from start to end position."""

    start: Position
    end: Position


@dataclass(frozen=True, slots=True)
class Literal:
    value: str
    start: int = 0
    end: int = 0


@dataclass(frozen=True, slots=True)
class Operator:
    operator: OperatorType
    start: int = 0
    end: int = 0


@dataclass(frozen=True, slots=True)
class Bracket:
    context: BracketType
    open: bool
    start: int = 0
    end: int = 0


@dataclass(frozen=True, slots=True)
class Quote:
    single: bool
    start: int = 0
    end: int = 0


@dataclass(frozen=True, slots=True)
class WhiteSpace:
    value: str
    start: int = 0
    end: int = 0


@dataclass(frozen=True, slots=True)
class Repeater:
    """``*N`` suffix; ``implicit`` when no count was written."""

    count: int
    implicit: bool = False
    start: int = 0
    end: int = 0


@dataclass(frozen=True, slots=True)
class RepeaterPlaceholder:
    """``$#``: replaced with the current item of the replacement text."""

    start: int = 0
    end: int = 0


@dataclass(frozen=True, slots=True)
class RepeaterNumber:
    """``$$$@^-N``: zero-padded iteration number."""

    size: int
    reverse: bool = False
    base: int = 1
    parent: int = 0
    start: int = 0
    end: int = 0


@dataclass(frozen=True, slots=True)
class Field:
    """Tab-stop field ``${1:name}`` or variable ``${name}`` (index is None)."""

    index: int | None
    name: str = ""
    start: int = 0
    end: int = 0


Token = (
    Literal
    | Operator
    | Bracket
    | Quote
    | WhiteSpace
    | Repeater
    | RepeaterPlaceholder
    | RepeaterNumber
    | Field
)

OPERATORS: dict[str, OperatorType] = {op.value: op for op in OperatorType}

BRACKETS: dict[str, tuple[BracketType, bool]] = {
    "(": (BracketType.GROUP, True),
    ")": (BracketType.GROUP, False),
    "[": (BracketType.ATTRIBUTE, True),
    "]": (BracketType.ATTRIBUTE, False),
    "{": (BracketType.EXPRESSION, True),
    "}": (BracketType.EXPRESSION, False),
}

_UMLAUTS = frozenset("ÄÖÜäöü")


def token_kind(token: Token) -> str:
    """Return the token's kind name as used in error messages."""
    return type(token).__name__


def is_number(ch: str) -> bool:
    return "0" <= ch <= "9"


def is_alpha(ch: str) -> bool:
    return "a" <= ch <= "z" or "A" <= ch <= "Z"


def is_alpha_numeric_word(ch: str) -> bool:
    return is_number(ch) or is_alpha(ch) or ch == "_"


def is_space(ch: str) -> bool:
    """Horizontal whitespace: space, tab, and no-break space."""
    return ch in (" ", "\t", "\u00a0")


def is_quote(ch: str) -> bool:
    return ch in ("'", '"')


def is_element_name_char(ch: str) -> bool:
    """Return True if ch may appear in an element name."""
    return is_alpha_numeric_word(ch) or ch in _UMLAUTS or ch in ("-", ":", "!")
