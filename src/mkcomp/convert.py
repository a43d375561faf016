"""Statement tree to abbreviation tree conversion: unrolls repeaters, inserts text."""

from __future__ import annotations

import re
import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from mkcomp.ast import (
    Abbreviation,
    AbbreviationAttribute,
    AbbreviationNode,
    RepeatState,
    Statement,
    TokenAttribute,
    TokenElement,
    TokenGroup,
    Value,
    ValueType,
    deepest_node,
    is_field,
)
from mkcomp.parser import Parser
from mkcomp.lexer import tokenize
from mkcomp.tokens import (
    Bracket,
    BracketType,
    Field,
    Literal,
    Operator,
    Quote,
    Repeater,
    RepeaterNumber,
    RepeaterPlaceholder,
    Token,
    WhiteSpace,
)

if TYPE_CHECKING:
    from mkcomp.config import Config

_URL_RE = re.compile(r"^((https?:|ftp:|file:)?//|(www|ftp)\.)[^ ]*$")
_EMAIL_RE = re.compile(r"^[\w.-]+@([\w-]+\.)+[\w-]{2,}$")

_BRACKET_CHARS: dict[tuple[BracketType, bool], str] = {
    (BracketType.GROUP, True): "(",
    (BracketType.GROUP, False): ")",
    (BracketType.ATTRIBUTE, True): "[",
    (BracketType.ATTRIBUTE, False): "]",
    (BracketType.EXPRESSION, True): "{",
    (BracketType.EXPRESSION, False): "}",
}

_UNSET = object()

# Innermost repeater last
Repeaters = tuple[RepeatState, ...]


@dataclass
class RepeatGuard:
    """Iterations left for all repeaters of one expansion, snippets included."""

    remaining: int

    @classmethod
    def limit(cls, max_repeat: int | None) -> RepeatGuard:
        return cls(max_repeat if max_repeat is not None else sys.maxsize)

    def spend(self) -> bool:
        """Count one iteration; false once the budget is used up."""
        self.remaining -= 1
        return self.remaining > 0


@dataclass
class ConvertState:
    """State shared by one conversion run."""

    text: str | Sequence[str] | None
    clean_text: str | list[str] | None
    variables: Mapping[str, str]
    guard: RepeatGuard
    inserted: bool = False
    text_inserted: bool = False

    def get_text(self, pos: int | None) -> str:
        self.text_inserted = True
        text = self.text
        if isinstance(text, str) or text is None:
            return text or ""
        clean = self.clean_text
        assert isinstance(clean, list)
        if pos is not None and 0 <= pos < len(clean):
            return clean[pos]
        if pos is None:
            return "\n".join(text)
        return text[pos] if 0 <= pos < len(text) else ""

    def get_variable(self, name: str) -> str:
        value = self.variables.get(name)
        return value if value is not None else name


def convert(
    group: TokenGroup,
    *,
    text: str | Sequence[str] | None = None,
    variables: Mapping[str, str] | None = None,
    max_repeat: int | None = None,
    href: bool = True,
    guard: RepeatGuard | None = None,
) -> Abbreviation:
    """Convert parsed statements into an abbreviation tree.

    Every repeated statement is converted once per iteration. ``text`` is
    consumed by ``$#`` placeholders and implicit repeaters; text that no
    node consumed ends up in the deepest node of the result.
    """
    clean_text: str | list[str] | None
    if text is None or isinstance(text, str):
        clean_text = text
    else:
        clean_text = [s for s in text if s.strip()]

    state = ConvertState(
        text=text,
        clean_text=clean_text,
        variables=variables or {},
        guard=guard if guard is not None else RepeatGuard.limit(max_repeat),
    )
    result = Abbreviation(_convert_group(group, state, (), None))

    if text is not None and not state.text_inserted and result.children:
        deepest = deepest_node(result.children[-1])
        value = text if isinstance(text, str) else "\n".join(text)
        insert_text(deepest, value)
        if deepest.name == "a" and href:
            insert_href(deepest, value)

    return result


def parse_abbreviation(
    source: str, config: Config, *, text: object = _UNSET, guard: RepeatGuard | None = None
) -> Abbreviation:
    """Tokenize, parse and convert *source* with the settings of *config*.

    ``text`` overrides ``config.text``; pass ``None`` to convert without
    replacement text. Passing *guard* shares one repeat budget with later
    snippet expansion.
    """
    group = Parser(tokenize(source), source, jsx=config.options.jsx_enabled).parse()
    return convert(
        group,
        text=config.text if text is _UNSET else text,  # type: ignore[arg-type]
        variables=config.variables,
        max_repeat=config.max_repeat,
        href=config.options.markup_href,
        guard=guard,
    )


# ----------------------------------------------------------------------
# Statements
# ----------------------------------------------------------------------


def _convert_statement(
    node: Statement, state: ConvertState, repeaters: Repeaters
) -> list[AbbreviationNode]:
    if node.repeat is None:
        return _convert_node(node, state, repeaters, None)

    repeater = node.repeat
    if repeater.implicit and isinstance(state.clean_text, list):
        count = len(state.clean_text)
    else:
        count = repeater.count or 1

    result: list[AbbreviationNode] = []
    for i in range(count):
        repeat = RepeatState(count, i, repeater.implicit)
        if repeater.implicit:
            # Only `$#` inside this iteration counts
            state.inserted = False
        items = _convert_node(node, state, repeaters + (repeat,), repeat)
        if repeater.implicit and not state.inserted and items:
            # No `$#` inside: the item text goes into the deepest node
            insert_text(deepest_node(items[-1]), state.get_text(i))
        result.extend(items)

        # Always keep at least one iteration
        if not state.guard.spend():
            break

    if repeater.implicit:
        state.inserted = True
    return result


def _convert_node(
    node: Statement, state: ConvertState, repeaters: Repeaters, repeat: RepeatState | None
) -> list[AbbreviationNode]:
    if isinstance(node, TokenGroup):
        return _convert_group(node, state, repeaters, repeat)
    return _convert_element(node, state, repeaters, repeat)


def _convert_group(
    group: TokenGroup, state: ConvertState, repeaters: Repeaters, repeat: RepeatState | None
) -> list[AbbreviationNode]:
    result: list[AbbreviationNode] = []
    for child in group.elements:
        result.extend(_convert_statement(child, state, repeaters))
    if repeat is not None:
        for item in result:
            if item.repeat is None:
                item.repeat = repeat
    return result


def _convert_element(
    node: TokenElement, state: ConvertState, repeaters: Repeaters, repeat: RepeatState | None
) -> list[AbbreviationNode]:
    elem = AbbreviationNode(
        name=_stringify_name(node.name, state, repeaters) if node.name is not None else None,
        value=_stringify_value(node.value, state, repeaters) if node.value is not None else None,
        repeat=repeat,
        self_closing=node.self_close,
    )

    children: list[AbbreviationNode] = []
    for child in node.elements:
        children.extend(_convert_statement(child, state, repeaters))

    if node.attributes is not None:
        elem.attributes = [_convert_attribute(a, state, repeaters) for a in node.attributes]

    # Text-only node without fields: children become its siblings
    if (
        not elem.name
        and elem.attributes is None
        and elem.value is not None
        and not any(is_field(v) for v in elem.value)
    ):
        return [elem, *children]

    elem.children = children
    return [elem]


def _convert_attribute(
    attr: TokenAttribute, state: ConvertState, repeaters: Repeaters
) -> AbbreviationAttribute:
    name = _stringify_name(attr.name, state, repeaters) if attr.name else None
    value_type = ValueType.EXPRESSION if attr.expression else ValueType.RAW
    implied = bool(name) and name[0] == "!"
    boolean = bool(name) and name[-1] == "."

    if name and (implied or boolean):
        name = name[1 if implied else 0 : -1 if boolean else None]

    value: list[Value] | None = None
    if attr.value is not None:
        tokens = list(attr.value)
        first = tokens[0] if tokens else None
        if isinstance(first, Quote):
            # Strip quotes but remember the quote style
            tokens.pop(0)
            if tokens and isinstance(tokens[-1], Quote) and tokens[-1].single == first.single:
                tokens.pop()
            value_type = ValueType.SINGLE_QUOTE if first.single else ValueType.DOUBLE_QUOTE
        elif isinstance(first, Bracket) and first.context is BracketType.EXPRESSION and first.open:
            value_type = ValueType.EXPRESSION
            tokens.pop(0)
            last = tokens[-1] if tokens else None
            if isinstance(last, Bracket) and last.context is BracketType.EXPRESSION and not last.open:
                tokens.pop()
        value = _stringify_value(tokens, state, repeaters)

    return AbbreviationAttribute(
        name=name,
        value=value,
        boolean=boolean,
        implied=implied,
        value_type=value_type,
        multiple=attr.multiple,
    )


# ----------------------------------------------------------------------
# Token stringification
# ----------------------------------------------------------------------


def _stringify_name(tokens: Sequence[Token], state: ConvertState, repeaters: Repeaters) -> str:
    return "".join(_stringify(tok, state, repeaters) for tok in tokens)


def _stringify_value(
    tokens: Sequence[Token], state: ConvertState, repeaters: Repeaters
) -> list[Value]:
    """Stringify value tokens, keeping tab-stop fields as separate items."""
    result: list[Value] = []
    buf: list[str] = []
    for tok in tokens:
        if is_field(tok):
            if buf:
                result.append("".join(buf))
                buf.clear()
            result.append(tok)  # type: ignore[arg-type]
        else:
            buf.append(_stringify(tok, state, repeaters))
    if buf:
        result.append("".join(buf))
    return result


def _stringify(tok: Token, state: ConvertState, repeaters: Repeaters) -> str:
    match tok:
        case Literal(value=value):
            return value
        case Quote(single=single):
            return "'" if single else '"'
        case Bracket(context=context, open=is_open):
            return _BRACKET_CHARS[(context, is_open)]
        case Operator(operator=op):
            return op.value
        case WhiteSpace():
            return " "
        case Field(index=index, name=name):
            if index is not None:
                return f"${{{index}:{name}}}" if name else f"${{{index}}}"
            return state.get_variable(name) if name else ""
        case RepeaterPlaceholder():
            return _repeater_placeholder(state, repeaters)
        case RepeaterNumber():
            return _repeater_number(tok, repeaters)
        case Repeater(count=count, implicit=implicit):
            return "*" if implicit else f"*{count}"
    return ""


def _repeater_placeholder(state: ConvertState, repeaters: Repeaters) -> str:
    # Closest implicit repeater supplies the text index
    value: int | None = None
    for repeat in reversed(repeaters):
        if repeat.implicit:
            value = repeat.value
            break
    state.inserted = True
    return state.get_text(value)


def _repeater_number(tok: RepeaterNumber, repeaters: Repeaters) -> str:
    value = 1
    if repeaters:
        last_ix = len(repeaters) - 1
        repeat = repeaters[last_ix]
        if tok.reverse:
            value = tok.base + repeat.count - repeat.value - 1
        else:
            value = tok.base + repeat.value
        if tok.parent:
            parent_ix = max(0, last_ix - tok.parent)
            if parent_ix != last_ix:
                value += repeat.count * repeaters[parent_ix].value
    return str(value).zfill(tok.size)


# ----------------------------------------------------------------------
# Text insertion
# ----------------------------------------------------------------------


def insert_text(node: AbbreviationNode, text: str) -> None:
    """Append *text* to the node's value."""
    if node.value:
        if isinstance(node.value[-1], str):
            node.value[-1] += text
        else:
            node.value.append(text)
    else:
        node.value = [text]


def insert_href(node: AbbreviationNode, text: str) -> None:
    """Fill the ``href`` of a link from URL- or email-like *text*."""
    if _URL_RE.match(text):
        href = text
        if not re.search(r"\w+:", href) and not href.startswith("//"):
            href = f"http://{href}"
    elif _EMAIL_RE.match(text):
        href = f"mailto:{text}"
    else:
        return

    attrs = node.attributes
    existing = next((a for a in attrs or () if a.name == "href"), None)
    if existing is None:
        if attrs is None:
            node.attributes = attrs = []
        attrs.append(
            AbbreviationAttribute("href", [href], value_type=ValueType.DOUBLE_QUOTE)
        )
    elif not existing.value:
        existing.value = [href]
