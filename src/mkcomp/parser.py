"""Abbreviation parser: converts a token stream into a statement tree."""

from __future__ import annotations

from collections.abc import Callable

from mkcomp.ast import Statement, TokenAttribute, TokenElement, TokenGroup
from mkcomp.errors import ParseError
from mkcomp.lexer import tokenize
from mkcomp.tokens import (
    Bracket,
    BracketType,
    Literal,
    Operator,
    OperatorType,
    Quote,
    Repeater,
    RepeaterNumber,
    RepeaterPlaceholder,
    Token,
    WhiteSpace,
    token_kind,
)


class Parser:
    """Recursive descent parser over abbreviation tokens.

    Operators are consumed right after each element or group: ``>`` makes
    the node the new insertion context, ``+`` keeps the current one and
    every ``^`` pops one context off the stack.
    """

    def __init__(self, tokens: list[Token], source: str, *, jsx: bool = False) -> None:
        self._tokens = tokens
        self._source = source
        self._jsx = jsx
        self._pos = 0
        self._start = 0

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def _readable(self) -> bool:
        return self._pos < len(self._tokens)

    def _peek(self) -> Token | None:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    def _next(self) -> Token | None:
        tok = self._peek()
        if tok is not None:
            self._pos += 1
        return tok

    def _consume(self, test: Callable[[Token], bool]) -> bool:
        tok = self._peek()
        if tok is not None and test(tok):
            self._pos += 1
            return True
        return False

    def _slice(self, start: int | None = None, end: int | None = None) -> tuple[Token, ...]:
        start = self._start if start is None else start
        end = self._pos if end is None else end
        return tuple(self._tokens[start:end])

    def _error(self, message: str, token: Token | None = None) -> ParseError:
        if token is None:
            token = self._peek()
        if token is None:
            end = len(self._source)
            return ParseError(message, end, end, self._source)
        return ParseError(message, token.start, token.end, self._source)

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def parse(self) -> TokenGroup:
        result = self._statements()
        if self._readable():
            raise self._error("Unexpected character")
        return result

    def _statements(self) -> TokenGroup:
        result = TokenGroup()
        ctx: Statement = result
        stack: list[Statement] = []

        while self._readable():
            node = self._element() or self._group()
            if node is None:
                break

            ctx.elements.append(node)
            if self._consume(_is_child):
                stack.append(ctx)
                ctx = node
            elif self._consume(_is_sibling):
                continue
            elif self._consume(_is_climb):
                while True:
                    if stack:
                        ctx = stack.pop()
                    if not self._consume(_is_climb):
                        break

        return result

    def _group(self) -> TokenGroup | None:
        opening = self._peek()
        if not self._consume(_is_group_start):
            return None

        inner = self._statements()
        token = self._next()
        if token is None:
            raise self._error("Unclosed group", opening)
        if not _is_bracket(token, BracketType.GROUP, False):
            raise self._error("Unexpected character", token)
        return TokenGroup(inner.elements, self._repeater())

    def _repeater(self) -> Repeater | None:
        tok = self._peek()
        if isinstance(tok, Repeater):
            self._pos += 1
            return tok
        return None

    # ------------------------------------------------------------------
    # Elements
    # ------------------------------------------------------------------

    def _element(self) -> TokenElement | None:
        name: tuple[Token, ...] | None = None
        attributes: tuple[TokenAttribute, ...] | None = None
        value: tuple[Token, ...] | None = None
        repeat: Repeater | None = None
        self_close = False

        if self._element_name():
            name = self._slice()

        while self._readable():
            self._start = self._pos
            empty = name is None and value is None and attributes is None

            if repeat is None and not empty and self._consume(_is_repeater):
                repeat = self._tokens[self._pos - 1]  # type: ignore[assignment]
            elif value is None and self._text():
                value = self._get_text()
            elif (
                attr := self._short_attribute(OperatorType.ID)
                or self._short_attribute(OperatorType.CLASS)
                or self._attribute_set()
            ) is not None:
                added = tuple(attr) if isinstance(attr, list) else (attr,)
                attributes = added if attributes is None else attributes + added
            else:
                if not empty and self._consume(_is_close):
                    self_close = True
                    if repeat is None and self._consume(_is_repeater):
                        repeat = self._tokens[self._pos - 1]  # type: ignore[assignment]
                break

        if name is None and value is None and attributes is None:
            return None
        return TokenElement(name, attributes, value, repeat, self_close)

    def _element_name(self) -> bool:
        start = self._pos

        if self._jsx and self._consume(_is_capitalized_literal):
            # Namespaced component names, e.g. `Foo.Bar.Baz`
            while self._readable():
                pos = self._pos
                if not self._consume(_is_class) or not self._consume(_is_capitalized_literal):
                    self._pos = pos
                    break

        while self._readable() and self._consume(_is_element_name):
            pass

        if self._pos != start:
            self._start = start
            return True
        return False

    def _short_attribute(self, op: OperatorType) -> TokenAttribute | None:
        if not _is_operator(self._peek(), op):
            return None

        self._pos += 1
        count = 1
        while _is_operator(self._peek(), op):
            self._pos += 1
            count += 1

        name = (Literal("class" if op is OperatorType.CLASS else "id"),)

        # JSX allows an expression as class name, e.g. `.{styles.foo}`
        if self._jsx and self._text():
            return TokenAttribute(name, self._get_text(), count > 1, expression=True)

        value = self._slice() if self._literal() else None
        return TokenAttribute(name, value, count > 1)

    # ------------------------------------------------------------------
    # Attribute sets
    # ------------------------------------------------------------------

    def _attribute_set(self) -> list[TokenAttribute] | None:
        opening = self._peek()
        if not self._consume(_is_attribute_set_start):
            return None

        attributes: list[TokenAttribute] = []
        while self._readable():
            attr = self._attribute()
            if attr is not None:
                attributes.append(attr)
            elif self._consume(_is_attribute_set_end):
                return attributes
            elif not self._consume(_is_whitespace):
                raise self._error(f'Unexpected "{token_kind(self._peek())}" token')

        raise self._error("Unclosed attribute set", opening)

    def _attribute(self) -> TokenAttribute | None:
        if self._quoted():
            # Quoted value alone is the value of the default attribute
            return TokenAttribute(value=self._slice())

        if self._literal(allow_brackets=True):
            name = self._slice()
            value = None
            if self._consume(_is_equals) and (self._quoted() or self._literal(allow_brackets=True)):
                value = self._slice()
            return TokenAttribute(name, value)

        return None

    def _quoted(self) -> bool:
        start = self._pos
        quote = self._peek()
        if not isinstance(quote, Quote):
            return False

        self._pos += 1
        while self._readable():
            if _is_quote(self._next(), quote.single):
                self._start = start
                return True

        raise self._error("Unclosed quote", quote)

    def _literal(self, allow_brackets: bool = False) -> bool:
        start = self._pos
        depth = {ctx: 0 for ctx in BracketType}

        while self._readable():
            tok = self._peek()
            if depth[BracketType.EXPRESSION]:
                # Inside an expression, consume everything up to its end
                if _is_bracket(tok, BracketType.EXPRESSION):
                    depth[BracketType.EXPRESSION] += 1 if tok.open else -1  # type: ignore[union-attr]
            elif isinstance(tok, (Quote, Operator, WhiteSpace, Repeater)):
                break
            elif isinstance(tok, Bracket):
                if not allow_brackets:
                    break
                if tok.open:
                    depth[tok.context] += 1
                elif not depth[tok.context]:
                    # Unmatched closing bracket belongs to the caller
                    break
                else:
                    depth[tok.context] -= 1
            self._pos += 1

        if start != self._pos:
            self._start = start
            return True
        return False

    # ------------------------------------------------------------------
    # Text
    # ------------------------------------------------------------------

    def _text(self) -> bool:
        start = self._pos
        opening = self._peek()
        if not self._consume(_is_text_start):
            return False

        depth = 0
        while self._readable():
            tok = self._next()
            if _is_bracket(tok, BracketType.EXPRESSION):
                if tok.open:  # type: ignore[union-attr]
                    depth += 1
                elif not depth:
                    self._start = start
                    return True
                else:
                    depth -= 1

        raise self._error("Unclosed text", opening)

    def _get_text(self) -> tuple[Token, ...]:
        start = self._start
        end = self._pos
        if _is_bracket(self._tokens[start], BracketType.EXPRESSION, True):
            start += 1
        if _is_bracket(self._tokens[end - 1], BracketType.EXPRESSION, False):
            end -= 1
        return self._slice(start, end)


# ----------------------------------------------------------------------
# Token predicates
# ----------------------------------------------------------------------


def _is_bracket(
    tok: Token | None, context: BracketType | None = None, is_open: bool | None = None
) -> bool:
    return (
        isinstance(tok, Bracket)
        and (context is None or tok.context is context)
        and (is_open is None or tok.open == is_open)
    )


def _is_operator(tok: Token | None, op: OperatorType | None = None) -> bool:
    return isinstance(tok, Operator) and (op is None or tok.operator is op)


def _is_quote(tok: Token | None, single: bool | None = None) -> bool:
    return isinstance(tok, Quote) and (single is None or tok.single == single)


def _is_whitespace(tok: Token) -> bool:
    return isinstance(tok, WhiteSpace)


def _is_repeater(tok: Token) -> bool:
    return isinstance(tok, Repeater)


def _is_equals(tok: Token) -> bool:
    return _is_operator(tok, OperatorType.EQUAL)


def _is_child(tok: Token) -> bool:
    return _is_operator(tok, OperatorType.CHILD)


def _is_sibling(tok: Token) -> bool:
    return _is_operator(tok, OperatorType.SIBLING)


def _is_climb(tok: Token) -> bool:
    return _is_operator(tok, OperatorType.CLIMB)


def _is_close(tok: Token) -> bool:
    return _is_operator(tok, OperatorType.CLOSE)


def _is_class(tok: Token) -> bool:
    return _is_operator(tok, OperatorType.CLASS)


def _is_capitalized_literal(tok: Token) -> bool:
    return isinstance(tok, Literal) and "A" <= tok.value[:1] <= "Z"


def _is_element_name(tok: Token) -> bool:
    return isinstance(tok, (Literal, RepeaterNumber, RepeaterPlaceholder))


def _is_attribute_set_start(tok: Token) -> bool:
    return _is_bracket(tok, BracketType.ATTRIBUTE, True)


def _is_attribute_set_end(tok: Token) -> bool:
    return _is_bracket(tok, BracketType.ATTRIBUTE, False)


def _is_text_start(tok: Token) -> bool:
    return _is_bracket(tok, BracketType.EXPRESSION, True)


def _is_group_start(tok: Token) -> bool:
    return _is_bracket(tok, BracketType.GROUP, True)


def parse(source: str, *, jsx: bool = False) -> TokenGroup:
    """Convenience function: tokenize and parse an abbreviation."""
    tokens = tokenize(source)
    return Parser(tokens, source, jsx=jsx).parse()
