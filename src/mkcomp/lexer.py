"""Abbreviation lexer: converts an abbreviation string into a flat token stream."""

from __future__ import annotations

from mkcomp.scanner import Scanner
from mkcomp.tokens import (
    BRACKETS,
    OPERATORS,
    Bracket,
    BracketType,
    Field,
    Literal,
    Operator,
    OperatorType,
    Quote,
    Repeater,
    RepeaterNumber,
    RepeaterPlaceholder,
    Token,
    WhiteSpace,
    is_alpha,
    is_element_name_char,
    is_number,
    is_quote,
    is_space,
)


class Lexer:
    """Tokenize an abbreviation into a list of tokens.

    The same character can be an operator, part of a name or plain text
    depending on whether we are inside ``[...]``, ``{...}`` or a quoted
    value, so the lexer tracks bracket depth per context and the active
    quote character while it runs.
    """

    def __init__(self, source: str) -> None:
        self._source = source
        self._scanner = Scanner(source)
        self._tokens: list[Token] = []
        self._depth = {ctx: 0 for ctx in BracketType}
        self._quote = ""

    def tokenize(self) -> list[Token]:
        """Tokenize the full source and return the token list."""
        scanner = self._scanner
        while not scanner.eof():
            ch = scanner.peek()
            token = self._next_token()
            if token is None:
                raise scanner.error("Unexpected character")

            self._tokens.append(token)
            if isinstance(token, Quote):
                self._quote = "" if ch == self._quote else ch
            elif isinstance(token, Bracket):
                self._depth[token.context] += 1 if token.open else -1

        return self._tokens

    def _next_token(self) -> Token | None:
        return (
            self._field()
            or self._repeater_placeholder()
            or self._repeater_number()
            or self._repeater()
            or self._whitespace()
            or self._literal()
            or self._operator()
            or self._quote_token()
            or self._bracket()
        )

    # ------------------------------------------------------------------
    # Context helpers
    # ------------------------------------------------------------------

    @property
    def _in_attribute(self) -> bool:
        return self._depth[BracketType.ATTRIBUTE] > 0

    @property
    def _in_expression(self) -> bool:
        return self._depth[BracketType.EXPRESSION] > 0

    def _is_allowed_operator(self, ch: str) -> bool:
        op = OPERATORS.get(ch)
        if op is None or self._quote or self._in_expression:
            # No operators inside quoted values or expressions
            return False
        # Inside attributes, only `=` is an operator
        return not self._in_attribute or op is OperatorType.EQUAL

    def _is_allowed_space(self, ch: str) -> bool:
        return is_space(ch) and not self._in_expression

    def _is_allowed_repeater(self, ch: str) -> bool:
        return ch == "*" and not self._in_attribute and not self._in_expression

    # ------------------------------------------------------------------
    # Fields and repeaters
    # ------------------------------------------------------------------

    def _field(self) -> Field | None:
        scanner = self._scanner
        start = scanner.pos
        # Fields are only recognized inside expressions and attributes
        if (
            (self._in_expression or self._in_attribute)
            and scanner.eat("$")
            and scanner.eat("{")
        ):
            scanner.start = scanner.pos
            index: int | None = None
            name = ""

            if scanner.eat_while(is_number):
                index = int(scanner.current())
                name = self._placeholder() if scanner.eat(":") else ""
            elif is_alpha(scanner.peek()):
                name = self._placeholder()

            if scanner.eat("}"):
                return Field(index, name, start, scanner.pos)

            raise scanner.error("Expecting }")

        scanner.pos = start
        return None

    def _placeholder(self) -> str:
        scanner = self._scanner
        stack: list[int] = []
        scanner.start = scanner.pos

        while not scanner.eof():
            if scanner.eat("{"):
                stack.append(scanner.pos)
            elif scanner.eat("}"):
                if not stack:
                    scanner.back_up()
                    break
                stack.pop()
            else:
                scanner.pos += 1

        if stack:
            scanner.pos = stack.pop()
            raise scanner.error("Expecting }")

        return scanner.current()

    def _repeater_placeholder(self) -> RepeaterPlaceholder | None:
        scanner = self._scanner
        start = scanner.pos
        if scanner.eat("$") and scanner.eat("#"):
            return RepeaterPlaceholder(start, scanner.pos)
        scanner.pos = start
        return None

    def _repeater_number(self) -> RepeaterNumber | None:
        scanner = self._scanner
        start = scanner.pos
        if not scanner.eat_while("$"):
            return None

        size = scanner.pos - start
        reverse = False
        base = 1
        parent = 0

        if scanner.eat("@"):
            while scanner.eat("^"):
                parent += 1
            reverse = scanner.eat("-")
            scanner.start = scanner.pos
            if scanner.eat_while(is_number):
                base = int(scanner.current())

        scanner.start = start
        return RepeaterNumber(size, reverse, base, parent, start, scanner.pos)

    def _repeater(self) -> Repeater | None:
        scanner = self._scanner
        start = scanner.pos
        if not scanner.eat("*"):
            return None

        scanner.start = scanner.pos
        if scanner.eat_while(is_number):
            return Repeater(int(scanner.current()), False, start, scanner.pos)
        return Repeater(1, True, start, scanner.pos)

    # ------------------------------------------------------------------
    # Text runs
    # ------------------------------------------------------------------

    def _whitespace(self) -> WhiteSpace | None:
        scanner = self._scanner
        start = scanner.pos
        if scanner.eat_while(is_space):
            return WhiteSpace(scanner.substring(start, scanner.pos), start, scanner.pos)
        return None

    def _escaped(self) -> bool:
        scanner = self._scanner
        if scanner.eat("\\"):
            scanner.start = scanner.pos
            if not scanner.eof():
                scanner.pos += 1
            return True
        return False

    def _literal(self) -> Literal | None:
        scanner = self._scanner
        start = scanner.pos
        expression_start = self._depth[BracketType.EXPRESSION]
        value: list[str] = []

        while not scanner.eof():
            # Escaped characters are taken as-is in every context
            if self._escaped():
                value.append(scanner.current())
                continue

            ch = scanner.peek()

            if (
                ch == "/"
                and not self._quote
                and not self._in_expression
                and not self._in_attribute
                and is_number(scanner.peek(-1))
                and is_number(scanner.peek(1))
            ):
                # `/` between digits is part of a class name, e.g. `col-12/6`
                value.append(scanner.next())
                continue

            if ch == self._quote or ch == "$" or self._is_allowed_operator(ch):
                break

            if expression_start:
                # Nested braces are part of the text, e.g. span{{foo}}
                if ch == "{":
                    self._depth[BracketType.EXPRESSION] += 1
                elif ch == "}":
                    if self._depth[BracketType.EXPRESSION] > expression_start:
                        self._depth[BracketType.EXPRESSION] -= 1
                    else:
                        break
            elif not self._quote:
                if not self._in_attribute and not is_element_name_char(ch):
                    break
                if (
                    self._is_allowed_space(ch)
                    or self._is_allowed_repeater(ch)
                    or is_quote(ch)
                    or ch in BRACKETS
                ):
                    break

            value.append(scanner.next())

        if start != scanner.pos:
            scanner.start = start
            return Literal("".join(value), start, scanner.pos)
        return None

    # ------------------------------------------------------------------
    # Single-character tokens
    # ------------------------------------------------------------------

    def _operator(self) -> Operator | None:
        scanner = self._scanner
        op = OPERATORS.get(scanner.peek())
        if op is None:
            return None
        start = scanner.pos
        scanner.pos += 1
        return Operator(op, start, scanner.pos)

    def _quote_token(self) -> Quote | None:
        scanner = self._scanner
        ch = scanner.peek()
        if not is_quote(ch):
            return None
        start = scanner.pos
        scanner.pos += 1
        return Quote(ch == "'", start, scanner.pos)

    def _bracket(self) -> Bracket | None:
        scanner = self._scanner
        ch = scanner.peek()
        if ch not in BRACKETS:
            return None
        context, is_open = BRACKETS[ch]
        start = scanner.pos
        scanner.pos += 1
        return Bracket(context, is_open, start, scanner.pos)


def tokenize(source: str) -> list[Token]:
    """Convenience function: tokenize source and return token list."""
    return Lexer(source).tokenize()
