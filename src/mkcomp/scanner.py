"""Character cursor shared by the abbreviation tokenizers."""

from __future__ import annotations

from collections.abc import Callable

from mkcomp.errors import LexError

Matcher = str | Callable[[str], bool]


class Scanner:
    """Cursor over ``source[start:end]``.

    ``pos`` is the read position and ``start`` marks the beginning of the
    text captured by :meth:`current`; tokenizers move ``start`` themselves.
    """

    def __init__(self, source: str, start: int = 0, end: int | None = None) -> None:
        self.source = source
        self.start = start
        self.pos = start
        self.end = len(source) if end is None else end

    def eof(self) -> bool:
        return self.pos >= self.end

    def limit(self, start: int, end: int | None = None) -> Scanner:
        """Return a new scanner limited to the given range of the same source."""
        return Scanner(self.source, start, end)

    def peek(self, offset: int = 0) -> str:
        idx = self.pos + offset
        if 0 <= idx < self.end:
            return self.source[idx]
        return ""

    def next(self) -> str:
        """Consume and return the current character, or ``""`` at the end."""
        if self.pos < self.end:
            ch = self.source[self.pos]
            self.pos += 1
            return ch
        return ""

    def eat(self, match: Matcher) -> bool:
        ch = self.peek()
        if ch and (ch == match if isinstance(match, str) else match(ch)):
            self.pos += 1
            return True
        return False

    def eat_while(self, match: Matcher) -> bool:
        start = self.pos
        while not self.eof() and self.eat(match):
            pass
        return self.pos != start

    def back_up(self, n: int = 1) -> None:
        self.pos -= n

    def current(self) -> str:
        return self.substring(self.start, self.pos)

    def substring(self, start: int, end: int | None = None) -> str:
        return self.source[start : self.end if end is None else end]

    def error(self, message: str, pos: int | None = None) -> LexError:
        return LexError(message, self.pos if pos is None else pos, self.source)
