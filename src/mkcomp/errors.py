"""Error types with formatted source context."""

from __future__ import annotations

from mkcomp.tokens import Position, Span


def position_at(source: str, offset: int) -> Position:
    """Convert a character offset into a 1-based line/column position."""
    offset = max(0, min(offset, len(source)))
    line = source.count("\n", 0, offset) + 1
    line_start = source.rfind("\n", 0, offset) + 1
    return Position(line, offset - line_start + 1, offset)


class AbbreviationError(Exception):
    """Base class for errors raised while expanding an abbreviation.

    Carries the offending ``offset`` into ``source`` so callers can point
    at the problem or fall back to a default fragment.
    """

    def __init__(self, message: str, offset: int, source: str) -> None:
        self.message = message
        self.offset = offset
        self.source = source
        self.position = position_at(source, offset)
        super().__init__(f"{message} at {offset}")

    def _underline_len(self, source_line: str) -> int:
        return max(1, min(2, len(source_line) - self.position.column + 1))

    def format(self, filename: str = "abbreviation") -> str:
        lines = self.source.splitlines(keepends=True)
        line_idx = self.position.line - 1
        col = self.position.column

        if 0 <= line_idx < len(lines):
            source_line = lines[line_idx].rstrip("\n").rstrip("\r")
        else:
            source_line = ""

        pad = " " * (col - 1)
        carets = "^" * self._underline_len(source_line)

        line_num = str(self.position.line)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        return (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{self.position.line}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}{carets}"
        )


class LexError(AbbreviationError):
    """Raised on the first tokenizing error."""


class ParseError(AbbreviationError):
    """Raised on the first token-parsing error, with the offending token's span."""

    def __init__(self, message: str, start: int, end: int, source: str) -> None:
        super().__init__(message, start, source)
        self.span = Span(self.position, position_at(source, end))

    def _underline_len(self, source_line: str) -> int:
        # Underline the full token when on one line, otherwise to end of line
        if self.span.end.line == self.span.start.line:
            return max(1, self.span.end.column - self.span.start.column)
        return max(1, len(source_line) - self.span.start.column + 1)
