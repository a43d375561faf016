"""Component scaffolding with an abbreviation-expansion engine."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mkcomp.ast import Abbreviation
    from mkcomp.config import Config

__version__ = "0.1.0"


def parse(abbreviation: str, config: Config | None = None) -> Abbreviation:
    """Parse an abbreviation into a resolved, transformed tree."""
    from mkcomp.config import resolve_config
    from mkcomp.convert import RepeatGuard, parse_abbreviation
    from mkcomp.resolve import resolve_snippets
    from mkcomp.transform import transform

    if config is None:
        config = resolve_config()
    guard = RepeatGuard.limit(config.max_repeat)
    abbr = parse_abbreviation(abbreviation, config, guard=guard)
    abbr = resolve_snippets(abbr, config, guard)
    return transform(abbr, config)


def stringify(abbr: Abbreviation, config: Config) -> str:
    """Render a parsed tree in the output syntax of *config*."""
    from mkcomp.indent import STYLES, render_indent
    from mkcomp.render import render

    style = STYLES.get(config.syntax)
    if style is not None:
        return render_indent(abbr, config, style)
    return render(abbr, config)


def expand(abbreviation: str, config: Config | None = None) -> str:
    """Expand an abbreviation such as ``ul>li.item*3`` into markup.

    Nesting deeper than the interpreter stack allows raises
    ``AbbreviationError`` like any other malformed input.
    """
    from mkcomp.config import resolve_config
    from mkcomp.errors import AbbreviationError

    if config is None:
        config = resolve_config()
    try:
        return stringify(parse(abbreviation, config), config)
    except RecursionError:
        raise AbbreviationError("Abbreviation is nested too deeply", 0, abbreviation) from None
