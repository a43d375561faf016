"""Component markup from an abbreviation, plus the selectors it uses."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass

from mkcomp import expand
from mkcomp.config import Config, resolve_config
from mkcomp.errors import AbbreviationError

logger = logging.getLogger(__name__)

DEFAULT_ABBREVIATION = "div.container"

_COMMENT_RE = re.compile(r"<!--.*?-->", re.S)
_CLASS_RE = re.compile(r'\b(?:class|className)="([^"]+)"')
_ID_RE = re.compile(r'\bid="([^"]+)"')


@dataclass(frozen=True, slots=True)
class StructureResult:
    markup: str
    classes: list[str]
    ids: list[str]


def default_config() -> Config:
    """JSX output with two-space indentation."""
    return resolve_config("jsx", options={"indent": "  "})


def expand_structure(
    abbreviation: str,
    config: Config | None = None,
    *,
    warn: Callable[[str], None] | None = None,
) -> StructureResult:
    """Expand *abbreviation* into component markup.

    A malformed abbreviation is reported through *warn* (or the logger)
    and replaced by a bare container so a batch can carry on.
    """
    if config is None:
        config = default_config()

    try:
        markup = _expand(abbreviation or DEFAULT_ABBREVIATION, config)
    except AbbreviationError as exc:
        message = f"Abbreviation expansion failed: {exc}. Using default structure."
        if warn is not None:
            warn(message)
        else:
            logger.warning(message)
        markup = _expand(DEFAULT_ABBREVIATION, config)

    classes, ids = extract_selectors(markup)
    return StructureResult(markup, classes, ids)


def _expand(abbreviation: str, config: Config) -> str:
    return _COMMENT_RE.sub("", expand(abbreviation, config)).strip()


def extract_selectors(markup: str) -> tuple[list[str], list[str]]:
    """Return the distinct class names and ids found in *markup*, in order."""
    classes: dict[str, None] = {}
    for m in _CLASS_RE.finditer(markup):
        for name in m.group(1).split():
            classes[name] = None

    ids = dict.fromkeys(m.group(1) for m in _ID_RE.finditer(markup))
    return list(classes), list(ids)
