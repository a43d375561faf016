"""Shared test fixtures and helpers."""

from __future__ import annotations

import random

import pytest

from mkcomp import expand
from mkcomp.ast import Abbreviation, AbbreviationAttribute, AbbreviationNode, TokenGroup
from mkcomp.config import Config, resolve_config
from mkcomp.convert import convert
from mkcomp.lexer import tokenize
from mkcomp.parser import parse
from mkcomp.tokens import Token


@pytest.fixture
def lex():
    """Return a helper that tokenizes an abbreviation."""

    def _lex(source: str) -> list[Token]:
        return tokenize(source)

    return _lex


@pytest.fixture
def parse_tree():
    """Return a helper that parses and converts an abbreviation without snippets."""

    def _parse(source: str, **kwargs) -> Abbreviation:
        return convert(parse(source), **kwargs)

    return _parse


@pytest.fixture
def expand_html():
    """Return a helper that expands with html syntax and optional overrides."""

    def _expand(source: str, syntax: str = "html", **kwargs) -> str:
        return expand(source, resolve_config(syntax, **kwargs))

    return _expand


def seeded_config(syntax: str = "html", seed: int = 42, **kwargs) -> Config:
    return resolve_config(syntax, random=random.Random(seed), **kwargs)


def attr(node: AbbreviationNode, name: str) -> AbbreviationAttribute:
    """Return the first attribute called *name*."""
    for a in node.attributes or ():
        if a.name == name:
            return a
    raise AssertionError(f"no attribute {name!r} on {node.name!r}")


def attr_value(node: AbbreviationNode, name: str) -> str:
    """Attribute value joined into a string (fields shown as their placeholder)."""
    value = attr(node, name).value or []
    return "".join(v if isinstance(v, str) else v.name for v in value)


def names(nodes: list[AbbreviationNode]) -> list[str | None]:
    return [n.name for n in nodes]


def text(node: AbbreviationNode) -> str:
    return "".join(v if isinstance(v, str) else v.name for v in node.value or [])


def group_names(group: TokenGroup) -> list[str]:
    """Literal names of the top-level statements of *group*."""
    result = []
    for el in group.elements:
        name = getattr(el, "name", None)
        result.append("".join(getattr(t, "value", "") for t in name) if name else "")
    return result
