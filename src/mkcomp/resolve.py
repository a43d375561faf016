"""Snippet resolution: replaces nodes named after a snippet with its expansion."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from mkcomp.ast import Abbreviation, AbbreviationNode, Container, TokenGroup, deepest_node
from mkcomp.convert import RepeatGuard, convert
from mkcomp.errors import AbbreviationError
from mkcomp.lexer import tokenize
from mkcomp.parser import Parser

if TYPE_CHECKING:
    from mkcomp.config import Config
    from mkcomp.snippets import Snippet

logger = logging.getLogger(__name__)


@dataclass
class ResolveContext:
    """State carried through one resolution run."""

    config: Config
    guard: RepeatGuard
    parsed: dict[str, TokenGroup] = field(default_factory=dict)


def resolve_snippets(
    abbr: Abbreviation, config: Config, guard: RepeatGuard | None = None
) -> Abbreviation:
    """Expand snippet references in *abbr* in place and return it.

    Every snippet draws its repeats from *guard*, so the bound covers the
    whole expansion rather than each snippet on its own.
    """
    if guard is None:
        guard = RepeatGuard.limit(config.max_repeat)
    ctx = ResolveContext(config, guard)
    _resolve_children(abbr, ctx, ())
    return abbr


def _resolve_children(
    container: Container, ctx: ResolveContext, stack: tuple[str, ...]
) -> list[AbbreviationNode]:
    """Resolve every child of *container*; *stack* holds the snippet keys being expanded."""
    children: list[AbbreviationNode] = []
    for child in container.children:
        own_children = _resolve_children(child, ctx, stack)
        expanded = _resolve_node(child, ctx, stack)
        if expanded is None:
            child.children = own_children
            children.append(child)
            continue

        children.extend(expanded.children)
        if expanded.children:
            target = deepest_node(expanded.children[-1])
            target.children.extend(own_children)

    container.children = children
    return children


def _resolve_node(
    node: AbbreviationNode, ctx: ResolveContext, stack: tuple[str, ...]
) -> Abbreviation | None:
    if not node.name:
        return None
    snippet = ctx.config.snippets.get(node.name)
    # Already being expanded: circular reference
    if snippet is None or snippet.key in stack:
        return None

    try:
        expanded = _parse_snippet(snippet, ctx)
    except AbbreviationError as exc:
        _warn(ctx.config, f'Unable to parse "{snippet.value}" snippet', exc)
        return None

    _resolve_children(expanded, ctx, stack + (snippet.key,))

    if expanded.children:
        _merge_into(node, expanded.children[0], ctx.config.options.reverse_attributes)
    return expanded


def _parse_snippet(snippet: Snippet, ctx: ResolveContext) -> Abbreviation:
    group = ctx.parsed.get(snippet.value)
    if group is None:
        source = snippet.value
        jsx = ctx.config.options.jsx_enabled
        group = Parser(tokenize(source), source, jsx=jsx).parse()
        ctx.parsed[source] = group

    # Conversion builds a fresh tree every time, so the cached statements can be shared
    return convert(
        group,
        text=None,
        variables=ctx.config.variables,
        href=ctx.config.options.markup_href,
        guard=ctx.guard,
    )


def _merge_into(source: AbbreviationNode, target: AbbreviationNode, reverse: bool) -> None:
    """Carry attributes and flags of the snippet reference over to its expansion."""
    if source.attributes is not None:
        ours = target.attributes or []
        theirs = source.attributes
        target.attributes = theirs + ours if reverse else ours + theirs
    if source.self_closing:
        target.self_closing = True
    if source.value is not None:
        target.value = source.value
    if source.repeat is not None:
        target.repeat = source.repeat


def _warn(config: Config, message: str, exc: Exception) -> None:
    if config.warn is not None:
        config.warn(message, exc)
    else:
        logger.warning("%s: %s", message, exc)
