"""Per-node rewrites applied after snippet resolution."""

from __future__ import annotations

import random
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from mkcomp.ast import Abbreviation, AbbreviationAttribute, AbbreviationNode, Container, Value
from mkcomp.lorem import lorem

if TYPE_CHECKING:
    from mkcomp.config import Config


@dataclass
class BemData:
    class_names: list[str]
    block: str | None = None


@dataclass
class TransformContext:
    """State carried through one transform run."""

    config: Config
    rng: random.Random
    # id(node) -> parsed class names; nodes are mutable and unhashable
    bem: dict[int, BemData] = field(default_factory=dict)


def transform(abbr: Abbreviation, config: Config) -> Abbreviation:
    """Apply every node pass to *abbr* in place, parents before children."""
    ctx = TransformContext(config, config.random or random.Random())
    walk(abbr, lambda node, ancestors: _transform_node(node, ancestors, ctx))
    return abbr


def walk(
    root: Abbreviation,
    fn: Callable[[AbbreviationNode, list[Container]], None],
) -> None:
    """Call *fn* on every node in pre-order with the list of its ancestors."""
    ancestors: list[Container] = [root]

    def visit(node: AbbreviationNode) -> None:
        fn(node, ancestors)
        ancestors.append(node)
        for child in node.children:
            visit(child)
        ancestors.pop()

    for child in root.children:
        visit(child)


def _transform_node(
    node: AbbreviationNode, ancestors: list[Container], ctx: TransformContext
) -> None:
    config = ctx.config
    implicit_tag(node, ancestors, config)
    merge_attributes(node, config)
    if lorem(node, ancestors, ctx.rng) and node.repeat is not None and len(ancestors) > 1:
        # Repeated lorem inside an element, e.g. `ul>lorem4*3`, gets a tag
        resolve_implicit_tag(node, ancestors, config)
    if config.syntax == "xsl":
        xsl_cleanup(node)
    if config.type == "markup":
        label_cleanup(node)
    if config.options.bem_enabled:
        bem(node, ancestors, ctx)


# ----------------------------------------------------------------------
# Implicit tag names
# ----------------------------------------------------------------------


def implicit_tag(node: AbbreviationNode, ancestors: Sequence[Container], config: Config) -> None:
    """Name an element given only attributes, e.g. `.item` or `#main`."""
    if not node.name and node.attributes is not None:
        resolve_implicit_tag(node, ancestors, config)


def resolve_implicit_tag(
    node: AbbreviationNode, ancestors: Sequence[Container], config: Config
) -> None:
    parent = _parent_element(ancestors)
    parent_name = (parent.name if parent is not None else config.context or "").lower()
    options = config.options
    node.name = options.element_map.get(parent_name) or (
        "span" if parent_name in options.inline_elements else "div"
    )


def _parent_element(ancestors: Sequence[Container]) -> AbbreviationNode | None:
    for ancestor in reversed(ancestors):
        if isinstance(ancestor, AbbreviationNode) and ancestor.name:
            return ancestor
    return None


# ----------------------------------------------------------------------
# Attribute merging
# ----------------------------------------------------------------------


def merge_attributes(node: AbbreviationNode, config: Config) -> None:
    """Collapse attributes sharing a name into the first occurrence."""
    if node.attributes is None:
        return

    reverse = config.options.reverse_attributes
    attributes: list[AbbreviationAttribute] = []
    lookup: dict[str, AbbreviationAttribute] = {}

    for attr in node.attributes:
        if not attr.name:
            attributes.append(attr)
            continue

        prev = lookup.get(attr.name)
        if prev is None:
            # Copy so merging never touches the original declaration
            prev = AbbreviationAttribute(
                attr.name,
                list(attr.value) if attr.value is not None else None,
                attr.boolean,
                attr.implied,
                attr.value_type,
                attr.multiple,
            )
            lookup[attr.name] = prev
            attributes.append(prev)
        elif attr.name == "class":
            prev.value = _merge_value(prev.value, attr.value, " ")
        else:
            if not reverse:
                prev.value = list(attr.value) if attr.value is not None else None
            prev.implied = prev.implied or attr.implied
            prev.boolean = prev.boolean or attr.boolean
            prev.value_type = attr.value_type

    node.attributes = attributes


def _merge_value(
    prev: list[Value] | None, new: list[Value] | None, glue: str
) -> list[Value] | None:
    if prev is not None and new is not None:
        if prev:
            _append(prev, glue)
        for token in new:
            _append(prev, token)
        return prev
    result = prev if prev is not None else new
    return list(result) if result is not None else None


def _append(tokens: list[Value], value: Value) -> None:
    if tokens and isinstance(tokens[-1], str) and isinstance(value, str):
        tokens[-1] += value
    else:
        tokens.append(value)


# ----------------------------------------------------------------------
# Syntax cleanups
# ----------------------------------------------------------------------

_XSL_VALUE_ELEMENTS = frozenset({"xsl:variable", "xsl:with-param"})


def xsl_cleanup(node: AbbreviationNode) -> None:
    """Drop ``select`` from XSL value elements that carry their own content."""
    if (
        node.name in _XSL_VALUE_ELEMENTS
        and node.attributes is not None
        and (node.children or node.value)
    ):
        node.attributes = [a for a in node.attributes if a.name != "select"]


def label_cleanup(node: AbbreviationNode) -> None:
    """A label wrapping its input needs neither ``for`` nor ``id``."""
    if node.name != "label":
        return
    field_node = _find(node, lambda n: n.name in ("input", "textarea"))
    if field_node is None:
        return
    if node.attributes is not None:
        node.attributes = [
            a for a in node.attributes if not (a.name == "for" and _is_empty_attribute(a))
        ]
    if field_node.attributes is not None:
        field_node.attributes = [
            a for a in field_node.attributes if not (a.name == "id" and _is_empty_attribute(a))
        ]


def _find(
    node: AbbreviationNode, test: Callable[[AbbreviationNode], bool]
) -> AbbreviationNode | None:
    for child in node.children:
        if test(child):
            return child
        found = _find(child, test)
        if found is not None:
            return found
    return None


def _is_empty_attribute(attr: AbbreviationAttribute) -> bool:
    if attr.value is None:
        return True
    if len(attr.value) == 1:
        token = attr.value[0]
        # A lone unnamed field is still empty
        return not isinstance(token, str) and not token.name
    return False


# ----------------------------------------------------------------------
# BEM class names
# ----------------------------------------------------------------------

_BEM_ELEMENT_RE = re.compile(r"^(-+)([a-z0-9]+[a-z0-9-]*)", re.I)
_BEM_MODIFIER_RE = re.compile(r"^(_+)([a-z0-9]+[a-z0-9-_]*)", re.I)


def bem(node: AbbreviationNode, ancestors: Sequence[Container], ctx: TransformContext) -> None:
    """Expand ``-element`` and ``_modifier`` class shorthands against the nearest block.

    ``.b>.-e_m`` becomes ``b`` > ``b__e b__e_m``; each extra ``-`` or ``_``
    looks one ancestor further up for the block name.
    """
    _expand_class_names(node, ctx)
    _expand_short_notation(node, ancestors, ctx)


def _expand_class_names(node: AbbreviationNode, ctx: TransformContext) -> None:
    data = _bem_data(node, ctx)
    class_names: list[str] = []
    for cl in data.class_names:
        # Split `block_mod` into base name and modifier
        ix = cl.find("_")
        if ix > 0 and not cl.startswith("-"):
            class_names.append(cl[:ix])
            class_names.append(cl[ix:])
        else:
            class_names.append(cl)

    if class_names:
        data.class_names = _unique(class_names)
        data.block = _find_block_name(data.class_names)
        _update_class(node, " ".join(data.class_names))


def _expand_short_notation(
    node: AbbreviationNode, ancestors: Sequence[Container], ctx: TransformContext
) -> None:
    options = ctx.config.options
    data = _bem_data(node, ctx)
    path = [a for a in ancestors[1:] if isinstance(a, AbbreviationNode)] + [node]
    class_names: list[str] = []

    for original in data.class_names:
        cl = original
        prefix = ""

        m = _BEM_ELEMENT_RE.match(cl)
        if m:
            prefix = _block_name(path, len(m.group(1)), ctx) + options.bem_element + m.group(2)
            class_names.append(prefix)
            cl = cl[m.end() :]

        m = _BEM_MODIFIER_RE.match(cl)
        if m:
            if not prefix:
                prefix = _block_name(path, len(m.group(1)), ctx)
                class_names.append(prefix)
            class_names.append(f"{prefix}{options.bem_modifier}{m.group(2)}")
            cl = cl[m.end() :]

        if cl == original:
            class_names.append(original)

    class_names = _unique(class_names)
    if class_names:
        _update_class(node, " ".join(class_names))


def _bem_data(node: AbbreviationNode, ctx: TransformContext) -> BemData:
    data = ctx.bem.get(id(node))
    if data is None:
        class_value = ""
        for attr in node.attributes or ():
            if attr.name == "class" and attr.value:
                class_value = "".join(t if isinstance(t, str) else t.name for t in attr.value)
                break
        names = class_value.split()
        data = BemData(names, _find_block_name(names))
        ctx.bem[id(node)] = data
    return data


def _block_name(path: list[AbbreviationNode], depth: int, ctx: TransformContext) -> str:
    ix = max(len(path) - depth, 0)
    while ix >= 0:
        if ix < len(path):
            block = _bem_data(path[ix], ctx).block
            if block:
                return block
        ix -= 1
    return ""


def _find_block_name(class_names: list[str]) -> str | None:
    return _find_block(class_names, re.compile(r"^[a-z]-", re.I)) or _find_block(
        class_names, re.compile(r"^[a-z]", re.I)
    )


def _find_block(class_names: list[str], pattern: re.Pattern[str]) -> str | None:
    for cl in class_names:
        if _BEM_ELEMENT_RE.match(cl) or _BEM_MODIFIER_RE.match(cl):
            break
        if pattern.match(cl):
            return cl
    return None


def _update_class(node: AbbreviationNode, value: str) -> None:
    for attr in node.attributes or ():
        if attr.name == "class":
            attr.value = [value]
            break


def _unique(items: list[str]) -> list[str]:
    return [item for item in dict.fromkeys(items) if item]
