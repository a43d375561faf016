"""Prop strings such as ``title:string,count?:number,children``."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PropDefinition:
    name: str
    type: str
    optional: bool = False


@dataclass(frozen=True, slots=True)
class ParsedProps:
    interface: str
    prop_types: str


_PROP_TYPES = {
    "string": "PropTypes.string",
    "number": "PropTypes.number",
    "boolean": "PropTypes.bool",
    "()=>void": "PropTypes.func",
    "() => void": "PropTypes.func",
    "React.ReactNode": "PropTypes.node",
}


def parse_props(props: str) -> list[PropDefinition]:
    """Split a comma-separated prop string into definitions."""
    result: list[PropDefinition] = []
    for item in (p.strip() for p in props.split(",")):
        if not item:
            continue
        if item == "children":
            result.append(PropDefinition("children", "React.ReactNode", True))
            continue

        name, _, type_ = item.partition(":")
        name = name.strip()
        optional = name.endswith("?")
        if optional:
            name = name[:-1]
        result.append(PropDefinition(name, type_.strip() or "any", optional))
    return result


def generate_interface(props: list[PropDefinition], component: str) -> str:
    if not props:
        return ""
    lines = [f"  {p.name}{'?' if p.optional else ''}: {p.type};" for p in props]
    return f"interface {component}Props {{\n" + "\n".join(lines) + "\n}"


def generate_prop_types(props: list[PropDefinition], component: str) -> str:
    if not props:
        return ""
    lines = []
    for p in props:
        prop_type = _PROP_TYPES.get(p.type, "PropTypes.any")
        if not p.optional:
            prop_type += ".isRequired"
        lines.append(f"  {p.name}: {prop_type},")
    return f"{component}.propTypes = {{\n" + "\n".join(lines) + "\n};"


def generate_props(props: str, component: str) -> ParsedProps:
    """Interface (TypeScript) and propTypes (JavaScript) declarations for *props*."""
    if not props:
        return ParsedProps("", "")
    definitions = parse_props(props)
    return ParsedProps(
        generate_interface(definitions, component),
        generate_prop_types(definitions, component),
    )
