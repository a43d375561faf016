"""Component and stylesheet file contents."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from mkcomp.props import generate_props

STYLE_TYPES = ("css", "scss", "tailwind", "styled", "none")
PROJECT_TYPES = ("tsx", "jsx")

# Styles that get a companion stylesheet file
STYLESHEET_TYPES = ("css", "scss")


@dataclass(frozen=True, slots=True)
class Effect:
    """``useEffect`` block running *action* whenever *trigger* changes."""

    trigger: str
    action: str


@dataclass(frozen=True, slots=True)
class ComponentTemplate:
    imports: str
    component: str
    full_content: str


def component_template(
    name: str,
    props: str,
    markup: str,
    project_type: str,
    style: str,
    command: str | None = None,
    hooks: Sequence[str] = (),
    imports: Sequence[str] = (),
    effects: Sequence[Effect] = (),
) -> ComponentTemplate:
    """Build the source of a function component rendering *markup*."""
    import_block = _imports(name, project_type, style, command, hooks, imports)
    component = _component(name, props, markup, project_type, effects)
    return ComponentTemplate(import_block, component, f"{import_block}\n\n{component}")


def _imports(
    name: str,
    project_type: str,
    style: str,
    command: str | None,
    hooks: Sequence[str],
    imports: Sequence[str],
) -> str:
    lines: list[str] = []
    if command:
        lines.append(f"// Generated by: {command}")
    if hooks:
        lines.append(f"import React, {{ {', '.join(hooks)} }} from 'react';")
    else:
        lines.append("import React from 'react';")
    if project_type == "jsx":
        lines.append("import PropTypes from 'prop-types';")
    lines.extend(imports)
    if style in STYLESHEET_TYPES:
        lines.append(f"import './{name}.{style}';")
    return "\n".join(lines)


def _component(
    name: str, props: str, markup: str, project_type: str, effects: Sequence[Effect]
) -> str:
    parsed = generate_props(props, name)
    typescript = project_type == "tsx"
    parts: list[str] = []

    if typescript and parsed.interface:
        parts.append(parsed.interface + "\n\n")

    if not props:
        signature = "()"
    elif typescript:
        signature = f"(props: {name}Props)"
    else:
        signature = "(props)"

    parts.append(f"const {name} = {signature} => {{\n")
    for effect in effects:
        action = effect.action.rstrip()
        if not action.endswith(";"):
            action += ";"
        parts.append(f"  useEffect(() => {{\n    {action}\n  }}, [{effect.trigger}]);\n\n")

    parts.append("  return (\n")
    parts.append(_indent(markup, "    "))
    parts.append("\n  );\n};\n")

    if not typescript and parsed.prop_types:
        parts.append(f"\n{parsed.prop_types}\n")

    parts.append(f"\nexport default {name};\n")
    return "".join(parts)


def _indent(text: str, prefix: str) -> str:
    return "\n".join(prefix + line if line.strip() else line for line in text.splitlines())


def style_template(
    classes: Sequence[str], ids: Sequence[str], style: str, command: str | None = None
) -> str:
    """Empty rule blocks for every class and id, or ``""`` for inline styling."""
    if style == "css":
        open_comment, close_comment = "/* ", " */"
    elif style == "scss":
        open_comment, close_comment = "// ", ""
    else:
        return ""

    lines: list[str] = []
    if command:
        lines.append(f"{open_comment}Generated by: {command}{close_comment}")
    lines.append(f"{open_comment}Generated styles{close_comment}")

    placeholder = f"  {open_comment}Add your styles here{close_comment}"
    selectors = [f".{c}" for c in classes] + [f"#{i}" for i in ids]
    for selector in selectors:
        lines.append("")
        lines.append(f"{selector} {{\n{placeholder}\n}}")
    return "\n".join(lines) + "\n"
