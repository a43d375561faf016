"""YAML batch manifests: many component definitions in one file."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from mkcomp.generator import ComponentRequest
from mkcomp.templates import PROJECT_TYPES, STYLE_TYPES, Effect

logger = logging.getLogger(__name__)

DEFAULT_DIRECTORY = "src/components"
DEFAULT_STYLE = "css"
DEFAULT_TYPE = "tsx"

# "auto" defers to the defaults, then to tsx
_COMPONENT_TYPES = (*PROJECT_TYPES, "auto")


class ManifestError(Exception):
    """Raised when a manifest cannot be read or fails validation."""


def load_manifest(path: Path) -> dict[str, Any]:
    """Read and validate a manifest file."""
    try:
        text = path.read_text(encoding="utf-8")
        document = yaml.safe_load(text)
    except (OSError, yaml.YAMLError) as exc:
        raise ManifestError(f"Failed to process YAML file: {exc}") from exc

    validate_manifest(document)
    logger.debug("loaded %d component(s) from %s", len(document["components"]), path)
    return document


def validate_manifest(document: Any) -> None:
    if not document:
        raise ManifestError("Invalid YAML: Document is empty")
    if not isinstance(document, Mapping):
        raise ManifestError("Invalid YAML: Document must be a mapping")

    components = document.get("components")
    if not isinstance(components, list):
        raise ManifestError('Invalid YAML: "components" must be an array')
    if not components:
        raise ManifestError("Invalid YAML: At least one component must be defined")

    for index, component in enumerate(components):
        if not isinstance(component, Mapping) or not component.get("name"):
            raise ManifestError(f'Invalid YAML: Component at index {index} missing "name"')
        output = component.get("output")
        if not isinstance(output, Mapping) or not output.get("directory"):
            raise ManifestError(
                f'Invalid YAML: Component "{component["name"]}" missing output directory'
            )
        _validate_component(component)

    config = document.get("config") or {}
    if not isinstance(config, Mapping) or not isinstance(config.get("defaults") or {}, Mapping):
        raise ManifestError('Invalid YAML: "config.defaults" must be a mapping')
    defaults = config.get("defaults")
    if defaults:
        _check_choice("Default type", defaults.get("type"), _COMPONENT_TYPES)
        _check_choice("Default style", defaults.get("style"), STYLE_TYPES)


def _validate_component(component: Mapping[str, Any]) -> None:
    label = f'Component "{component["name"]}"'
    _check_choice(f"{label} type", component.get("type"), _COMPONENT_TYPES)
    _check_choice(f"{label} style", component["output"].get("style"), STYLE_TYPES)

    for key in ("structure", "custom"):
        if not isinstance(component.get(key) or {}, Mapping):
            raise ManifestError(f'Invalid YAML: {label} "{key}" must be a mapping')
    if not isinstance(component.get("hooks") or [], list):
        raise ManifestError(f'Invalid YAML: {label} "hooks" must be an array')

    custom = component.get("custom") or {}
    _check_entries(label, "props", component.get("props"), ("name",))
    _check_entries(label, "imports", component.get("imports"), ("import", "from"))
    _check_entries(label, "effects", custom.get("effects"), ("trigger", "action"))


def _check_choice(label: str, value: Any, choices: Sequence[str]) -> None:
    if value is not None and value not in choices:
        raise ManifestError(
            f'Invalid YAML: {label} "{value}" is not one of: {", ".join(choices)}'
        )


def _check_entries(label: str, key: str, entries: Any, required: Sequence[str]) -> None:
    if entries is None:
        return
    if not isinstance(entries, list):
        raise ManifestError(f'Invalid YAML: {label} "{key}" must be an array')
    for index, entry in enumerate(entries):
        if not isinstance(entry, Mapping):
            raise ManifestError(f"Invalid YAML: {label} {key}[{index}] must be a mapping")
        for field in required:
            if entry.get(field) in (None, ""):
                raise ManifestError(f'Invalid YAML: {label} {key}[{index}] missing "{field}"')


def process_manifest(
    document: Mapping[str, Any], directory: str | None = None
) -> list[ComponentRequest]:
    """Validate *document* and turn it into component requests.

    *directory* overrides every component's output directory.
    """
    validate_manifest(document)
    config = document.get("config") or {}
    defaults = config.get("defaults") or {}
    return [_process_component(c, defaults, directory) for c in document["components"]]


def filter_requests(
    requests: Iterable[ComponentRequest], names: Iterable[str]
) -> list[ComponentRequest]:
    wanted = set(names)
    return [r for r in requests if r.name in wanted]


def _process_component(
    component: Mapping[str, Any], defaults: Mapping[str, Any], directory: str | None
) -> ComponentRequest:
    output = component["output"]
    structure = component.get("structure") or {}
    custom = component.get("custom") or {}

    request = ComponentRequest(
        name=str(component["name"]),
        props=_props_string(component.get("props") or []),
        directory=str(
            directory or output.get("directory") or defaults.get("directory") or DEFAULT_DIRECTORY
        ),
        style=str(output.get("style") or defaults.get("style") or DEFAULT_STYLE),
        emmet=str(structure.get("emmet") or structure.get("jsx") or ""),
        project_type=_project_type(component.get("type"), defaults.get("type")),
        hooks=tuple(str(h) for h in component.get("hooks") or ()),
        imports=tuple(
            f"import {imp['import']} from '{imp['from']}';" for imp in component.get("imports") or ()
        ),
        effects=tuple(
            Effect(str(e["trigger"]), str(e["action"])) for e in custom.get("effects") or ()
        ),
    )
    return request.with_command(_command_line(request))


def _project_type(component_type: Any, default_type: Any) -> str:
    for candidate in (component_type, default_type):
        if candidate and candidate != "auto":
            return str(candidate)
    return DEFAULT_TYPE


def _props_string(props: Iterable[Mapping[str, Any]]) -> str:
    parts = []
    for prop in props:
        optional = "?" if prop.get("required") is False else ""
        parts.append(f"{prop['name']}{optional}:{prop.get('type') or 'any'}")
    return ",".join(parts)


def _command_line(request: ComponentRequest) -> str:
    """The single-component command equivalent to *request*."""
    parts = ["mkcomp", request.name]
    if request.props:
        parts += ["-p", f'"{request.props}"']
    if request.directory != DEFAULT_DIRECTORY:
        parts += ["-d", request.directory]
    if request.style != DEFAULT_STYLE:
        parts += ["-s", request.style]
    if request.emmet:
        parts += ["-e", f'"{request.emmet}"']
    parts.append(f"--{request.project_type}")
    return " ".join(parts)
