"""Component file generation, single and batched."""

from __future__ import annotations

import dataclasses
import logging
import re
import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

from mkcomp.config import Config
from mkcomp.structure import expand_structure
from mkcomp.templates import STYLESHEET_TYPES, Effect, component_template, style_template

logger = logging.getLogger(__name__)

_NAME_RE = re.compile(r"[A-Z][a-zA-Z0-9]*")


class ComponentNameError(ValueError):
    """Raised for component names that are not PascalCase identifiers."""


@dataclass(frozen=True, slots=True)
class ComponentRequest:
    """Everything needed to generate one component."""

    name: str
    props: str = ""
    directory: str = "."
    style: str = "css"
    emmet: str = ""
    project_type: str = "tsx"
    command: str | None = None
    hooks: tuple[str, ...] = ()
    imports: tuple[str, ...] = ()
    effects: tuple[Effect, ...] = ()

    def with_command(self, command: str) -> ComponentRequest:
        return dataclasses.replace(self, command=command)


@dataclass(frozen=True, slots=True)
class ComponentFile:
    path: Path
    content: str
    kind: str  # "component" or "style"


@dataclass(slots=True)
class BatchSummary:
    succeeded: list[str] = field(default_factory=list)
    failed: list[tuple[str, str]] = field(default_factory=list)
    files: list[Path] = field(default_factory=list)


def validate_component_name(name: str) -> None:
    if not name:
        raise ComponentNameError("Component name is required")
    if not _NAME_RE.fullmatch(name):
        raise ComponentNameError(
            "Component name must start with capital letter and contain only letters and numbers"
        )


def build_files(
    request: ComponentRequest,
    config: Config | None = None,
    *,
    warn: Callable[[str], None] | None = None,
) -> list[ComponentFile]:
    """Render the component file and, for css/scss, its stylesheet."""
    structure = expand_structure(request.emmet, config, warn=warn)
    template = component_template(
        request.name,
        request.props,
        structure.markup,
        request.project_type,
        request.style,
        request.command,
        hooks=request.hooks,
        imports=request.imports,
        effects=request.effects,
    )

    directory = Path(request.directory)
    files = [
        ComponentFile(
            directory / f"{request.name}.{request.project_type}",
            template.full_content,
            "component",
        )
    ]
    if request.style in STYLESHEET_TYPES:
        content = style_template(structure.classes, structure.ids, request.style, request.command)
        files.append(ComponentFile(directory / f"{request.name}.{request.style}", content, "style"))
    return files


def write_files(
    files: Sequence[ComponentFile],
    directory: Path,
    preview: bool = False,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> list[Path]:
    """Write *files* into *directory*, or print them when previewing.

    A file that cannot be written is reported and skipped.
    """
    out = out or sys.stdout
    err = err or sys.stderr
    if preview:
        out.write("\n=== PREVIEW MODE ===\n\n")
        for f in files:
            out.write(f"--- {f.path} ---\n{f.content}\n\n")
        return []

    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        print(f"error: directory creation failed ({directory}): {exc}", file=err)

    written: list[Path] = []
    for f in files:
        try:
            f.path.write_text(f.content, encoding="utf-8")
        except OSError as exc:
            print(f"error: file creation failed ({f.path}): {exc}", file=err)
            continue
        print(f"Created: {f.path}", file=out)
        written.append(f.path)
    return written


def generate_component(
    request: ComponentRequest,
    *,
    preview: bool = False,
    config: Config | None = None,
    warn: Callable[[str], None] | None = None,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> list[Path]:
    validate_component_name(request.name)
    files = build_files(request, config, warn=warn)
    return write_files(files, Path(request.directory), preview, out, err)


def generate_batch(
    requests: Sequence[ComponentRequest],
    *,
    preview: bool = False,
    config: Config | None = None,
    warn: Callable[[str], None] | None = None,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> BatchSummary:
    """Generate every request; a failing component does not stop the rest."""
    out = out or sys.stdout
    err = err or sys.stderr
    summary = BatchSummary()
    if not requests:
        print("No components to generate.", file=out)
        return summary

    print(f"\nGenerating {_plural(len(requests), 'component')}...\n", file=out)
    for request in requests:
        print(f"Generating {request.name}...", file=out)
        try:
            written = generate_component(
                request, preview=preview, config=config, warn=warn, out=out, err=err
            )
        except (ValueError, OSError) as exc:
            logger.debug("component %s failed", request.name, exc_info=True)
            summary.failed.append((request.name, str(exc)))
            print(f"error: failed to generate {request.name}: {exc}", file=err)
            continue
        summary.succeeded.append(request.name)
        summary.files.extend(written)

    _print_summary(summary, out)
    return summary


def _print_summary(summary: BatchSummary, out: TextIO) -> None:
    rule = "=" * 50
    print(f"\n{rule}\nGENERATION SUMMARY\n{rule}", file=out)
    print(f"Successfully generated: {_plural(len(summary.succeeded), 'component')}", file=out)
    if summary.failed:
        print(f"Failed to generate: {_plural(len(summary.failed), 'component')}", file=out)
        print("\nFailures:", file=out)
        for name, message in summary.failed:
            print(f"  * {name}: {message}", file=out)
    if summary.files:
        print(f"\nTotal files created: {len(summary.files)}", file=out)


def preview_batch(requests: Sequence[ComponentRequest], out: TextIO | None = None) -> None:
    """List what a batch would generate."""
    out = out or sys.stdout
    out.write("\n=== YAML PREVIEW MODE ===\n\n")
    out.write(f"Found {_plural(len(requests), 'component')} to generate:\n\n")
    for i, r in enumerate(requests, 1):
        out.write(f"{i}. {r.name}\n")
        out.write(f"   Type: {'TypeScript' if r.project_type == 'tsx' else 'JavaScript'}\n")
        out.write(f"   Style: {r.style}\n")
        out.write(f"   Directory: {r.directory}\n")
        if r.props:
            out.write(f"   Props: {r.props}\n")
        if r.emmet:
            out.write(f"   Structure: {r.emmet}\n")
        out.write("\n")
    out.write("To generate these components, run the same command without --test\n")


def log_component_list(requests: Sequence[ComponentRequest], out: TextIO | None = None) -> None:
    """Print the components grouped by output directory."""
    out = out or sys.stdout
    out.write(f"Found {_plural(len(requests), 'component')} to generate:\n")
    grouped: dict[str, list[ComponentRequest]] = {}
    for r in requests:
        grouped.setdefault(r.directory, []).append(r)

    for directory, items in grouped.items():
        out.write(f"   {directory}/\n")
        for r in items:
            line = f"      * {r.name}.{r.project_type}"
            if r.style in STYLESHEET_TYPES:
                line += f" + {r.name}.{r.style}"
            out.write(line + "\n")
    out.write("\n")


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"
