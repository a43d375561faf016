"""Command-line interface for mkcomp."""

from __future__ import annotations

import argparse
import shlex
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from mkcomp.config import SYNTAXES, Config, resolve_config
from mkcomp.errors import AbbreviationError
from mkcomp.structure import DEFAULT_ABBREVIATION
from mkcomp.templates import PROJECT_TYPES, STYLE_TYPES

CONFIG_FILE = "mkcomp.toml"

# [output] keys accepted from the config file
OUTPUT_KEYS = (
    "indent",
    "self_closing_style",
    "attribute_quotes",
    "inline_break",
    "compact_boolean",
    "tag_case",
    "attribute_case",
    "format",
)


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    name: str | None
    props: str
    directory: str
    directory_override: str | None
    style: str
    emmet: str
    project_type: str
    engine: Config
    command: str
    from_yaml: Path | None
    only: tuple[str, ...]
    template: Path | None
    expand: str | None
    preview: bool
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="mkcomp",
        description="Generate React components from abbreviations and YAML manifests",
    )
    p.add_argument("name", nargs="?", help="Component name (PascalCase)")
    p.add_argument("-p", "--props", help='Props, e.g. "title:string,count?:number,children"')
    p.add_argument("-d", "--dir", metavar="DIR", help="Output directory")
    p.add_argument("-s", "--style", choices=STYLE_TYPES, help="Styling approach")
    p.add_argument("-e", "--emmet", metavar="ABBR", help="Component structure abbreviation")
    p.add_argument("--test", action="store_true", help="Preview without writing files")
    kind = p.add_mutually_exclusive_group()
    kind.add_argument("--jsx", action="store_const", const="jsx", dest="project_type")
    kind.add_argument("--tsx", action="store_const", const="tsx", dest="project_type")
    p.add_argument("--syntax", choices=SYNTAXES, help="Markup syntax used for expansion")
    p.add_argument(
        "--config",
        metavar="FILE",
        help=f"Config file (default: auto-discover {CONFIG_FILE})",
    )
    p.add_argument("--debug", action="store_true", help="Dump the abbreviation tree to stderr")
    p.add_argument("--from-yaml", metavar="FILE", help="Generate components from a YAML manifest")
    p.add_argument("--only", metavar="NAMES", help="Comma-separated components to generate")
    p.add_argument(
        "--template",
        nargs="?",
        const="components.yaml",
        metavar="FILE",
        help="Write an example manifest (default: components.yaml)",
    )
    p.add_argument("--expand", metavar="ABBR", help="Print the expanded abbreviation and exit")
    return p


def load_config(config_path: Path | None, cwd: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else cwd / CONFIG_FILE

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def _table(config: dict[str, Any], name: str) -> dict[str, Any]:
    value = config.get(name)
    return value if isinstance(value, dict) else {}


def warn(message: str, exc: Exception | None = None) -> None:
    """Print an expansion warning to stderr."""
    if exc is not None:
        message = f"{message}: {exc}"
    print(f"warning: {message}", file=sys.stderr)


def engine_config(
    config: dict[str, Any], syntax: str, indent: str | None = "  "
) -> Config:
    """Expansion config from the ``[output]``, ``[snippets]``, ``[variables]`` and
    ``[engine]`` tables. Unknown output options raise ValueError.
    """
    options: dict[str, Any] = {}
    if indent is not None:
        options["indent"] = indent
    options.update(_table(config, "output"))

    engine = _table(config, "engine")
    if "bem" in engine:
        options["bem_enabled"] = bool(engine["bem"])

    kwargs: dict[str, Any] = {"warn": warn}
    if isinstance(engine.get("max_repeat"), int):
        kwargs["max_repeat"] = engine["max_repeat"]

    return resolve_config(
        syntax,
        options=options,
        snippets={str(k): str(v) for k, v in _table(config, "snippets").items()},
        variables={str(k): str(v) for k, v in _table(config, "variables").items()},
        **kwargs,
    )


def resolve_options(args: argparse.Namespace, argv: list[str] | None = None) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: built-in defaults < config file < CLI flags.
    """
    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, Path("."))
    defaults = _table(config, "defaults")

    project_type = args.project_type or str(defaults.get("type") or "tsx")
    if project_type not in PROJECT_TYPES:
        raise ValueError(f"unknown component type: {project_type}")

    style = args.style or str(defaults.get("style") or "css")
    if style not in STYLE_TYPES:
        raise ValueError(f"unknown style: {style}")

    if args.expand is not None:
        engine = engine_config(config, args.syntax or "html", indent=None)
    else:
        engine = engine_config(config, args.syntax or project_type)

    if argv is None:
        argv = sys.argv[1:]

    return CliOptions(
        name=args.name,
        props=args.props or "",
        directory=args.dir or str(defaults.get("directory") or "."),
        directory_override=args.dir,
        style=style,
        emmet=args.emmet or "",
        project_type=project_type,
        engine=engine,
        command=shlex.join(["mkcomp", *argv]),
        from_yaml=Path(args.from_yaml) if args.from_yaml else None,
        only=tuple(n.strip() for n in (args.only or "").split(",") if n.strip()),
        template=Path(args.template) if args.template else None,
        expand=args.expand,
        preview=args.test,
        debug=args.debug,
    )


def dump_abbreviation(abbreviation: str, config: Config) -> None:
    """Print the resolved tree of *abbreviation* to stderr."""
    from mkcomp import parse
    from mkcomp.debug import dump_tree

    try:
        dump_tree(parse(abbreviation, config))
    except AbbreviationError as exc:
        print(exc.format(), file=sys.stderr)


def run_expand(options: CliOptions) -> int:
    from mkcomp import parse, stringify

    assert options.expand is not None
    try:
        abbr = parse(options.expand, options.engine)
        markup = stringify(abbr, options.engine)
    except AbbreviationError as exc:
        print(exc.format(), file=sys.stderr)
        return 1
    except RecursionError:
        print("error: Abbreviation is nested too deeply", file=sys.stderr)
        return 1

    if options.debug:
        from mkcomp.debug import dump_tree

        dump_tree(abbr)
    sys.stdout.write(markup + "\n")
    return 0


def run_template(path: Path) -> int:
    from mkcomp.scaffold import write_template

    try:
        write_template(path)
    except FileExistsError:
        print(f"error: template file already exists: {path}", file=sys.stderr)
        print("Use a different filename or remove the existing file", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"error: could not write template: {exc}", file=sys.stderr)
        return 1

    print(f"Created YAML template: {path}")
    print("\nNext steps:")
    print(f"  1. Edit {path} to define your components")
    print(f"  2. Preview: mkcomp --from-yaml {path} --test")
    print(f"  3. Generate: mkcomp --from-yaml {path}")
    return 0


def run_batch(options: CliOptions) -> int:
    from mkcomp.generator import generate_batch, log_component_list, preview_batch
    from mkcomp.manifest import ManifestError, filter_requests, load_manifest, process_manifest

    assert options.from_yaml is not None
    print(f"Processing YAML file: {options.from_yaml}")
    try:
        document = load_manifest(options.from_yaml)
        requests = process_manifest(document, options.directory_override)
    except ManifestError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if options.only:
        requests = filter_requests(requests, options.only)
        if not requests:
            print(
                f"error: no matching components found: {', '.join(options.only)}",
                file=sys.stderr,
            )
            return 1

    if options.debug:
        for r in requests:
            dump_abbreviation(r.emmet or DEFAULT_ABBREVIATION, options.engine)

    if options.preview:
        preview_batch(requests)
        return 0

    log_component_list(requests)
    summary = generate_batch(requests, config=options.engine, warn=warn)
    return 1 if summary.failed else 0


def run_component(options: CliOptions) -> int:
    from mkcomp.generator import ComponentNameError, ComponentRequest, generate_component

    assert options.name is not None
    request = ComponentRequest(
        name=options.name,
        props=options.props,
        directory=options.directory,
        style=options.style,
        emmet=options.emmet,
        project_type=options.project_type,
        command=options.command,
    )

    if options.debug:
        dump_abbreviation(request.emmet or DEFAULT_ABBREVIATION, options.engine)

    try:
        generate_component(request, preview=options.preview, config=options.engine, warn=warn)
    except ComponentNameError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args, argv)
    except tomllib.TOMLDecodeError as exc:
        print(f"error: invalid config file: {exc}", file=sys.stderr)
        return 2
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if options.template is not None:
        return run_template(options.template)
    if options.expand is not None:
        return run_expand(options)
    if options.from_yaml is not None:
        return run_batch(options)
    if not options.name:
        parser.print_usage(sys.stderr)
        print(
            "error: a component name, --from-yaml, --template or --expand is required",
            file=sys.stderr,
        )
        return 2
    return run_component(options)
