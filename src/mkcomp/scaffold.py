"""Starter manifests written by ``mkcomp --template``."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

DEFAULT_TEMPLATE_FILE = "components.yaml"

_HEADER = """\
# mkcomp YAML Template
# This file defines multiple components that can be batch-generated
#
# Usage:
#   mkcomp --from-yaml components.yaml
#   mkcomp --from-yaml components.yaml --only Button,Modal
#   mkcomp --from-yaml components.yaml --test

"""

# (text to find, comment placed on the line above it)
_COMMENTS = (
    ("components:", "# Example components with different configurations"),
    ("- name: Button", "# Basic UI Button Component"),
    ("- name: Modal", "# Modal Dialog with hooks and effects"),
    ("- name: Card", "# Tailwind Card Component (JavaScript)"),
    ("config:", "# Global configuration settings (only defaults are currently supported)"),
    ("  defaults:", "# Default settings for all components"),
)


def _prop(name: str, type_: str, required: bool, default: Any = None) -> dict[str, Any]:
    prop: dict[str, Any] = {"name": name, "type": type_, "required": required}
    if default is not None:
        prop["default"] = default
    return prop


def example_document() -> dict[str, Any]:
    """Three sample components plus global defaults."""
    return {
        "components": [
            {
                "name": "Button",
                "type": "tsx",
                "output": {"directory": "src/components/ui", "style": "css"},
                "props": [
                    _prop("children", "React.ReactNode", False),
                    _prop("variant", "'primary' | 'secondary' | 'danger'", False, "'primary'"),
                    _prop("size", "'sm' | 'md' | 'lg'", False, "'md'"),
                    _prop("onClick", "() => void", False),
                    _prop("disabled", "boolean", False, False),
                ],
                "structure": {"emmet": "button.btn[type=button]>span.btn-text"},
            },
            {
                "name": "Modal",
                "type": "tsx",
                "output": {"directory": "src/components/overlays", "style": "scss"},
                "props": [
                    _prop("isOpen", "boolean", True),
                    _prop("title", "string", True),
                    _prop("children", "React.ReactNode", False),
                    _prop("onClose", "() => void", True),
                    _prop("size", "'sm' | 'md' | 'lg' | 'xl'", False, "'md'"),
                ],
                "structure": {
                    "emmet": (
                        "div.modal-overlay>div.modal>div.modal-header>h2.modal-title"
                        '+button.modal-close[aria-label="Close"]^div.modal-body+div.modal-footer'
                    )
                },
                "hooks": ["useEffect", "useState"],
                "custom": {
                    "effects": [
                        {
                            "trigger": "isOpen",
                            "action": "document.body.style.overflow = isOpen ? 'hidden' : 'auto'",
                        }
                    ]
                },
            },
            {
                "name": "Card",
                "type": "jsx",
                "output": {"directory": "src/components/ui", "style": "tailwind"},
                "props": [
                    _prop("title", "string", True),
                    _prop("description", "string", False),
                    _prop("children", "React.ReactNode", False),
                ],
                "structure": {
                    "emmet": (
                        "div.bg-white.rounded-lg.shadow-md.p-6>h3.text-lg.font-semibold.mb-2"
                        "+p.text-gray-600.mb-4+div.card-content"
                    )
                },
            },
        ],
        "config": {
            "defaults": {"type": "auto", "style": "css", "directory": "src/components"},
        },
    }


def generate_template() -> str:
    """The commented example manifest."""
    content = yaml.dump(example_document(), sort_keys=False, width=120, allow_unicode=True)
    return _HEADER + _add_comments(content)


def _add_comments(content: str) -> str:
    result: list[str] = []
    pending = list(_COMMENTS)
    for line in content.splitlines():
        for i, (needle, comment) in enumerate(pending):
            if line.startswith(needle):
                indent = line[: len(line) - len(line.lstrip())]
                result.append(indent + comment)
                del pending[i]
                break
        result.append(line)
    return "\n".join(result) + "\n"


def generate_minimal_template() -> str:
    document = {
        "components": [
            {
                "name": "ExampleComponent",
                "type": "auto",
                "output": {"directory": "src/components", "style": "css"},
                "props": [
                    _prop("title", "string", True),
                    _prop("children", "React.ReactNode", False),
                ],
                "structure": {"emmet": "div.example>h2.title+div.content"},
            }
        ]
    }
    content = yaml.dump(document, sort_keys=False, width=80, allow_unicode=True)
    return f"# Minimal React Component Template\n# Add your components here\n\n{content}"


def write_template(path: Path, *, minimal: bool = False) -> Path:
    """Write a starter manifest; never overwrites an existing file."""
    if path.exists():
        raise FileExistsError(f"{path} already exists")
    path.write_text(generate_minimal_template() if minimal else generate_template(), encoding="utf-8")
    return path
