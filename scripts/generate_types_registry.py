"""Generate a Markdown registry of operation types from Module objects.

Target is ``package.module:attribute`` where the attribute is a Module, or
a list/tuple/dict of Modules (child modules must be listed explicitly; a
Module does not track its children).

Usage (inside venv):
  python scripts/generate_types_registry.py myapp.state:modules > docs/Types.md
"""
from __future__ import annotations

import importlib
import os
import sys
from typing import Any, List

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:  # pragma: no cover
    sys.path.insert(0, ROOT)

from reduxmod import Module  # noqa: E402


def load_target(spec: str) -> Any:  # noqa: D401
    mod_name, _, attr = spec.partition(":")
    obj = importlib.import_module(mod_name)
    for part in filter(None, attr.split(".")):
        obj = getattr(obj, part)
    return obj


def iter_modules(target: Any) -> List[Module]:
    if isinstance(target, Module):
        return [target]
    if isinstance(target, dict):
        target = list(target.values())
    if isinstance(target, (list, tuple)):
        return [m for m in target if isinstance(m, Module)]
    # whole python module: every Module attribute
    return [
        v for k, v in vars(target).items()
        if not k.startswith("_") and isinstance(v, Module)
    ]


def collect_rows(modules: List[Module]) -> List[tuple[str, str, str]]:
    rows = []
    for m in modules:
        for short, creator in m.creators.items():
            handler = m.handlers.get(m.types[short])
            rows.append(
                (
                    creator.type,
                    ", ".join(map(str, creator.fields)),
                    getattr(handler, "__qualname__", "-") if handler else "-",
                )
            )
    # stable order
    rows.sort(key=lambda r: r[0])
    return rows


def format_table(rows: List[tuple[str, str, str]]) -> str:  # noqa: D401
    lines = [
        "# Generated Types Registry",
        "",
        "| Type | Fields | Handler |",
        "|------|--------|---------|",
    ]
    for type_, fields, handler in rows:
        lines.append(f"| {type_} | {fields} | {handler} |")
    lines.append("")
    lines.append(
        "Generated automatically by scripts/generate_types_registry.py"
    )
    return "\n".join(lines)


def main(argv: List[str] | None = None) -> int:  # noqa: D401
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) != 1:
        sys.stderr.write(
            "usage: generate_types_registry.py package.module[:attribute]\n"
        )
        return 2
    modules = iter_modules(load_target(argv[0]))
    sys.stdout.write(format_table(collect_rows(modules)) + "\n")
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
