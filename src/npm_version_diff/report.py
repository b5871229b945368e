"""Report payloads and human-readable rendering of version changes."""

from __future__ import annotations

from typing import Any
from collections.abc import Sequence

from .models import DiffResult

NO_VERSION = "(none)"


def _fmt(version: str | None) -> str:
    return NO_VERSION if version is None else version


def build_report(changes: Sequence[DiffResult]) -> dict[str, Any]:
    """Return a JSON-friendly payload with the changes and per-kind totals."""
    kinds = [change.kind for change in changes]
    return {
        "changes": [change.to_dict() for change in changes],
        "totals": {
            "added": kinds.count("added"),
            "removed": kinds.count("removed"),
            "changed": kinds.count("changed"),
            "total": len(changes),
        },
    }


def render_markdown(changes: Sequence[DiffResult]) -> str:
    """Return a Markdown string with totals and a table of changes."""
    totals = build_report(changes)["totals"]

    lines = []
    lines.append("# Package version changes")
    lines.append("")
    lines.append(
        f"Added: {totals['added']} | Removed: {totals['removed']} | Changed: {totals['changed']}"
    )
    lines.append("")
    lines.append("| Package | Path | From | To |")
    lines.append("| --- | --- | --- | --- |")

    for change in changes:
        path = " > ".join(change.path)
        lines.append(
            f"| {change.name} | {path} | {_fmt(change.version_from)} | {_fmt(change.version_to)} |"
        )

    if not changes:
        lines.append("| (no changes) | n/a | n/a | n/a |")

    return "\n".join(lines) + "\n"


def render_text(changes: Sequence[DiffResult]) -> str:
    lines = [
        f"{' > '.join(change.path)}: {_fmt(change.version_from)} -> {_fmt(change.version_to)}"
        for change in changes
    ]
    return "".join(line + "\n" for line in lines)
