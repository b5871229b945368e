"""Flatten npm package-lock.json ``packages`` into dependency items."""

from __future__ import annotations

from typing import Any

from ..models import DependencyItem
from ..options import DependencyType, DiffOptions, filter_types

NODE_MODULES = "node_modules/"
NESTED_DELIMITER = "/node_modules/"

_ROOT_SECTIONS: tuple[tuple[DependencyType, str], ...] = (
    ("prod", "dependencies"),
    ("dev", "devDependencies"),
    ("optional", "optionalDependencies"),
    ("peer", "peerDependencies"),
)


def _direct_dependency_keys(
    root: dict[str, Any], include_types: tuple[DependencyType, ...]
) -> set[str]:
    keys: set[str] = set()
    for dep_type, section in _ROOT_SECTIONS:
        if dep_type in include_types:
            keys.update(f"{NODE_MODULES}{name}" for name in root.get(section) or {})
    return keys


def _entry_types(entry: dict[str, Any]) -> list[DependencyType]:
    # Entries without any flag count as production dependencies.
    dev, optional, peer = entry.get("dev"), entry.get("optional"), entry.get("peer")
    types: list[DependencyType] = []
    if not dev and not optional and not peer:
        types.append("prod")
    if dev:
        types.append("dev")
    if optional:
        types.append("optional")
    if peer:
        types.append("peer")
    return types


def normalize(lockfile: dict[str, Any], options: DiffOptions) -> list[DependencyItem]:
    """Return one item per installed package entry that passes the filters.

    Linked entries are skipped; the link target has its own entry.
    """
    include_types = filter_types(options)
    packages: dict[str, Any] = lockfile["packages"]
    direct_keys = _direct_dependency_keys(packages.get("") or {}, include_types)

    items: list[DependencyItem] = []
    for key, entry in packages.items():
        if key == "" or not entry:
            continue
        if "link" in entry:
            continue

        if not any(t in include_types for t in _entry_types(entry)):
            continue
        if options.direct_only and key not in direct_keys:
            continue

        # Workspace packages do not live under node_modules/
        name = key.replace(NODE_MODULES, "", 1) if key.startswith(NODE_MODULES) else key
        path = name.split(NESTED_DELIMITER)
        items.append(DependencyItem.from_path(path, entry.get("version") or ""))

    return items
