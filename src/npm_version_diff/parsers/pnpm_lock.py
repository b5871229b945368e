"""Parse pnpm-lock.yaml documents from a staged directory."""

from __future__ import annotations

import math
from pathlib import Path
from typing import Any

import yaml

from ..errors import UnsupportedDocumentError

WANTED_LOCKFILE = "pnpm-lock.yaml"
SUPPORTED_MAJOR_VERSIONS = {5, 6, 9}

_PROJECT_SECTIONS = ("dependencies", "devDependencies", "optionalDependencies")


def lockfile_version(data: dict[str, Any]) -> float | None:
    """Return the declared lockfileVersion as a number, or None if unreadable."""
    try:
        version = float(str(data.get("lockfileVersion")))
    except ValueError:
        return None
    return version if math.isfinite(version) else None


def read_wanted_lockfile(directory: Path, side: str) -> dict[str, Any]:
    """Load ``pnpm-lock.yaml`` from ``directory``.

    Single-project lockfiles (no ``importers`` key) are presented as one
    importer ``"."`` so callers always see the workspace shape.
    """
    path = directory / WANTED_LOCKFILE
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise UnsupportedDocumentError(
            side, f"Could not parse '{side}' pnpm package lock file: {exc}"
        ) from exc

    if not isinstance(data, dict):
        raise UnsupportedDocumentError(side, f"Could not parse '{side}' pnpm package lock file")

    version = lockfile_version(data)
    if version is None:
        raise UnsupportedDocumentError(
            side, f"'{side}' pnpm package lock file has no valid lockfileVersion"
        )
    if int(version) not in SUPPORTED_MAJOR_VERSIONS:
        raise UnsupportedDocumentError(
            side,
            f"'{side}' pnpm package lock file version {data['lockfileVersion']} is not supported",
        )

    lockfile = dict(data)
    lockfile["lockfileVersion"] = str(data["lockfileVersion"])
    importers = data.get("importers")
    if importers is None:
        importers = {".": {key: data[key] for key in _PROJECT_SECTIONS if key in data}}
    elif not isinstance(importers, dict):
        raise UnsupportedDocumentError(side, f"'{side}' pnpm package lock file has invalid importers")
    lockfile["importers"] = importers
    lockfile["packages"] = data.get("packages") or {}
    lockfile["snapshots"] = data.get("snapshots") or {}
    if int(version) == 5:
        _convert_v5_dep_paths(lockfile)
    return lockfile


def dep_path_v5_to_v6(dep_path: str) -> str:
    """Rewrite ``/name/1.0.0_peers`` as ``/name@1.0.0_peers``.

    Paths that do not look like registry packages are returned unchanged.
    """
    if not dep_path.startswith("/"):
        return dep_path
    parts = dep_path[1:].split("/")
    name_len = 2 if parts[0].startswith("@") else 1
    if len(parts) != name_len + 1 or not parts[-1]:
        return dep_path
    return f"/{'/'.join(parts[:name_len])}@{parts[-1]}"


def _convert_refs(section: Any) -> Any:
    if not isinstance(section, dict):
        return section
    converted: dict[str, Any] = {}
    for alias, ref in section.items():
        if isinstance(ref, str) and ref.startswith("/"):
            ref = dep_path_v5_to_v6(ref)
        converted[alias] = ref
    return converted


def _convert_v5_dep_paths(lockfile: dict[str, Any]) -> None:
    """Bring a 5.x lockfile onto the 6.x dep path scheme, in place."""
    packages: dict[str, Any] = {}
    for dep_path, snapshot in lockfile["packages"].items():
        if isinstance(snapshot, dict):
            snapshot = dict(snapshot)
            for key in ("dependencies", "optionalDependencies"):
                if key in snapshot:
                    snapshot[key] = _convert_refs(snapshot[key])
        packages[dep_path_v5_to_v6(str(dep_path))] = snapshot
    lockfile["packages"] = packages

    importers: dict[str, Any] = {}
    for importer_id, project in lockfile["importers"].items():
        if isinstance(project, dict):
            project = {key: _convert_refs(value) for key, value in project.items()}
        importers[importer_id] = project
    lockfile["importers"] = importers
