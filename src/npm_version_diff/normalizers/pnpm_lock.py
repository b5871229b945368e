"""Walk pnpm-lock.yaml importers into dependency items.

Two walker strategies cover the lockfile generations: ``legacy`` for
lockfileVersion below 7 (dep paths like ``/name@1.0.0``, node data in
``packages``) and ``current`` for 9.x (dep paths like ``name@1.0.0``, node
data in ``snapshots``). The strategy is chosen once per document and both
produce the same ``name@version`` tokens.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, NamedTuple
from collections.abc import Callable, Iterable, Iterator

from ..models import DependencyItem
from ..options import DependencyType, DiffOptions, filter_types
from ..parsers.pnpm_lock import lockfile_version

logger = logging.getLogger(__name__)

_PEERS_SUFFIX = re.compile(r"\(.+")

# Importer sections in the order their entries are merged.
_IMPORTER_SECTIONS: tuple[tuple[DependencyType, str], ...] = (
    ("dev", "devDependencies"),
    ("prod", "dependencies"),
    ("optional", "optionalDependencies"),
)


def _legacy_ref_to_dep_path(reference: str, alias: str) -> str | None:
    if reference.startswith("link:"):
        return None
    if reference.startswith("file:"):
        return reference
    if "/" not in reference:
        return f"/{alias}@{reference}"
    if "(" in reference and reference.rfind("/", 0, reference.index("(")) == -1:
        return f"/{alias}@{reference}"
    return reference


def _legacy_token(dep_path: str) -> str:
    token = dep_path[1:] if dep_path.startswith("/") else dep_path
    # 5.x peer suffixes are appended to the version with an underscore
    at_index = token.find("@", 1)
    if at_index != -1:
        underscore = token.find("_", at_index)
        if underscore != -1:
            token = token[:underscore]
    return token


def _current_ref_to_dep_path(reference: str, alias: str) -> str | None:
    if reference.startswith("link:"):
        return None
    if reference.startswith("@"):
        return reference
    at_index = reference.find("@")
    if at_index == -1:
        return f"{alias}@{reference}"
    colon_index = reference.find(":")
    bracket_index = reference.find("(")
    if (colon_index == -1 or at_index < colon_index) and (
        bracket_index == -1 or at_index < bracket_index
    ):
        return reference
    return f"{alias}@{reference}"


@dataclass(frozen=True)
class WalkerStrategy:
    """Dep path handling for one lockfile generation."""

    name: str
    ref_to_dep_path: Callable[[str, str], str | None]
    nodes: Callable[[dict[str, Any]], dict[str, Any]]
    token: Callable[[str], str]


LEGACY_STRATEGY = WalkerStrategy(
    name="legacy",
    ref_to_dep_path=_legacy_ref_to_dep_path,
    nodes=lambda lockfile: lockfile.get("packages") or {},
    token=_legacy_token,
)

CURRENT_STRATEGY = WalkerStrategy(
    name="current",
    ref_to_dep_path=_current_ref_to_dep_path,
    nodes=lambda lockfile: lockfile.get("snapshots") or lockfile.get("packages") or {},
    token=lambda dep_path: dep_path,
)


def select_strategy(lockfile: dict[str, Any]) -> WalkerStrategy:
    version = lockfile_version(lockfile)
    if version is not None and version < 7:
        return LEGACY_STRATEGY
    return CURRENT_STRATEGY


def split_name_version(dep_path_token: str) -> tuple[str, str]:
    """Split ``name@version(peers)`` on the last ``@`` after dropping peers."""
    name_version = _PEERS_SUFFIX.sub("", dep_path_token)
    idx = name_version.rfind("@")
    if idx <= 0:
        return name_version, ""
    return name_version[:idx], name_version[idx + 1 :]


class _Node(NamedTuple):
    path: tuple[str, ...]
    version: str
    snapshot: dict[str, Any]


class _Walker:
    """Depth-first walk that visits every dep path at most once."""

    def __init__(
        self, strategy: WalkerStrategy, lockfile: dict[str, Any], include_optional: bool
    ) -> None:
        self.strategy = strategy
        self.nodes = strategy.nodes(lockfile)
        self.include_optional = include_optional
        self.walked: set[str] = set()

    def dep_paths(self, edges: dict[str, Any]) -> list[str]:
        dep_paths: list[str] = []
        for alias, reference in edges.items():
            if isinstance(reference, dict):
                reference = reference.get("version")
            if reference is None:
                continue
            dep_path = self.strategy.ref_to_dep_path(str(reference), str(alias))
            if dep_path is not None:
                dep_paths.append(dep_path)
        return dep_paths

    def step(self, dep_paths: Iterable[str], parent: tuple[str, ...]) -> list[_Node]:
        nodes: list[_Node] = []
        for dep_path in dep_paths:
            if dep_path in self.walked:
                continue
            self.walked.add(dep_path)
            if dep_path not in self.nodes:
                logger.debug("Skipping %s: no package entry", dep_path)
                continue
            name, version = split_name_version(self.strategy.token(dep_path))
            nodes.append(_Node((*parent, name), version, self.nodes[dep_path] or {}))
        return nodes

    def children(self, node: _Node) -> list[str]:
        edges: dict[str, Any] = dict(node.snapshot.get("dependencies") or {})
        if self.include_optional:
            edges.update(node.snapshot.get("optionalDependencies") or {})
        return self.dep_paths(edges)

    def walk(self, entry_dep_paths: list[str], direct_only: bool) -> Iterator[_Node]:
        stack: list[Iterator[_Node]] = [iter(self.step(entry_dep_paths, ()))]
        while stack:
            node = next(stack[-1], None)
            if node is None:
                stack.pop()
                continue
            yield node
            if not direct_only:
                stack.append(iter(self.step(self.children(node), node.path)))


def _entry_edges(
    importers: dict[str, Any], include_types: tuple[DependencyType, ...]
) -> Iterator[dict[str, Any]]:
    for project in importers.values():
        if not isinstance(project, dict):
            continue
        edges: dict[str, Any] = {}
        for dep_type, section in _IMPORTER_SECTIONS:
            if dep_type in include_types:
                edges.update(project.get(section) or {})
        yield edges


def normalize(lockfile: dict[str, Any], options: DiffOptions) -> list[DependencyItem]:
    """Return one item per reachable dependency edge, from every importer."""
    include_types = filter_types(options)
    strategy = select_strategy(lockfile)
    walker = _Walker(strategy, lockfile, include_optional="optional" in include_types)
    logger.debug(
        "Walking %d importer(s) with the %s strategy", len(lockfile["importers"]), strategy.name
    )

    entry_dep_paths: list[str] = []
    for edges in _entry_edges(lockfile["importers"], include_types):
        entry_dep_paths.extend(walker.dep_paths(edges))

    return [
        DependencyItem(path=node.path, name=node.path[-1], version=node.version)
        for node in walker.walk(entry_dep_paths, options.direct_only)
    ]
