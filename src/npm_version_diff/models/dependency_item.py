"""Normalised lockfile entry model."""

from __future__ import annotations

from dataclasses import dataclass
from collections.abc import Iterable

PATH_SEPARATOR = "/"


@dataclass(frozen=True)
class DependencyItem:
    """One installed package at a position in the dependency tree."""

    path: tuple[str, ...]
    name: str
    version: str

    @property
    def joined_path(self) -> str:
        """Matching key used when pairing entries across snapshots."""
        return PATH_SEPARATOR.join(self.path)

    def to_dict(self) -> dict[str, object]:
        return {
            "path": list(self.path),
            "name": self.name,
            "version": self.version,
        }

    @classmethod
    def from_path(cls, path: Iterable[str], version: str) -> DependencyItem:
        segments = tuple(path)
        return cls(path=segments, name=segments[-1], version=version)
