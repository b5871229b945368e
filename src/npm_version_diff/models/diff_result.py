"""Version change model."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DiffResult:
    """A version change at one dependency path between two snapshots."""

    path: tuple[str, ...]
    name: str
    version_from: str | None
    version_to: str | None

    def __post_init__(self) -> None:
        if self.version_from is None and self.version_to is None:
            raise ValueError("At least one of version_from/version_to must be set")
        if self.version_from == self.version_to:
            raise ValueError(f"No version change for {'/'.join(self.path)}")

    @property
    def kind(self) -> str:
        if self.version_from is None:
            return "added"
        if self.version_to is None:
            return "removed"
        return "changed"

    def to_dict(self) -> dict[str, object]:
        return {
            "path": list(self.path),
            "name": self.name,
            "version": {
                "from": self.version_from,
                "to": self.version_to,
            },
        }
