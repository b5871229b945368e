"""Diff options and dependency category filtering."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, get_args

DependencyType = Literal["prod", "dev", "optional", "peer"]
Mode = Literal["npm", "pnpm"]

DEPENDENCY_TYPES: tuple[DependencyType, ...] = get_args(DependencyType)
MODES: tuple[Mode, ...] = get_args(Mode)

DEFAULT_LOCK_NAMES: dict[str, str] = {
    "npm": "package-lock.json",
    "pnpm": "pnpm-lock.yaml",
}


def _check_types(field: str, values: tuple[str, ...] | None) -> None:
    if values is None:
        return
    unknown = [value for value in values if value not in DEPENDENCY_TYPES]
    if unknown:
        raise ValueError(
            f"Invalid {field} dependency type(s): {', '.join(unknown)}. "
            f"Expected any of: {', '.join(DEPENDENCY_TYPES)}"
        )


@dataclass(frozen=True)
class DiffOptions:
    """Settings shared by acquisition, normalisation and diffing."""

    mode: Mode = "npm"
    include: tuple[DependencyType, ...] | None = None
    omit: tuple[DependencyType, ...] | None = None
    direct_only: bool = False
    git: bool = False
    git_lock_file: str | None = None

    def __post_init__(self) -> None:
        if self.mode not in MODES:
            raise ValueError(f"Invalid mode: {self.mode}")
        _check_types("include", self.include)
        _check_types("omit", self.omit)

    @property
    def lock_file_name(self) -> str:
        """Lockfile path used inside git revisions."""
        return self.git_lock_file or DEFAULT_LOCK_NAMES[self.mode]


def filter_types(options: DiffOptions) -> tuple[DependencyType, ...]:
    """Return the dependency categories to keep.

    ``include`` takes precedence over ``omit``; ``prod`` can never be omitted.
    """
    if options.include is not None:
        return tuple(options.include)
    if options.omit is not None:
        return tuple(t for t in DEPENDENCY_TYPES if t == "prod" or t not in options.omit)
    return DEPENDENCY_TYPES
