"""Normalizers turning parsed lockfiles into flat dependency item lists.

The registry maps each mode to the normalizer for its lockfile format so the
orchestration layer stays format-agnostic.
"""

from __future__ import annotations

from typing import Any, TypeAlias
from collections.abc import Callable

from ..models import DependencyItem
from ..options import DiffOptions
from . import package_lock, pnpm_lock

NormalizeFunction: TypeAlias = Callable[[dict[str, Any], DiffOptions], list[DependencyItem]]

NORMALIZERS: dict[str, NormalizeFunction] = {
    "npm": package_lock.normalize,
    "pnpm": pnpm_lock.normalize,
}


def get_normalizer(mode: str) -> NormalizeFunction:
    """Return the normalizer for ``mode``, or raise ValueError."""
    normalizer = NORMALIZERS.get(mode)
    if normalizer is None:
        known = ", ".join(sorted(NORMALIZERS))
        raise ValueError(f"Unknown mode '{mode}'. Known modes: {known}")
    return normalizer


__all__ = [
    "NORMALIZERS",
    "NormalizeFunction",
    "get_normalizer",
]
