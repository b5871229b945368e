"""Data models for lockfile version diffs."""

from __future__ import annotations

from .dependency_item import DependencyItem
from .diff_result import DiffResult

__all__ = [
    "DependencyItem",
    "DiffResult",
]
