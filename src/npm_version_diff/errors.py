"""Error types raised while diffing lockfiles."""

from __future__ import annotations


class VersionDiffError(RuntimeError):
    """Base error for failures while producing a version diff."""


class DocumentAcquisitionError(VersionDiffError):
    """Raised when a lockfile cannot be read or retrieved from git history."""


class UnsupportedDocumentError(VersionDiffError):
    """Raised when a lockfile does not match a supported schema or version."""

    def __init__(self, side: str, message: str) -> None:
        super().__init__(message)
        self.side = side


class StagingError(VersionDiffError):
    """Raised when lockfiles cannot be staged in a temporary directory."""
