"""npm-version-diff core package.

This package computes dependency version changes between two npm or pnpm
lockfiles, callable both from the ``npm-version-diff`` command line and as a
library.
"""

from .core import diff_documents, diff_packages
from .errors import (
    DocumentAcquisitionError,
    StagingError,
    UnsupportedDocumentError,
    VersionDiffError,
)
from .models import DependencyItem, DiffResult
from .options import DiffOptions, filter_types

__all__ = [
    "DependencyItem",
    "DiffOptions",
    "DiffResult",
    "DocumentAcquisitionError",
    "StagingError",
    "UnsupportedDocumentError",
    "VersionDiffError",
    "diff_documents",
    "diff_packages",
    "filter_types",
]
