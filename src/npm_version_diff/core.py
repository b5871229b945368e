"""Core diff entrypoints.

This module MUST NOT contain CLI or output formatting concerns so it can be
used both by the command line wrapper and as a library.
"""

from __future__ import annotations

import logging

from .acquisition import read_lock_files
from .differ import diff_items
from .models import DependencyItem, DiffResult
from .normalizers import get_normalizer
from .options import DEFAULT_LOCK_NAMES, DiffOptions
from .parsers.package_lock import parse as parse_package_lock
from .parsers.pnpm_lock import read_wanted_lockfile
from .staging import staged_lockfiles

logger = logging.getLogger(__name__)


def _consolidate(
    from_doc: str, to_doc: str, options: DiffOptions
) -> tuple[list[DependencyItem], list[DependencyItem]]:
    normalize = get_normalizer(options.mode)

    if options.mode == "npm":
        from_lock = parse_package_lock(from_doc, "from")
        to_lock = parse_package_lock(to_doc, "to")
        return normalize(from_lock, options), normalize(to_lock, options)

    # pnpm lockfiles are read from a directory holding pnpm-lock.yaml
    with staged_lockfiles(from_doc, to_doc, DEFAULT_LOCK_NAMES["pnpm"]) as (from_dir, to_dir):
        from_lock = read_wanted_lockfile(from_dir, "from")
        to_lock = read_wanted_lockfile(to_dir, "to")
    return normalize(from_lock, options), normalize(to_lock, options)


def diff_documents(from_doc: str, to_doc: str, options: DiffOptions) -> list[DiffResult]:
    """Diff two raw lockfile documents.

    Params:
        from_doc: lockfile content before the change
        to_doc: lockfile content after the change
        options: lockfile format, dependency type filter and direct-only flag

    Returns: changes sorted by package name, then dependency path

    Raises UnsupportedDocumentError or StagingError; nothing is returned on
    failure.
    """
    from_items, to_items = _consolidate(from_doc, to_doc, options)
    logger.debug("Normalised %d 'from' and %d 'to' items", len(from_items), len(to_items))

    changes = diff_items(from_items, to_items)
    logger.info("Found %d version change(s)", len(changes))
    return changes


def diff_packages(from_ref: str, to_ref: str, options: DiffOptions) -> list[DiffResult]:
    """Read two lockfiles (paths, or git revisions with ``options.git``) and diff them."""
    from_doc, to_doc = read_lock_files(from_ref, to_ref, options)
    return diff_documents(from_doc, to_doc, options)
