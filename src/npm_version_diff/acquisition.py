"""Read the two lockfile documents from disk or from git history."""

from __future__ import annotations

import logging
import subprocess
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from .errors import DocumentAcquisitionError
from .options import DiffOptions

logger = logging.getLogger(__name__)

MAX_BUFFER = 10 * 1024 * 1024


def _read_file(side: str, path: str) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise DocumentAcquisitionError(f"Failed to read '{side}' lock file {path}: {exc}") from exc


def _git_show(side: str, revision: str, lock_file: str) -> str:
    object_name = f"{revision}:{lock_file}"
    try:
        completed = subprocess.run(
            ["git", "show", object_name],
            capture_output=True,
            check=False,
        )
    except OSError as exc:
        raise DocumentAcquisitionError(f"Failed to run git show {object_name}: {exc}") from exc

    if completed.returncode != 0:
        stderr = completed.stderr.decode("utf-8", errors="replace").strip()
        raise DocumentAcquisitionError(
            f"git show {object_name} failed for '{side}' (exit {completed.returncode}): {stderr}"
        )
    if len(completed.stdout) > MAX_BUFFER:
        raise DocumentAcquisitionError(
            f"git show {object_name} output for '{side}' exceeds {MAX_BUFFER} bytes"
        )

    try:
        return completed.stdout.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DocumentAcquisitionError(f"git show {object_name} returned non UTF-8 content") from exc


def read_lock_files(from_ref: str, to_ref: str, options: DiffOptions) -> tuple[str, str]:
    """Return the raw ``from`` and ``to`` documents.

    With ``options.git`` the refs are revisions and the lockfile is taken from
    each revision via ``git show``; otherwise they are filesystem paths. Both
    sides are fetched concurrently.
    """
    if options.git:
        lock_file = options.lock_file_name
        logger.debug("Reading %s from git revisions %s and %s", lock_file, from_ref, to_ref)
        with ThreadPoolExecutor(max_workers=2) as pool:
            from_future = pool.submit(_git_show, "from", from_ref, lock_file)
            to_future = pool.submit(_git_show, "to", to_ref, lock_file)
            from_doc, to_doc = from_future.result(), to_future.result()
    else:
        logger.debug("Reading lock files %s and %s", from_ref, to_ref)
        with ThreadPoolExecutor(max_workers=2) as pool:
            from_future = pool.submit(_read_file, "from", from_ref)
            to_future = pool.submit(_read_file, "to", to_ref)
            from_doc, to_doc = from_future.result(), to_future.result()

    logger.debug("Read %d and %d characters", len(from_doc), len(to_doc))
    return from_doc, to_doc
