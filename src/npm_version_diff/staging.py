"""Stage lockfile documents in a private temporary directory."""

from __future__ import annotations

import logging
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from collections.abc import Iterator

from .errors import StagingError

logger = logging.getLogger(__name__)

TEMP_PREFIX = "npvd-"


@contextmanager
def staged_lockfiles(from_doc: str, to_doc: str, file_name: str) -> Iterator[tuple[Path, Path]]:
    """Write both documents as ``from/<file_name>`` and ``to/<file_name>``.

    Yields the two directories. The temporary tree is removed on exit, also
    when staging itself fails.
    """
    try:
        tmp = Path(tempfile.mkdtemp(prefix=TEMP_PREFIX))
    except OSError as exc:
        raise StagingError(f"Failed to create temporary directory: {exc}") from exc

    try:
        dirs: list[Path] = []
        for side, doc in (("from", from_doc), ("to", to_doc)):
            directory = tmp / side
            try:
                directory.mkdir()
                (directory / file_name).write_text(doc, encoding="utf-8")
            except OSError as exc:
                raise StagingError(f"Failed to stage '{side}' lock file: {exc}") from exc
            dirs.append(directory)
        logger.debug("Staged lock files in %s", tmp)
        yield dirs[0], dirs[1]
    finally:
        shutil.rmtree(tmp, ignore_errors=True)
