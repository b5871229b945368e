"""Path-keyed diff of two normalised dependency lists."""

from __future__ import annotations

from collections.abc import Sequence

from .models import DependencyItem, DiffResult

SORT_PATH_SEPARATOR = "|"

CollationKey = tuple[tuple[tuple[int, object], ...], tuple[bool, ...]]

# ICU root collation order for whitespace, punctuation and symbols.
PUNCTUATION_ORDER = " _-,;:!?.'\"()[]{}@*/\\&#%`^+<=>|~$"
_PUNCTUATION_RANK = {char: rank for rank, char in enumerate(PUNCTUATION_ORDER)}


def collation_key(value: str) -> CollationKey:
    """Approximate locale-aware ordering of ``str.localeCompare``.

    Punctuation and symbols sort before digits, digits before letters, and
    letters compare case-insensitively with lowercase first on ties.
    """
    primary: list[tuple[int, object]] = []
    for char in value:
        if char.isalpha():
            primary.append((2, char.casefold()))
        elif char.isdigit():
            primary.append((1, char))
        else:
            rank = _PUNCTUATION_RANK.get(char, len(PUNCTUATION_ORDER) + ord(char))
            primary.append((0, rank))
    return tuple(primary), tuple(char.isupper() for char in value)


def _sort_key(change: DiffResult) -> tuple[CollationKey, CollationKey]:
    return collation_key(change.name), collation_key(SORT_PATH_SEPARATOR.join(change.path))


def diff_items(
    from_items: Sequence[DependencyItem], to_items: Sequence[DependencyItem]
) -> list[DiffResult]:
    """Return changes between two snapshots, sorted by name then path.

    Items are paired on their joined path; the first ``to`` item with a given
    path is the match. Paths present only in ``from`` are removals, paths only
    in ``to`` are additions.
    """
    to_index: dict[str, int] = {}
    for idx, item in enumerate(to_items):
        to_index.setdefault(item.joined_path, idx)

    changes: list[DiffResult] = []
    consumed: set[int] = set()
    for f in from_items:
        t_idx = to_index.get(f.joined_path)
        if t_idx is None:
            changes.append(DiffResult(f.path, f.name, version_from=f.version, version_to=None))
            continue
        consumed.add(t_idx)
        t = to_items[t_idx]
        if t.version != f.version:
            changes.append(DiffResult(t.path, t.name, version_from=f.version, version_to=t.version))

    for idx, t in enumerate(to_items):
        if idx not in consumed:
            changes.append(DiffResult(t.path, t.name, version_from=None, version_to=t.version))

    return sorted(changes, key=_sort_key)
