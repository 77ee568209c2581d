"""Merge real and ghost entries into one ordered listing.

Ordering is injected as a key function. Callers holding an old-style
comparator can pass ``functools.cmp_to_key(cmp)``. The standard keys come
from :func:`collation_key`.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from enum import StrEnum
from typing import Any

from wls.domain.types import Entry, EntryKind

SortKey = Callable[[Entry], Any]


class SortMode(StrEnum):
    """Name collations understood by :func:`collation_key`."""

    NAME = "name"  # case-insensitive
    NAME_CASE = "Name"  # case-sensitive


def _name_insensitive(entry: Entry) -> Any:
    return (entry.name.casefold(), entry.name)


def _name_sensitive(entry: Entry) -> Any:
    return entry.name


def collation_key(sort: SortMode | str = SortMode.NAME, *, ghosts_last: bool = False) -> SortKey:
    """Build a sort key for *sort*, optionally grouping ghosts after real entries."""
    base = _name_sensitive if SortMode(sort) is SortMode.NAME_CASE else _name_insensitive
    if not ghosts_last:
        return base

    def grouped(entry: Entry) -> Any:
        return (entry.is_ghost, base(entry))

    return grouped


def merge_entries(
    real: Iterable[Entry],
    ghost: Iterable[Entry],
    *,
    key: SortKey | None = None,
    reverse: bool = False,
) -> list[Entry]:
    """Combine *real* and *ghost* into a deduplicated, ordered list.

    A name present in both keeps only its REAL entry. Ties under *key* are
    broken by exact name so the result never depends on set iteration order.
    """
    by_name: dict[str, Entry] = {}
    for entry in ghost:
        by_name.setdefault(entry.name, entry)
    for entry in real:
        existing = by_name.get(entry.name)
        if existing is None or existing.kind is EntryKind.GHOST:
            by_name[entry.name] = entry

    sort_key = key or collation_key()
    ordered = sorted(by_name.values(), key=lambda e: e.name)
    ordered.sort(key=sort_key)
    if reverse:
        ordered.reverse()
    return ordered
