"""Logical path primitives shared by manifest keys and listing prefixes.

Both a :class:`ManifestKey` and a :class:`CanonicalPath` are tuples of
non-empty segments below a tree root. They differ only in origin: keys come
from the manifest text (``//a/b``), canonical paths from the filesystem.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

KEY_MARKER = "//"

_FORBIDDEN_SEGMENTS = frozenset({"", ".", ".."})


def _check_segments(segments: tuple[str, ...]) -> None:
    for segment in segments:
        if segment in _FORBIDDEN_SEGMENTS or "/" in segment:
            msg = f"Invalid path segment: {segment!r}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class CanonicalPath:
    """Directory position relative to a tree root, as segments.

    The empty tuple is the tree root itself.
    """

    segments: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        _check_segments(self.segments)

    def __len__(self) -> int:
        return len(self.segments)

    def __str__(self) -> str:
        return KEY_MARKER + "/".join(self.segments)

    def child(self, name: str) -> CanonicalPath:
        return CanonicalPath((*self.segments, name))

    @classmethod
    def from_relative(cls, relative: Path) -> CanonicalPath:
        """Build from a path relative to the tree root (``.`` is the root)."""
        return cls(tuple(part for part in relative.parts if part not in ("", ".")))


@dataclass(frozen=True, slots=True)
class ManifestKey:
    """Logical workspace-unit identifier, e.g. ``//areas/clients/admin-web``."""

    segments: tuple[str, ...]

    def __post_init__(self) -> None:
        _check_segments(self.segments)

    def __len__(self) -> int:
        return len(self.segments)

    def __str__(self) -> str:
        return KEY_MARKER + "/".join(self.segments)

    @classmethod
    def parse(cls, raw: str) -> ManifestKey:
        """Parse ``//seg/seg`` into a key.

        ``//`` alone is the zero-segment key naming the tree root.
        Raises ``ValueError`` for a missing marker or empty/dot segments.
        """
        if not raw.startswith(KEY_MARKER):
            msg = f"Manifest key must start with {KEY_MARKER!r}: {raw!r}"
            raise ValueError(msg)
        body = raw[len(KEY_MARKER) :]
        if not body:
            return cls(())
        return cls(tuple(body.split("/")))

    def starts_with(self, prefix: CanonicalPath) -> bool:
        """Whether this key lies at or below *prefix*."""
        n = len(prefix.segments)
        return len(self.segments) >= n and self.segments[:n] == prefix.segments


def normalize_lexically(path: Path) -> Path:
    """Collapse redundant separators, ``.`` and ``..`` without touching disk.

    Symlinks are not resolved, so the path need not exist.
    """
    return Path(os.path.normpath(path))


def physical_path(path: Path) -> Path:
    """Normalize *path* lexically, then resolve the symlinks left in it.

    ``..`` is applied to the text first, so ``link/..`` is the directory
    holding ``link``. Trailing components that do not exist are kept as
    written.
    """
    return Path(os.path.realpath(normalize_lexically(path.absolute())))
