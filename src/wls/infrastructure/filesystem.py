"""Real directory reads.

The only filesystem primitive the listing needs: the immediate child names
of a directory, plus which of them are directories for recursive mode.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RealChild:
    """One name returned by a directory read."""

    name: str
    is_dir: bool


def read_children(path: Path) -> list[RealChild]:
    """Return the children of *path* sorted by name.

    Raises ``FileNotFoundError``, ``NotADirectoryError``,
    ``PermissionError`` or another ``OSError`` unchanged; the caller decides
    which of them still allows a ghost-only listing. Symlinks to
    directories are reported with ``is_dir=False`` so recursion never
    follows them.
    """
    logger.debug("Reading directory %s", path)
    with os.scandir(path) as it:
        children = [RealChild(entry.name, entry.is_dir(follow_symlinks=False)) for entry in it]
    children.sort(key=lambda c: c.name)
    logger.debug("Read %d entries from %s", len(children), path)
    return children
