"""Manifest discovery and loading.

Walk-up finder locates ``<tree>/src/.meta/manifest.json``, similar to how
git finds ``.git/``. A directory only anchors a tree when it is named like a
tree source root *and* holds the marker file.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from wls.domain.errors import ManifestNotFound, ManifestParseError
from wls.domain.manifest import Manifest, parse_manifest
from wls.domain.paths import physical_path

logger = logging.getLogger(__name__)

TREE_DIR_NAME = "src"
MARKER_DIR = ".meta"
MANIFEST_NAME = "manifest.json"


@dataclass(frozen=True)
class ManifestLoader:
    """Finds and reads the manifest governing a path.

    Attributes:
        tree_dir_name: Required basename of a tree root directory.
        marker_dir: Reserved subdirectory holding the manifest.
        manifest_name: Manifest filename inside *marker_dir*.
        search_boundary: Last directory checked during the walk-up, or
            None to ascend all the way to the filesystem root.
    """

    tree_dir_name: str = TREE_DIR_NAME
    marker_dir: str = MARKER_DIR
    manifest_name: str = MANIFEST_NAME
    search_boundary: Path | None = None

    def manifest_path_for(self, tree_root: Path) -> Path:
        return tree_root / self.marker_dir / self.manifest_name

    def is_tree_root(self, directory: Path) -> bool:
        """Whether *directory* is named as a tree root and holds the manifest."""
        return directory.name == self.tree_dir_name and self.manifest_path_for(directory).is_file()

    def locate(self, start: Path) -> tuple[Path, Path]:
        """Walk up from *start* and return ``(tree_root, manifest_path)``.

        *start* need not exist. Raises :class:`ManifestNotFound` when the
        filesystem root or the search boundary is passed without a match.
        """
        current = physical_path(start)
        boundary = physical_path(self.search_boundary) if self.search_boundary else None
        while True:
            if self.is_tree_root(current):
                logger.debug("Found tree root %s for %s", current, start)
                return current, self.manifest_path_for(current)
            if current == boundary:
                break
            parent = current.parent
            if parent == current:
                break
            current = parent
        raise ManifestNotFound(start)

    def load(self, manifest_path: Path) -> Manifest:
        """Read and parse the manifest at *manifest_path*."""
        try:
            raw = manifest_path.read_bytes()
        except OSError as exc:
            raise ManifestParseError(f"cannot read: {exc}", path=manifest_path) from exc
        try:
            manifest = parse_manifest(raw)
        except ManifestParseError as exc:
            raise ManifestParseError(exc.reason, path=manifest_path) from exc
        logger.debug("Loaded manifest %s with %d keys", manifest_path, len(manifest))
        return manifest
