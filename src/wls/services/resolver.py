"""PathResolver — requested path to canonical tree-relative position.

The same anchor serves both ghost synthesis and path resolution, so this
reuses :meth:`ManifestLoader.locate` instead of searching twice.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from wls.domain.errors import ManifestNotFound, OutsideTreeError
from wls.domain.paths import CanonicalPath, physical_path
from wls.infrastructure.manifest_loader import ManifestLoader

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resolution:
    """Where a requested path sits inside its tree."""

    path: Path
    tree_root: Path
    manifest_path: Path
    prefix: CanonicalPath


def absolute_target(requested: str | Path | None, cwd: Path) -> Path:
    """Join *requested* against *cwd* and return its physical location.

    An absent or empty *requested* means *cwd* itself. Symlinks are resolved
    after ``..`` is applied, so an implicit cwd and the same directory spelled
    through a link anchor to one tree.
    """
    if requested is None or str(requested) == "":
        target = cwd
    else:
        target = cwd / Path(requested)  # an absolute path replaces cwd
    return physical_path(target)


class PathResolver:
    """Resolve listing targets against the nearest tree root."""

    def __init__(self, loader: ManifestLoader) -> None:
        self._loader = loader

    def resolve(self, requested: str | Path | None, cwd: Path) -> Resolution:
        """Return the :class:`Resolution` for *requested*.

        Raises :class:`OutsideTreeError` when no tree root exists at or above
        the normalized path.
        """
        path = absolute_target(requested, cwd)
        try:
            tree_root, manifest_path = self._loader.locate(path)
        except ManifestNotFound as exc:
            raise OutsideTreeError(path) from exc

        prefix = CanonicalPath.from_relative(path.relative_to(tree_root))
        logger.debug("Resolved %s to %s under %s", requested or ".", prefix, tree_root)
        return Resolution(
            path=path, tree_root=tree_root, manifest_path=manifest_path, prefix=prefix
        )
