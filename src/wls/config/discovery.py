"""Config file discovery.

``.wls.toml`` is searched upward from the directory being listed, not the
shell's cwd, so ``wls ~/trees/a/src`` picks up tree ``a``'s settings from
anywhere. ``WLS_CONFIG`` names a file outright and skips the search; the
--config CLI flag skips discovery entirely.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from wls.domain.paths import physical_path

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".wls.toml"
CONFIG_ENV_VAR = "WLS_CONFIG"
BOUNDARY_ENV_VAR = "WLS_MANIFEST__SEARCH_BOUNDARY"


def _search_origin(start: Path) -> Path:
    """Nearest existing directory at or above *start*."""
    current = physical_path(start)
    while not current.is_dir() and current.parent != current:
        current = current.parent
    return current


def find_config(start: Path | None = None, *, boundary: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for ``.wls.toml``.

    *start* is the listing target and may be a file or a directory that is
    not on disk; the walk begins at its nearest existing ancestor. The walk
    checks *boundary* last. Without one, ``WLS_MANIFEST__SEARCH_BOUNDARY``
    applies, the same limit the manifest search honors.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        if p.is_file():
            return p
        logger.debug("%s points at missing file %s", CONFIG_ENV_VAR, p)
        return None

    if boundary is None and os.environ.get(BOUNDARY_ENV_VAR):
        boundary = Path(os.environ[BOUNDARY_ENV_VAR])
    stop = physical_path(boundary) if boundary is not None else None

    current = _search_origin(start or Path.cwd())
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        if current == stop:
            break
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None
