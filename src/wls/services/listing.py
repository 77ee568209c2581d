"""ListingService — merged real + ghost directory listings.

Pipeline per directory: RESOLVE → LOAD MANIFEST → READ → SYNTHESIZE → MERGE

INVARIANT: a missing manifest never fails a listing. Ghost synthesis is
simply skipped and the result holds real entries only.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from wls.domain.errors import ManifestParseError, OutsideTreeError
from wls.domain.ghosts import synthesize_ghosts
from wls.domain.merge import collation_key, merge_entries
from wls.domain.types import Entry, display_text
from wls.infrastructure.filesystem import read_children
from wls.infrastructure.manifest_loader import ManifestLoader
from wls.services.resolver import PathResolver, Resolution, absolute_target
from wls.services.result import ErrorCode, ServiceResult

if TYPE_CHECKING:
    from wls.config.models import ListingConfig
    from wls.config.settings import WlsSettings
    from wls.domain.manifest import Manifest
    from wls.domain.paths import CanonicalPath

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Scope:
    """Everything resolved once per invocation."""

    path: Path
    resolution: Resolution | None
    manifest: Manifest | None
    warnings: tuple[str, ...] = ()


@dataclass(frozen=True)
class _Level:
    path: Path
    prefix: CanonicalPath | None
    entries: list[Entry]
    subdirs: list[str]


class ListingService:
    """Produces listings for the CLI and any other front end.

    The manifest is loaded once per call and passed down explicitly;
    nothing is cached between calls.
    """

    def __init__(
        self,
        loader: ManifestLoader,
        options: ListingConfig,
        *,
        strict: bool = False,
    ) -> None:
        self._loader = loader
        self._resolver = PathResolver(loader)
        self._options = options
        self._strict = strict
        self._sort_key = collation_key(options.sort, ghosts_last=options.ghosts_last)

    @classmethod
    def from_settings(cls, settings: WlsSettings) -> ListingService:
        m = settings.manifest
        loader = ManifestLoader(
            tree_dir_name=m.tree_dir_name,
            marker_dir=m.marker_dir,
            manifest_name=m.manifest_name,
            search_boundary=m.search_boundary,
        )
        return cls(loader, settings.listing, strict=m.strict)

    # ── Public API ────────────────────────────────────────────────────

    def list_dir(
        self, requested: str | Path | None = None, cwd: Path | None = None
    ) -> ServiceResult:
        """List one directory, merging in ghost children from the manifest."""
        op = "list"
        scope = self._scope(op, requested, cwd or Path.cwd())
        if isinstance(scope, ServiceResult):
            return scope

        level = self._read_level(op, scope, scope.path, self._root_prefix(scope), root=True)
        if isinstance(level, ServiceResult):
            return level

        return ServiceResult(
            ok=True,
            op=op,
            data={**self._scope_data(scope), **_level_data(level)},
            warnings=list(scope.warnings),
            meta=_counts(level.entries),
        )

    def list_tree(
        self, requested: str | Path | None = None, cwd: Path | None = None
    ) -> ServiceResult:
        """List a directory and every real subdirectory below it, depth-first.

        Each level is an independent synthesis against the same manifest.
        Ghosts are never descended into. Unreadable subdirectories become
        warnings; only a failure on the top directory fails the result.
        """
        op = "list_tree"
        scope = self._scope(op, requested, cwd or Path.cwd())
        if isinstance(scope, ServiceResult):
            return scope

        top = self._read_level(op, scope, scope.path, self._root_prefix(scope), root=True)
        if isinstance(top, ServiceResult):
            return top

        warnings = list(scope.warnings)
        sections: list[dict[str, Any]] = []
        entries: list[Entry] = []
        for level in self._walk(op, scope, top, warnings):
            sections.append(_level_data(level))
            entries.extend(level.entries)

        return ServiceResult(
            ok=True,
            op=op,
            data={**self._scope_data(scope), "sections": sections},
            warnings=warnings,
            meta={**_counts(entries), "directories": len(sections)},
        )

    # ── Helpers ───────────────────────────────────────────────────────

    def _scope(self, op: str, requested: str | Path | None, cwd: Path) -> _Scope | ServiceResult:
        path = absolute_target(requested, cwd)
        if not self._options.ghosts:
            return _Scope(path=path, resolution=None, manifest=None)

        try:
            resolution = self._resolver.resolve(requested, cwd)
        except OutsideTreeError:
            logger.debug("No workspace tree above %s, listing real entries only", path)
            return _Scope(path=path, resolution=None, manifest=None)

        try:
            manifest = self._loader.load(resolution.manifest_path)
        except ManifestParseError as exc:
            if self._strict:
                return ServiceResult.failure(
                    op,
                    ErrorCode.MANIFEST_PARSE_ERROR,
                    _shown(exc),
                    manifest=_shown(resolution.manifest_path),
                )
            logger.debug("Skipping ghosts: %s", exc)
            return _Scope(
                path=path, resolution=resolution, manifest=None, warnings=(_shown(exc),)
            )

        return _Scope(path=path, resolution=resolution, manifest=manifest)

    @staticmethod
    def _root_prefix(scope: _Scope) -> CanonicalPath | None:
        return scope.resolution.prefix if scope.resolution else None

    @staticmethod
    def _scope_data(scope: _Scope) -> dict[str, Any]:
        res = scope.resolution
        return {
            "path": _shown(scope.path),
            "tree_root": _shown(res.tree_root) if res else None,
            "manifest": _shown(res.manifest_path) if res else None,
        }

    def _read_level(
        self,
        op: str,
        scope: _Scope,
        path: Path,
        prefix: CanonicalPath | None,
        *,
        root: bool = False,
    ) -> _Level | ServiceResult:
        """Read *path* and merge in its ghosts, or describe why it failed."""
        manifest = scope.manifest
        shown = _shown(path)
        try:
            children = read_children(path)
        except FileNotFoundError:
            # An unmaterialized directory is listable when the manifest declares it.
            if root and manifest is not None and prefix is not None and manifest.declares(prefix):
                logger.debug("%s is not on disk, listing ghosts only", path)
                children = []
            else:
                return ServiceResult.failure(
                    op,
                    ErrorCode.NO_SUCH_DIRECTORY,
                    f"{shown}: No such file or directory",
                    path=shown,
                )
        except NotADirectoryError:
            return ServiceResult.failure(
                op, ErrorCode.NOT_A_DIRECTORY, f"{shown}: Not a directory", path=shown
            )
        except PermissionError:
            return ServiceResult.failure(
                op, ErrorCode.PERMISSION_DENIED, f"{shown}: Permission denied", path=shown
            )
        except OSError as exc:
            return ServiceResult.failure(
                op, ErrorCode.READ_FAILED, _shown(f"{path}: {exc}"), path=shown
            )

        real_names = {child.name for child in children}
        ghosts: frozenset[Entry] = frozenset()
        if manifest is not None and prefix is not None:
            ghosts = synthesize_ghosts(manifest, prefix, real_names)

        entries = merge_entries(
            (Entry.real(name) for name in real_names),
            ghosts,
            key=self._sort_key,
            reverse=self._options.reverse,
        )
        if not self._options.all:
            entries = [e for e in entries if not e.is_hidden]

        dir_names = {child.name for child in children if child.is_dir}
        subdirs = [e.name for e in entries if e.name in dir_names]
        return _Level(path=path, prefix=prefix, entries=entries, subdirs=subdirs)

    def _walk(self, op: str, scope: _Scope, top: _Level, warnings: list[str]) -> Iterator[_Level]:
        stack = [top]
        while stack:
            level = stack.pop()
            yield level
            below: list[_Level] = []
            for name in level.subdirs:
                prefix = level.prefix.child(name) if level.prefix is not None else None
                child = self._read_level(op, scope, level.path / name, prefix)
                if isinstance(child, ServiceResult):
                    assert child.error is not None
                    warnings.append(child.error.message)
                    continue
                below.append(child)
            stack.extend(reversed(below))


def _level_data(level: _Level) -> dict[str, Any]:
    return {
        "path": _shown(level.path),
        "prefix": _shown(level.prefix) if level.prefix is not None else None,
        "entries": [e.model_dump(mode="json") for e in level.entries],
    }


def _shown(value: object) -> str:
    return display_text(str(value))


def _counts(entries: list[Entry]) -> dict[str, int]:
    ghosts = sum(1 for e in entries if e.is_ghost)
    return {"real_count": len(entries) - ghosts, "ghost_count": ghosts}
