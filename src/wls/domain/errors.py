"""Typed error kinds raised by the manifest and path layers.

Services catch these and convert them into ``ServiceResult`` failures;
nothing here should reach the CLI as a raw exception.
"""

from __future__ import annotations

from pathlib import Path


class WlsError(Exception):
    """Base class for all wls domain errors."""


class ManifestNotFound(WlsError):
    """No manifest was discoverable ascending from *start*."""

    def __init__(self, start: Path) -> None:
        super().__init__(f"No workspace manifest found at or above {start}")
        self.start = start


class ManifestParseError(WlsError):
    """A manifest exists but could not be parsed."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        where = f" ({path})" if path is not None else ""
        super().__init__(f"Malformed workspace manifest{where}: {message}")
        self.path = path
        self.reason = message


class OutsideTreeError(WlsError):
    """The resolved path does not lie under any discoverable tree root."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"{path} is not inside a workspace tree")
        self.path = path
