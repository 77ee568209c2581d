"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, ``.wls.toml`` only contains
overrides. Most users never need a config file at all.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel


class ManifestConfig(BaseModel):
    """[manifest] section."""

    model_config = {"frozen": True}

    tree_dir_name: str = "src"
    marker_dir: str = ".meta"
    manifest_name: str = "manifest.json"
    search_boundary: Path | None = None
    strict: bool = False


class ListingConfig(BaseModel):
    """[listing] section."""

    model_config = {"frozen": True}

    ghosts: bool = True
    all: bool = False
    sort: Literal["name", "Name"] = "name"
    reverse: bool = False
    ghosts_last: bool = False
