"""Shared pytest fixtures and test helpers for wls tests."""

from __future__ import annotations

import json
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from wls.config.models import ListingConfig
from wls.domain.manifest import Manifest, ManifestRecord
from wls.domain.paths import ManifestKey
from wls.domain.types import Entry, EntryKind
from wls.infrastructure.manifest_loader import ManifestLoader
from wls.services.listing import ListingService

CLIENT_UNITS = [
    "admin-mobile",
    "admin-web",
    "checkout-web",
    "customer-account-web",
    "customer-authentication-web",
    "customerview-mobile",
    "finance-mobile",
    "inbox-mobile",
    "portable-wallets",
    "pos-mobile",
    "simgym",
]


def write_manifest(tree_root: Path, keys: dict[str, object]) -> Path:
    """Write ``keys`` as ``<tree_root>/.meta/manifest.json``."""
    meta = tree_root / ".meta"
    meta.mkdir(parents=True, exist_ok=True)
    path = meta / "manifest.json"
    path.write_text(json.dumps(keys), encoding="utf-8")
    return path


def manifest_of(*raw_keys: str) -> Manifest:
    """Build a manifest from bare key strings, assigning sequential ids."""
    return Manifest(
        {
            ManifestKey.parse(raw): ManifestRecord(id=f"W-{n}")
            for n, raw in enumerate(raw_keys, 1)
        }
    )


def names(entries: list[Entry], kind: EntryKind | None = None) -> list[str]:
    return [e.name for e in entries if kind is None or e.kind is kind]


def result_entries(data: dict[str, object]) -> list[Entry]:
    return [Entry.model_validate(e) for e in data["entries"]]  # type: ignore[attr-defined]


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def tree_root(tmp_path: Path) -> Path:
    """A mock monorepo tree: ``trees/my-tree/src`` with the clients manifest.

    Only ``areas/clients/admin-web`` is checked out.
    """
    root = tmp_path / "trees" / "my-tree" / "src"
    keys: dict[str, object] = {
        f"//areas/clients/{unit}": {"id": f"W-{n}"} for n, unit in enumerate(CLIENT_UNITS, 1)
    }
    keys["//areas/platform/billing"] = {"id": "W-12"}
    write_manifest(root, keys)
    (root / "areas" / "clients" / "admin-web").mkdir(parents=True)
    return root


@pytest.fixture
def service() -> ListingService:
    """Listing service with default loader and listing options."""
    return ListingService(ManifestLoader(), ListingConfig())


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Keep a developer's WLS_* environment out of the tests."""
    for var in (
        "WLS_CONFIG",
        "WLS_LISTING__ALL",
        "WLS_LISTING__GHOSTS",
        "WLS_MANIFEST__STRICT",
        "WLS_MANIFEST__SEARCH_BOUNDARY",
    ):
        monkeypatch.delenv(var, raising=False)
    yield
