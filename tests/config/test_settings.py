"""Tests for WlsSettings — unified settings with TOML source."""

from pathlib import Path

import click
import pytest

from wls.config.discovery import CONFIG_FILENAME
from wls.config.settings import WlsSettings


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = WlsSettings.from_cli(cwd=tmp_path)
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.manifest.tree_dir_name == "src"
        assert settings.manifest.marker_dir == ".meta"
        assert settings.manifest.manifest_name == "manifest.json"
        assert settings.manifest.search_boundary is None
        assert settings.manifest.strict is False
        assert settings.listing.ghosts is True
        assert settings.listing.sort == "name"

    def test_frozen(self, tmp_path: Path) -> None:
        settings = WlsSettings.from_cli(cwd=tmp_path)
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_sections(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text(
            '[manifest]\nstrict = true\nsearch_boundary = "/home"\n[listing]\nghosts_last = true\n'
        )
        settings = WlsSettings.from_cli(cwd=tmp_path)
        assert settings.manifest.strict is True
        assert settings.manifest.search_boundary == Path("/home")
        assert settings.listing.ghosts_last is True
        assert settings.listing.ghosts is True  # default preserved
        assert settings.config_path == tmp_path / CONFIG_FILENAME

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "wls.toml"
        custom.parent.mkdir()
        custom.write_text("[listing]\nall = true\n")
        settings = WlsSettings.from_cli(config_path=str(custom), cwd=tmp_path)
        assert settings.listing.all is True
        assert settings.config_path == custom

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("[listing\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            WlsSettings.from_cli(cwd=tmp_path)


class TestPriority:
    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("[listing]\nreverse = true\nall = false\n")
        monkeypatch.setenv("WLS_LISTING__ALL", "true")
        settings = WlsSettings.from_cli(cwd=tmp_path)
        assert settings.listing.all is True
        assert settings.listing.reverse is True

    def test_cli_listing_flags_override_toml(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text('[listing]\nghosts = false\nsort = "Name"\n')
        settings = WlsSettings.from_cli(cwd=tmp_path, listing={"ghosts": True})
        assert settings.listing.ghosts is True
        assert settings.listing.sort == "Name"  # untouched by the CLI

    def test_cli_output_flags(self, tmp_path: Path) -> None:
        settings = WlsSettings.from_cli(cwd=tmp_path, json_output=True, verbose=True)
        assert settings.json_output is True
        assert settings.verbose is True

    def test_invalid_listing_override_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(Exception):
            WlsSettings.from_cli(cwd=tmp_path, listing={"sort": "size"})


class TestDiscoveryStart:
    def test_target_directory_config_wins_over_cwd(self, tmp_path: Path) -> None:
        (tmp_path / "tree").mkdir()
        (tmp_path / "tree" / CONFIG_FILENAME).write_text("[listing]\nreverse = true\n")
        (tmp_path / "cwd").mkdir()
        settings = WlsSettings.from_cli(cwd=tmp_path / "cwd", target="../tree")
        assert settings.config_path == tmp_path / "tree" / CONFIG_FILENAME
        assert settings.listing.reverse is True

    def test_no_target_searches_cwd(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("[listing]\nall = true\n")
        assert WlsSettings.from_cli(cwd=tmp_path).listing.all is True
