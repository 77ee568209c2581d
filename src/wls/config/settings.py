"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``WLS_*`` prefix, ``__`` for nested sections
  3. TOML file    — ``.wls.toml`` discovered via walk-up
  4. Code defaults — baked into the section models
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from wls.config.discovery import find_config
from wls.config.models import ListingConfig, ManifestConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``.wls.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class WlsSettings(BaseSettings):
    """Unified settings for one wls invocation.

    Attributes:
        config_path: The TOML file that was merged in, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "WLS_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    # --- Output flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    manifest: ManifestConfig = Field(default_factory=ManifestConfig)
    listing: ListingConfig = Field(default_factory=ListingConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        cwd: Path | None = None,
        target: str | None = None,
        listing: dict[str, Any] | None = None,
        **cli_flags: Any,
    ) -> WlsSettings:
        """Construct settings from a CLI invocation.

        *target* is the path being listed, relative to *cwd*; config discovery
        starts there. *listing* holds only the listing flags the user actually
        passed; they are layered over the ``[listing]`` values from env and TOML.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            base_dir = cwd or Path.cwd()
            toml_path = find_config(base_dir / target if target else base_dir)

        _tls.toml_path = toml_path
        try:
            base = cls(config_path=toml_path, **cli_flags)
        finally:
            _tls.toml_path = None
        if not listing:
            return base
        merged = base.listing.model_copy(update=listing)
        listing_config = ListingConfig.model_validate(merged.model_dump())
        return base.model_copy(update={"listing": listing_config})
