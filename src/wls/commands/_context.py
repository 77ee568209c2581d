"""AppContext — per-invocation state for the wls command.

Created once by the CLI entry point. Configures logging, builds the
listing service lazily, and centralizes result emission (stdout/stderr
routing + exit codes).
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

import click

from wls.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from wls.config.settings import WlsSettings
    from wls.services.listing import ListingService
    from wls.services.result import ServiceResult


class AppContext:
    """Shared context for one invocation.

    The listing service is created on first use so ``--help`` and
    ``--version`` never touch the filesystem.
    """

    def __init__(self, settings: WlsSettings) -> None:
        self.settings = settings
        self._service: ListingService | None = None

        from wls.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def service(self) -> ListingService:
        """The listing service (created lazily on first access)."""
        if self._service is None:
            from wls.services.listing import ListingService

            self._service = ListingService.from_settings(self.settings)
        return self._service

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings go to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
            color=sys.stdout.isatty() or None,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            if output:
                click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"wls: warning: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
