"""Allow ``python -m wls``."""

from wls.cli import cli

cli()
