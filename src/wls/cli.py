"""Root CLI command for wls."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import click
from click.core import ParameterSource

from wls import __version__
from wls.commands._base import WlsCommand
from wls.commands._context import AppContext
from wls.config.settings import WlsSettings
from wls.output.renderers import GHOST_MARKER

# CLI parameter name -> ([listing] field, value transform)
_LISTING_FLAGS: dict[str, tuple[str, Any]] = {
    "show_all": ("all", bool),
    "reverse": ("reverse", bool),
    "sort": ("sort", str),
    "ghosts_last": ("ghosts_last", bool),
    "no_ghosts": ("ghosts", lambda v: not v),
}


def _explicit_listing_flags(ctx: click.Context, params: dict[str, Any]) -> dict[str, Any]:
    """Listing flags given on the command line, keyed by config field."""
    explicit: dict[str, Any] = {}
    for param, (field, transform) in _LISTING_FLAGS.items():
        if ctx.get_parameter_source(param) is ParameterSource.COMMANDLINE:
            explicit[field] = transform(params[param])
    return explicit


@click.command(
    cls=WlsCommand,
    examples="""\
  wls
  wls areas/clients
  wls -a --ghosts-last ~/trees/my-tree/src/areas
  wls --no-ghosts
  wls -R areas
  wls --json areas | jq '.data.entries[] | select(.kind == "ghost") | .name'""",
    legend=[
        ("name", "real entry on disk"),
        (f"name{GHOST_MARKER}", "ghost: declared in the manifest, not checked out"),
    ],
)
@click.version_option(version=__version__, prog_name="wls")
@click.argument("path", required=False)
@click.option("-a", "--all", "show_all", is_flag=True, help="Show entries starting with a dot.")
@click.option("-r", "--reverse", is_flag=True, help="Reverse the sort order.")
@click.option(
    "--sort",
    type=click.Choice(["name", "Name"]),
    default="name",
    help="name: case-insensitive, Name: case-sensitive.",
)
@click.option("--ghosts-last", is_flag=True, help="List ghost entries after real ones.")
@click.option("--no-ghosts", is_flag=True, help="Ignore the workspace manifest.")
@click.option("-R", "--recurse", is_flag=True, help="Recurse into real directories.")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Bare names only.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging and listing details.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    path: str | None,
    recurse: bool,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    **listing_params: Any,
) -> None:
    """List PATH (default: current directory), including workspace units
    declared in the tree manifest that are not checked out (ghosts)."""
    settings = WlsSettings.from_cli(
        config_path=config_path,
        target=path,
        listing=_explicit_listing_flags(ctx, listing_params),
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    app = AppContext(settings)
    ctx.obj = app

    from wls.config.logging import bind_target

    bind_target(path or ".")
    cwd = Path.cwd()
    if recurse:
        app.emit(app.service.list_tree(path, cwd))
    else:
        app.emit(app.service.list_dir(path, cwd))
