"""Click command class for wls.

Adds two things to a plain ``click.Command``: an eager ``--examples`` flag,
so ``--help`` stays short, and a legend section at the end of ``--help``
explaining how ghost entries are marked.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import click


def _add_examples_option(cmd: click.Command, examples: str) -> None:
    """Attach an eager ``--examples`` flag that prints *examples* and exits."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo("Examples:\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples and exit.",
        )
    )


class WlsCommand(click.Command):
    """Command with ``--examples`` and a ``Legend`` help section.

    *legend* rows are ``(sample, meaning)`` pairs rendered as a definition
    list, e.g. ``("name@", "ghost: declared, not checked out")``.
    """

    def __init__(
        self,
        *args: Any,
        examples: str | None = None,
        legend: Sequence[tuple[str, str]] = (),
        **kwargs: Any,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        self.legend = tuple(legend)
        if examples:
            _add_examples_option(self, examples)

    def format_epilog(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        if self.legend:
            with formatter.section("Legend"):
                formatter.write_dl(list(self.legend))
        super().format_epilog(ctx, formatter)
