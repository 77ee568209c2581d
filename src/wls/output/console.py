"""Rich Console factory and theme for wls output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract. Color is only emitted when the
caller says the real stdout is a terminal.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

from wls.domain.types import EntryKind

WLS_THEME = Theme(
    {
        "wls.error": "bold red",
        "wls.warning": "bold yellow",
        "wls.header": "bold",
        "wls.meta": "dim",
        "wls.real": "",
        "wls.ghost": "dim italic",
    }
)

_KIND_STYLES: dict[str, str] = {
    EntryKind.REAL: "wls.real",
    EntryKind.GHOST: "wls.ghost",
}


def create_console(
    *,
    no_color: bool = False,
    width: int | None = None,
    force_terminal: bool | None = None,
) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes.
        width: Override terminal width (useful for consistent test output).
        force_terminal: Emit styles even though the buffer is not a TTY.
    """
    return Console(
        file=StringIO(),
        theme=WLS_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
        force_terminal=force_terminal,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_kind(kind: str) -> str:
    """Return the Rich style name for an entry kind."""
    return _KIND_STYLES.get(kind, "")
