"""Rich renderers for listing results.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Every renderer writes to a StringIO-backed Console and the caller gets the
text back. Ghost entries carry :data:`GHOST_MARKER` so they stay
distinguishable when color is off.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.text import Text

from wls.output.console import create_console, get_output, style_for_kind

if TYPE_CHECKING:
    from rich.console import Console

    from wls.services.result import ServiceResult

GHOST_MARKER = "@"


# ── Public API ────────────────────────────────────────────────────────


def render_result(
    result: ServiceResult,
    *,
    verbose: bool = False,
    color: bool | None = None,
) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console(force_terminal=color, no_color=color is False)

    if result.ok:
        _OP_RENDERERS[result.op](result, console, verbose=verbose)
    else:
        _render_error(result, console)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Bare names, one per line, for ``--quiet`` and scripting."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"wls: {msg}"

    if result.op == "list_tree":
        lines: list[str] = []
        for section in result.data.get("sections", []):
            lines.extend(_names(section))
        return "\n".join(lines)
    return "\n".join(_names(result.data))


# ── Helpers ───────────────────────────────────────────────────────────


def _names(data: dict[str, Any]) -> list[str]:
    return [entry["name"] for entry in data.get("entries", [])]


def _entry_line(entry: dict[str, Any]) -> Text:
    kind = entry.get("kind", "")
    text = Text(entry["name"], style=style_for_kind(kind))
    if kind == "ghost":
        text.append(GHOST_MARKER, style="wls.meta")
    return text


def _print_entries(console: Console, entries: list[dict[str, Any]]) -> None:
    for entry in entries:
        console.print(_entry_line(entry), soft_wrap=True)


def _render_scope(console: Console, result: ServiceResult) -> None:
    """Verbose footer naming the tree and entry counts."""
    tree_root = result.data.get("tree_root")
    console.print(Text(f"tree: {tree_root or '-'}", style="wls.meta"))
    meta = result.meta or {}
    console.print(
        Text(
            f"{meta.get('real_count', 0)} real, {meta.get('ghost_count', 0)} ghost",
            style="wls.meta",
        )
    )


# ── Op renderers ──────────────────────────────────────────────────────


def _render_list(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _print_entries(console, result.data.get("entries", []))
    if verbose:
        _render_scope(console, result)


def _render_list_tree(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    sections = result.data.get("sections", [])
    for i, section in enumerate(sections):
        if i:
            console.print()
        console.print(Text(f"{section['path']}:", style="wls.header"), soft_wrap=True)
        _print_entries(console, section.get("entries", []))
    if verbose:
        console.print()
        _render_scope(console, result)


def _render_error(result: ServiceResult, console: Console) -> None:
    msg = result.error.message if result.error else "Unknown error"
    console.print(Text("wls: ", style="wls.error"), Text(msg), sep="")


_OP_RENDERERS: dict[str, Callable[..., None]] = {
    "list": _render_list,
    "list_tree": _render_list_tree,
}
