"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from cadencectl.output.console import create_console, get_output, style_for_kind

if TYPE_CHECKING:
    from rich.console import Console

    from cadencectl.services.result import ServiceResult

EMPTY_SPECIAL = "No special events currently listed."
EMPTY_REGULAR = "No regular events currently listed."
EMPTY_COMBINED = "No events currently listed."

_BADGES = {"oneoff": "Special", "recurring": "Regular"}


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode.

    Event listings become one ``when<TAB>title`` line per event; a single
    occurrence lookup becomes just its ISO timestamp.
    """
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    if result.op == "next_occurrence":
        return str(result.data.get("next", ""))

    items = _listing_items(result.data)
    if items:
        return "\n".join(f"{item.get('when', '')}\t{item.get('title', '')}" for item in items)

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _listing_items(data: dict[str, Any]) -> list[dict[str, Any]]:
    if "items" in data:
        return list(data["items"])
    return [*data.get("special", []), *data.get("regular", [])]


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    console.print(Text("OK", style="cad.ok"), Text(f"  {result.op}", style="cad.op"))


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="cad.key")
    style = "cad.when" if key in ("next", "display") else ""
    console.print(k, Text(str(value), style=style), sep="")


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print the meta block (verbose only)."""
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        console.print(Text(f"    {k}: {v}"))


def _event_table(items: list[dict[str, Any]], *, verbose: bool = False) -> Table:
    """Build a Rich Table for a list of serialized events."""
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("", no_wrap=True)
    table.add_column("When", style="cad.when")
    table.add_column("Title", style="cad.title")
    table.add_column("Location")
    table.add_column("Schedule")
    if verbose:
        table.add_column("Summary", style="dim")
        table.add_column("Links", style="dim")

    for item in items:
        kind = str(item.get("kind", ""))
        row: list[Any] = [
            Text(_BADGES.get(kind, kind), style=style_for_kind(kind)),
            Text(str(item.get("display", ""))),
            Text(str(item.get("title", ""))),
            Text(str(item.get("location", ""))),
            Text(str(item.get("schedule", ""))),
        ]
        if verbose:
            row.append(Text(str(item.get("summary", ""))))
            links = item.get("links", [])
            row.append(Text(", ".join(f"{link['label']} <{link['href']}>" for link in links)))
        table.add_row(*row)

    return table


def _render_section(
    console: Console,
    heading: str,
    items: list[dict[str, Any]],
    empty_message: str,
    *,
    verbose: bool,
) -> None:
    console.print(Text(heading, style="bold"))
    if items:
        console.print(_event_table(items, verbose=verbose))
    else:
        console.print(Text(f"  {empty_message}", style="cad.empty"))


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="cad.error"),
        Text(f"  {result.op}", style="cad.op"),
        Text(" — "),
        Text(msg),
        sep="",
    )

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Operation renderers ───────────────────────────────────────────────


def _render_listing(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render list_events as special/regular sections, or one combined list."""
    data = result.data
    if "items" in data:
        _render_section(console, "Events", data["items"], EMPTY_COMBINED, verbose=verbose)
    else:
        _render_section(
            console, "Special events", data.get("special", []), EMPTY_SPECIAL, verbose=verbose
        )
        console.print()
        _render_section(
            console, "Regular events", data.get("regular", []), EMPTY_REGULAR, verbose=verbose
        )
    if verbose:
        _render_meta(console, result)


def _render_next(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render next_occurrence as a status line plus fields."""
    _status_line(console, result)
    for key in ("next", "display", "anchor"):
        if key in result.data:
            _field(console, key, result.data[key])
    if verbose:
        _field(console, "cadence", result.data.get("cadence", {}))
        _render_meta(console, result)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback: status line plus every data field."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


_OP_RENDERERS: dict[str, Callable[..., None]] = {
    "list_events": _render_listing,
    "next_occurrence": _render_next,
}
