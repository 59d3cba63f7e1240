"""Rich Console factory and theme for cadencectl output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

CADENCE_THEME = Theme(
    {
        "cad.ok": "bold green",
        "cad.error": "bold red",
        "cad.warning": "bold yellow",
        "cad.op": "bold cyan",
        "cad.key": "dim",
        "cad.when": "bold blue",
        "cad.title": "bold",
        "cad.empty": "dim italic",
        "cad.kind.oneoff": "magenta",
        "cad.kind.recurring": "green",
    }
)

_KIND_STYLES: dict[str, str] = {
    "oneoff": "cad.kind.oneoff",
    "recurring": "cad.kind.recurring",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=CADENCE_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_kind(kind: str) -> str:
    """Return the Rich style name for an event kind."""
    return _KIND_STYLES.get(kind, "")
