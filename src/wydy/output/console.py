"""Rich Console factory and theme for wydy output.

Consoles render into a StringIO buffer so formatting stays a pure
``ServiceResult -> str`` function. Outside a terminal (tests, pipes)
Rich drops color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

WYDY_THEME = Theme(
    {
        "wydy.ok": "bold green",
        "wydy.error": "bold red",
        "wydy.warning": "bold yellow",
        "wydy.op": "bold cyan",
        "wydy.key": "dim",
        "wydy.command": "bold",
        "wydy.location.client": "magenta",
        "wydy.location.server": "blue",
        "wydy.location.both": "green",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=WYDY_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_location(location: str) -> str:
    return f"wydy.location.{location}" if location in ("client", "server", "both") else ""
