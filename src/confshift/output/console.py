"""Rich Console factory and theme for confshift output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

CONFSHIFT_THEME = Theme(
    {
        "cs.ok": "bold green",
        "cs.error": "bold red",
        "cs.warning": "bold yellow",
        "cs.op": "bold cyan",
        "cs.key": "dim",
        "cs.format": "bold blue",
        "cs.path": "dim",
        "cs.service.mysql": "green",
        "cs.service.redis": "red",
    }
)

_SERVICE_STYLES: dict[str, str] = {
    "mysql": "cs.service.mysql",
    "redis": "cs.service.redis",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=CONFSHIFT_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_service(kind: str) -> str:
    """Return the Rich style name for a detected Compose service kind."""
    return _SERVICE_STYLES.get(kind, "")
