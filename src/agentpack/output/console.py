"""Rich Console factory and theme for agentpack output.

Consoles render into a StringIO buffer, preserving the
``format_result() -> str`` contract.  In non-TTY environments (tests,
pipes) Rich disables color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

PACK_THEME = Theme(
    {
        "pack.ok": "bold green",
        "pack.error": "bold red",
        "pack.warning": "bold yellow",
        "pack.op": "bold cyan",
        "pack.key": "dim",
        "pack.target": "bold blue",
        "pack.path": "dim",
        "pack.valid": "green",
        "pack.invalid": "dim red",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes.
        width: Override terminal width (keeps test output stable).
    """
    return Console(
        file=StringIO(),
        theme=PACK_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
