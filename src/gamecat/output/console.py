"""Rich Console factory and theme for gamecat output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

GAMECAT_THEME = Theme(
    {
        "gc.ok": "bold green",
        "gc.error": "bold red",
        "gc.warning": "bold yellow",
        "gc.op": "bold cyan",
        "gc.key": "dim",
        "gc.path": "bold blue",
        "gc.game": "bold",
        "gc.code.lookup": "bold red",
        "gc.code.field": "yellow",
        "gc.code.rule": "magenta",
    }
)

_CODE_STYLES: dict[str, str] = {
    "UnsupportedGame": "gc.code.lookup",
    "UnsupportedType": "gc.code.lookup",
    "CrossFieldInvariantViolation": "gc.code.rule",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=GAMECAT_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_code(code: str) -> str:
    """Return the Rich style name for an issue code; field-level codes share one."""
    return _CODE_STYLES.get(code, "gc.code.field")
