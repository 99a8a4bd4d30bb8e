"""Rich Console factory and theme for poolctl output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

POOL_THEME = Theme(
    {
        "pool.ok": "bold green",
        "pool.error": "bold red",
        "pool.warning": "bold yellow",
        "pool.op": "bold cyan",
        "pool.key": "dim",
        "pool.id": "bold blue",
        "pool.address": "bold",
        "pool.tier.dtu": "green",
        "pool.tier.vcore": "magenta",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=POOL_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 160,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_sku(sku_name: str) -> str:
    """Return the Rich style for a SKU name's billing model."""
    lowered = sku_name.lower()
    if lowered.startswith(("gp_", "bc_")):
        return "pool.tier.vcore"
    if lowered:
        return "pool.tier.dtu"
    return ""
