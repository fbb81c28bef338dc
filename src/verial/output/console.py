"""Rich Console factory and theme for verial output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract. In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

VERIAL_THEME = Theme(
    {
        "verial.ok": "bold green",
        "verial.error": "bold red",
        "verial.warning": "bold yellow",
        "verial.op": "bold cyan",
        "verial.key": "dim",
        "verial.id": "bold blue",
        "verial.path": "dim",
        "verial.title": "bold",
        "verial.money": "green",
        "verial.score": "magenta",
        "verial.tier.elite": "bold magenta",
        "verial.tier.pro": "cyan",
    }
)

_TIER_STYLES: dict[int, str] = {
    2: "verial.tier.elite",
    1: "verial.tier.pro",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=VERIAL_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_tier(tier: int) -> str:
    """Return the Rich style name for a listing plan tier."""
    return _TIER_STYLES.get(tier, "")


def format_cents(cents: int) -> str:
    """``12345`` -> ``$123.45``."""
    sign = "-" if cents < 0 else ""
    dollars, rem = divmod(abs(cents), 100)
    return f"{sign}${dollars:,}.{rem:02d}"
