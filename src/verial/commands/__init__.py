"""Subcommand modules for verial.

Provides register_commands() which uses deferred imports to keep
``verial --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups on the root CLI group."""
    from verial.commands.booking import booking
    from verial.commands.earnings import earnings
    from verial.commands.listings import listings
    from verial.commands.quotes import quotes
    from verial.commands.regions import regions

    cli.add_command(booking)
    cli.add_command(earnings)
    cli.add_command(listings)
    cli.add_command(quotes)
    cli.add_command(regions)
