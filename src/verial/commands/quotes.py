"""Command group: job quote scoring."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from verial.commands._base import VerialGroup
from verial.services.quotes import QuoteService

if TYPE_CHECKING:
    from verial.commands._context import AppContext


@click.group(
    cls=VerialGroup,
    examples="""\
  verial quotes rank quotes.json
  verial --json quotes rank quotes.json""",
)
@click.pass_obj
def quotes(app: AppContext) -> None:
    """Score quotes submitted on a job request."""


@quotes.command(
    examples="""\
  verial quotes rank job-quotes.json
  verial -q quotes rank job-quotes.json"""
)
@click.argument("file", type=click.Path(dir_okay=False, path_type=Path))
@click.pass_obj
def rank(app: AppContext, file: Path) -> None:
    """Score the quotes in FILE and mark best value, fastest and top rated."""
    app.emit(QuoteService(app.settings).rank_quotes(file))
