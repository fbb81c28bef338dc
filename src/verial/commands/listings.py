"""Command group: service listing ranking."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from verial.commands._base import VerialGroup
from verial.services.ranking import RankingService

if TYPE_CHECKING:
    from verial.commands._context import AppContext


@click.group(
    cls=VerialGroup,
    examples="""\
  verial listings rank listings.json
  verial listings rank listings.json --query plumber
  verial -q listings rank listings.json""",
)
@click.pass_obj
def listings(app: AppContext) -> None:
    """Order service listings for marketplace search."""


@listings.command(
    examples="""\
  verial listings rank export.json
  verial --json listings rank export.json --query 'lawn mowing'"""
)
@click.argument("file", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--query", default=None, help="Search text to score against.")
@click.pass_obj
def rank(app: AppContext, file: Path, query: str | None) -> None:
    """Rank the listings in FILE (a JSON array) by "most relevant"."""
    app.emit(RankingService(app.settings).rank_listings(file, query=query))
