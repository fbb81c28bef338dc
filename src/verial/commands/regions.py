"""Command group: NZ region lookup generation."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from verial.commands._base import VerialGroup
from verial.services.regions import RegionLookupService

if TYPE_CHECKING:
    from verial.commands._context import AppContext


@click.group(
    cls=VerialGroup,
    examples="""\
  verial regions generate
  verial -v regions generate
  verial -c ./verial.toml --json regions generate""",
)
@click.pass_obj
def regions(app: AppContext) -> None:
    """Build the region-to-suburb lookup used by location filters."""


@regions.command(
    examples="""\
  verial regions generate
  VERIAL_REGIONS__OUTPUT_JSON=out/regions.json verial regions generate"""
)
@click.pass_obj
def generate(app: AppContext) -> None:
    """Assign LINZ suburbs/localities to StatsNZ regions and write the JSON.

    Input and output paths come from the [regions] config section and
    resolve relative to the project root.
    """
    app.emit(RegionLookupService(app.settings).generate())
