"""Command group: booking and job-request lifecycle checks."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from verial.commands._base import VerialGroup
from verial.services.booking import BookingService

if TYPE_CHECKING:
    from verial.commands._context import AppContext

_BOOKING_EXAMPLES = """\
  verial booking check pending accepted
  verial booking check confirmed paid
  verial booking check open assigned --job
  verial booking transitions paid
  verial --json booking transitions in_progress --job"""


@click.group(cls=VerialGroup, examples=_BOOKING_EXAMPLES)
@click.pass_obj
def booking(app: AppContext) -> None:
    """Validate booking and job-request status changes."""


@booking.command(
    examples="""\
  verial booking check pending accepted
  verial booking check pending paid
  verial --json booking check assigned in_progress --job"""
)
@click.argument("current")
@click.argument("target")
@click.option("--job", is_flag=True, help="Use the job-request lifecycle.")
@click.pass_obj
def check(app: AppContext, current: str, target: str, job: bool) -> None:
    """Check whether CURRENT may move to TARGET (exit 1 if not)."""
    app.emit(BookingService(app.settings).check_transition(current, target, job=job))


@booking.command(
    examples="""\
  verial booking transitions pending
  verial booking transitions completed_by_provider
  verial -q booking transitions open --job"""
)
@click.argument("status")
@click.option("--job", is_flag=True, help="Use the job-request lifecycle.")
@click.pass_obj
def transitions(app: AppContext, status: str, job: bool) -> None:
    """List the statuses reachable from STATUS."""
    app.emit(BookingService(app.settings).list_transitions(status, job=job))
