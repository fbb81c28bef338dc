"""Command group: earnings, receipt totals and fee breakdowns.

All amounts are integer cents.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from verial.commands._base import VerialGroup
from verial.domain.fees import PaymentType
from verial.services.earnings import EarningsService

if TYPE_CHECKING:
    from verial.commands._context import AppContext

_EARNINGS_EXAMPLES = """\
  verial earnings calculate 10000
  verial earnings calculate 10000 --no-gst --plan elite
  verial earnings totals 15000 --refunded 5000
  verial earnings customer-fee 4500
  verial earnings job-charge 20000 --plan pro --payment-type deposit"""


@click.group(cls=VerialGroup, examples=_EARNINGS_EXAMPLES)
@click.pass_obj
def earnings(app: AppContext) -> None:
    """Compute provider earnings and customer fees (amounts in cents)."""


@earnings.command(
    examples="""\
  verial earnings calculate 10000
  verial earnings calculate 10000 --no-gst
  verial earnings calculate 10000 --fee-bps 1200
  verial --json earnings calculate 10000 --plan pro"""
)
@click.argument("amount", type=int)
@click.option("--gst/--no-gst", "charges_gst", default=True, help="Provider charges GST.")
@click.option(
    "--fee-bps",
    type=click.IntRange(0, 10000),
    default=None,
    help="Platform fee rate in basis points.",
)
@click.option("--plan", default=None, help="Provider plan; selects the plan's fee rate.")
@click.pass_obj
def calculate(
    app: AppContext,
    amount: int,
    charges_gst: bool,
    fee_bps: int | None,
    plan: str | None,
) -> None:
    """Split AMOUNT into platform fee, GST and provider net."""
    if fee_bps is not None and plan is not None:
        raise click.UsageError("--fee-bps and --plan are mutually exclusive.")
    app.emit(
        EarningsService(app.settings).calculate(
            amount,
            charges_gst=charges_gst,
            platform_fee_bps=fee_bps,
            plan=plan,
        )
    )


@earnings.command(
    examples="""\
  verial earnings totals 15000
  verial earnings totals 15000 --refunded 5000
  verial --json earnings totals 15000 --no-gst"""
)
@click.argument("price", type=int)
@click.option("--gst/--no-gst", "charges_gst", default=True, help="Price includes GST.")
@click.option("--refunded", type=int, default=0, help="Amount already refunded.")
@click.pass_obj
def totals(app: AppContext, price: int, charges_gst: bool, refunded: int) -> None:
    """Receipt totals for a booking of PRICE, net of refunds."""
    app.emit(
        EarningsService(app.settings).booking_totals(
            price,
            charges_gst=charges_gst,
            refunded_amount_in_cents=refunded,
        )
    )


@earnings.command(
    "customer-fee",
    examples="""\
  verial earnings customer-fee 1500
  verial earnings customer-fee 12000
  verial earnings customer-fee 12000 --currency aud""",
)
@click.argument("price", type=int)
@click.option("--currency", default="nzd", show_default=True, help="Checkout currency.")
@click.pass_obj
def customer_fee(app: AppContext, price: int, currency: str) -> None:
    """Customer service fee and checkout total for PRICE."""
    app.emit(EarningsService(app.settings).customer_fee(price, currency=currency))


@earnings.command(
    "job-charge",
    examples="""\
  verial earnings job-charge 20000 --plan starter --payment-type full
  verial earnings job-charge 20000 --plan pro --payment-type deposit
  verial earnings job-charge 20000 --plan pro --payment-type remainder --prior-fee 480""",
)
@click.argument("total", type=int)
@click.option("--plan", required=True, help="Provider plan (starter, pro, elite).")
@click.option(
    "--payment-type",
    required=True,
    type=click.Choice([t.value for t in PaymentType]),
    help="Which part of the job price this payment covers.",
)
@click.option("--prior-fee", type=int, default=0, help="Platform fee already collected.")
@click.pass_obj
def job_charge(app: AppContext, total: int, plan: str, payment_type: str, prior_fee: int) -> None:
    """Split one payment toward a job of TOTAL between platform and provider."""
    app.emit(
        EarningsService(app.settings).job_charge(
            total,
            plan=plan,
            payment_type=payment_type,
            prior_platform_fee_collected=prior_fee,
        )
    )
