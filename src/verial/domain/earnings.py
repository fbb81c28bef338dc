"""Provider earnings, GST extraction and refund arithmetic.

Listed prices are treated as GST-inclusive when the provider charges
GST: the GST component is extracted as ``gross * rate / (1 + rate)``.
GST is reported for remittance; it is not deducted from the provider's
net, which is ``gross - platform fee``.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel

from verial.domain.money import (
    BPS_DENOMINATOR,
    apply_bps,
    require_bps,
    require_cents,
    round_half_up,
)

DEFAULT_PLATFORM_FEE_BPS = 1000
DEFAULT_GST_BPS = 1500


class ProviderPlan(StrEnum):
    """Provider subscription tier."""

    STARTER = "starter"
    PRO = "pro"
    ELITE = "elite"


DEFAULT_PLAN_FEE_BPS: dict[str, int] = {
    "starter": 1000,
    "pro": 800,
    "elite": 600,
}


class EarningsBreakdown(BaseModel):
    """Provider-side split of a single booking payment, in cents."""

    model_config = {"frozen": True}

    gross_amount: int
    platform_fee_amount: int
    gst_amount: int
    net_amount: int
    platform_fee_bps: int
    charges_gst: bool


class BookingTotals(BaseModel):
    """Customer-facing totals for a booking after refunds, in cents."""

    model_config = {"frozen": True}

    price: int
    gst_amount: int
    refunded_amount: int
    total_paid: int


class RefundSplit(BaseModel):
    """How a refund divides between platform fee and provider transfer."""

    model_config = {"frozen": True}

    refund_amount: int
    refunded_platform_fee: int
    refunded_provider_amount: int


def normalize_plan(plan: object) -> str:
    """Map an arbitrary plan value onto a :class:`ProviderPlan` value.

    Unknown or missing plans are billed as starter.
    """
    if isinstance(plan, str):
        value = plan.strip().lower()
        if value in {p.value for p in ProviderPlan}:
            return value
    return str(ProviderPlan.STARTER)


def platform_fee_bps_for_plan(plan: object, table: dict[str, int] | None = None) -> int:
    """Return the platform fee rate for *plan* from *table*."""
    fees = table if table is not None else DEFAULT_PLAN_FEE_BPS
    normalized = normalize_plan(plan)
    return fees.get(normalized, fees.get("starter", DEFAULT_PLATFORM_FEE_BPS))


def extract_gst(amount_in_cents: int, gst_bps: int = DEFAULT_GST_BPS) -> int:
    """Return the GST component of a GST-inclusive amount."""
    return round_half_up(amount_in_cents * gst_bps, BPS_DENOMINATOR + gst_bps)


def calculate_earnings(
    amount_in_cents: int,
    charges_gst: bool,
    platform_fee_bps: int | None = None,
    gst_bps: int = DEFAULT_GST_BPS,
) -> EarningsBreakdown:
    """Split a booking payment into platform fee, GST and provider net.

    Raises:
        ValueError: If the amount or either rate is negative, non-finite
            or fractional, or if a rate exceeds 10000 bps.
    """
    gross = require_cents(amount_in_cents, "amount_in_cents")
    fee_bps = require_bps(
        DEFAULT_PLATFORM_FEE_BPS if platform_fee_bps is None else platform_fee_bps,
        "platform_fee_bps",
    )
    gst_rate = require_bps(gst_bps, "gst_bps")

    platform_fee = apply_bps(gross, fee_bps)
    gst = extract_gst(gross, gst_rate) if charges_gst else 0

    return EarningsBreakdown(
        gross_amount=gross,
        platform_fee_amount=platform_fee,
        gst_amount=gst,
        net_amount=gross - platform_fee,
        platform_fee_bps=fee_bps,
        charges_gst=charges_gst,
    )


def calculate_booking_totals(
    price_in_cents: int,
    charges_gst: bool,
    refunded_amount_in_cents: int = 0,
    gst_bps: int = DEFAULT_GST_BPS,
) -> BookingTotals:
    """Compute receipt totals, net of any refunds.

    Refunds larger than the price are clamped so ``total_paid`` never
    goes negative.
    """
    price = require_cents(price_in_cents, "price_in_cents")
    refunded = min(require_cents(refunded_amount_in_cents, "refunded_amount_in_cents"), price)
    gst_rate = require_bps(gst_bps, "gst_bps")
    gst = extract_gst(price, gst_rate) if charges_gst else 0
    return BookingTotals(
        price=price,
        gst_amount=gst,
        refunded_amount=refunded,
        total_paid=price - refunded,
    )


def prorate_refund(refund_amount: int, charge_amount: int, application_fee: int) -> RefundSplit:
    """Prorate a (partial) refund across the platform fee and provider amount.

    The platform share is ``application_fee * refund / charge`` rounded
    half-up; the provider share is the remainder. A zero charge refunds
    no platform fee.
    """
    refund = require_cents(refund_amount, "refund_amount")
    charge = require_cents(charge_amount, "charge_amount")
    fee = require_cents(application_fee, "application_fee")

    refunded_fee = round_half_up(fee * refund, charge) if charge > 0 else 0
    refunded_fee = min(refunded_fee, refund)
    return RefundSplit(
        refund_amount=refund,
        refunded_platform_fee=refunded_fee,
        refunded_provider_amount=max(0, refund - refunded_fee),
    )
