"""Customer service fee and job-payment charge splits.

The customer fee is added on top of the service price at checkout; the
platform fee (see :mod:`verial.domain.earnings`) comes out of the
provider's side. Job requests can be paid as a 30% deposit plus a
remainder, and the platform fee across both parts must equal the fee on
the full price.
"""

from __future__ import annotations

import logging
from enum import StrEnum

from pydantic import BaseModel

from verial.domain.earnings import normalize_plan, platform_fee_bps_for_plan
from verial.domain.money import BPS_DENOMINATOR, apply_bps, clamp, require_cents, round_up

logger = logging.getLogger(__name__)

# Small-order flat fees (NZD): price below threshold -> fee.
SMALL_ORDER_TIERS: tuple[tuple[int, int], ...] = (
    (1000, 300),
    (2000, 500),
)

DEPOSIT_BPS = 3000


class PaymentType(StrEnum):
    """How much of a job's price a payment covers."""

    DEPOSIT = "deposit"
    REMAINDER = "remainder"
    FULL = "full"


class CustomerFeeRates(BaseModel):
    """Rates for the percentage band of the customer fee."""

    model_config = {"frozen": True}

    bps: int = 500
    flat_cents: int = 0
    min_cents: int = 100
    max_cents: int = 1500
    legacy_bps: int = 0


class PaymentBreakdown(BaseModel):
    """What the customer is charged at checkout, in cents."""

    model_config = {"frozen": True}

    currency: str
    service_price: int
    service_fee: int
    total: int


class ChargeBreakdown(BaseModel):
    """One job payment split between platform and provider, in cents."""

    model_config = {"frozen": True}

    provider_tier: str
    platform_fee_bps: int
    payment_type: str
    amount_total: int
    platform_fee_amount: int
    provider_amount: int
    total_platform_fee: int


def calculate_customer_service_fee(
    service_price_cents: int,
    currency: str = "nzd",
    rates: CustomerFeeRates | None = None,
) -> int:
    """Return the customer-facing service fee for a booking price.

    NZD prices under $10 pay $3 and under $20 pay $5; larger prices pay a
    percentage plus flat add-on, clamped to ``[min_cents, max_cents]``.
    Other currencies fall back to the legacy uncapped percentage.
    """
    r = rates or CustomerFeeRates()
    price = require_cents(service_price_cents, "service_price_cents")

    if currency.lower() != "nzd":
        logger.warning("Non-NZD currency %r; using legacy customer fee", currency)
        return round_up(price * r.legacy_bps, BPS_DENOMINATOR) + r.flat_cents

    if price > 0:
        for threshold, fee in SMALL_ORDER_TIERS:
            if price < threshold:
                return fee

    combined = apply_bps(price, r.bps) + r.flat_cents
    return clamp(combined, r.min_cents, r.max_cents)


def calculate_booking_payment_breakdown(
    service_price_cents: int,
    currency: str = "nzd",
    rates: CustomerFeeRates | None = None,
) -> PaymentBreakdown:
    """Return price, customer fee and checkout total for a booking."""
    price = require_cents(service_price_cents, "service_price_cents")
    fee = calculate_customer_service_fee(price, currency=currency, rates=rates)
    return PaymentBreakdown(
        currency=currency.lower(),
        service_price=price,
        service_fee=fee,
        total=price + fee,
    )


def calculate_charge_breakdown(
    total_price: int,
    provider_plan: object,
    payment_type: str,
    prior_platform_fee_collected: int = 0,
    plan_fee_bps: dict[str, int] | None = None,
) -> ChargeBreakdown:
    """Split one job payment into platform fee and provider amount.

    Raises:
        ValueError: On an unknown *payment_type* or invalid amounts.
    """
    total = require_cents(total_price, "total_price")
    kind = PaymentType(payment_type)
    tier = normalize_plan(provider_plan)
    bps = platform_fee_bps_for_plan(tier, plan_fee_bps)
    total_platform_fee = apply_bps(total, bps)

    if kind is PaymentType.DEPOSIT:
        amount = max(1, apply_bps(total, DEPOSIT_BPS))
        platform_fee = apply_bps(amount, bps)
    elif kind is PaymentType.REMAINDER:
        amount = max(0, total - apply_bps(total, DEPOSIT_BPS))
        collected = require_cents(prior_platform_fee_collected, "prior_platform_fee_collected")
        platform_fee = max(0, total_platform_fee - collected)
    else:
        amount = total
        platform_fee = apply_bps(amount, bps)

    return ChargeBreakdown(
        provider_tier=tier,
        platform_fee_bps=bps,
        payment_type=str(kind),
        amount_total=amount,
        platform_fee_amount=platform_fee,
        provider_amount=max(0, amount - platform_fee),
        total_platform_fee=total_platform_fee,
    )
