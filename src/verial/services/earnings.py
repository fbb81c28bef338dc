"""EarningsService: payment splits, receipt totals and customer fees.

Rates come from the ``[fees]`` and ``[customer_fee]`` config sections.
Bad amounts are reported as ``INVALID_AMOUNT``, unknown enum values as
``INVALID_INPUT``; nothing here raises for user input.
"""

from __future__ import annotations

from verial.domain.earnings import (
    calculate_booking_totals,
    calculate_earnings,
    platform_fee_bps_for_plan,
)
from verial.domain.fees import (
    CustomerFeeRates,
    PaymentType,
    calculate_booking_payment_breakdown,
    calculate_charge_breakdown,
)
from verial.services.base import BaseService
from verial.services.result import ServiceError, ServiceResult
from verial.services.telemetry import traced


def _invalid_amount(op: str, exc: ValueError) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code="INVALID_AMOUNT", message=str(exc)),
    )


class EarningsService(BaseService):
    """Money calculations over integer cents."""

    @traced
    def calculate(
        self,
        amount_in_cents: int,
        *,
        charges_gst: bool = True,
        platform_fee_bps: int | None = None,
        plan: str | None = None,
    ) -> ServiceResult:
        """Split a booking payment into platform fee, GST and provider net.

        An explicit *platform_fee_bps* wins over *plan*; with neither, the
        configured default platform fee applies.
        """
        op = "calculate_earnings"
        fees = self._settings.fees
        if platform_fee_bps is None:
            platform_fee_bps = (
                platform_fee_bps_for_plan(plan, fees.plan_fee_bps)
                if plan is not None
                else fees.platform_fee_bps
            )

        try:
            breakdown = calculate_earnings(
                amount_in_cents,
                charges_gst,
                platform_fee_bps=platform_fee_bps,
                gst_bps=fees.gst_bps,
            )
        except ValueError as exc:
            return _invalid_amount(op, exc)

        data = breakdown.model_dump()
        if plan is not None:
            data["plan"] = plan
        return ServiceResult(ok=True, op=op, data=data)

    @traced
    def booking_totals(
        self,
        price_in_cents: int,
        *,
        charges_gst: bool = True,
        refunded_amount_in_cents: int = 0,
    ) -> ServiceResult:
        """Receipt totals for a booking, net of refunds."""
        op = "booking_totals"
        warnings: list[str] = []
        try:
            totals = calculate_booking_totals(
                price_in_cents,
                charges_gst,
                refunded_amount_in_cents,
                gst_bps=self._settings.fees.gst_bps,
            )
        except ValueError as exc:
            return _invalid_amount(op, exc)

        if totals.refunded_amount < refunded_amount_in_cents:
            warnings.append(
                f"Refund of {refunded_amount_in_cents} exceeds price; clamped to {totals.price}"
            )
        return ServiceResult(ok=True, op=op, data=totals.model_dump(), warnings=warnings)

    @traced
    def customer_fee(self, price_in_cents: int, *, currency: str = "nzd") -> ServiceResult:
        """Customer-facing service fee and checkout total."""
        op = "customer_fee"
        cfg = self._settings.customer_fee
        rates = CustomerFeeRates(
            bps=cfg.bps,
            flat_cents=cfg.flat_cents,
            min_cents=cfg.min_cents,
            max_cents=cfg.max_cents,
            legacy_bps=cfg.legacy_bps,
        )
        warnings: list[str] = []
        try:
            breakdown = calculate_booking_payment_breakdown(
                price_in_cents, currency=currency, rates=rates
            )
        except ValueError as exc:
            return _invalid_amount(op, exc)

        if breakdown.currency != "nzd":
            warnings.append(f"Currency {breakdown.currency!r} uses the legacy customer fee")
        return ServiceResult(ok=True, op=op, data=breakdown.model_dump(), warnings=warnings)

    @traced
    def job_charge(
        self,
        total_price: int,
        *,
        plan: str,
        payment_type: str,
        prior_platform_fee_collected: int = 0,
    ) -> ServiceResult:
        """Platform/provider split of one job payment (deposit, remainder or full)."""
        op = "job_charge"
        if payment_type not in {t.value for t in PaymentType}:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code="INVALID_INPUT",
                    message=f"Unknown payment type: {payment_type!r}",
                    detail={"allowed": [t.value for t in PaymentType]},
                ),
            )

        try:
            breakdown = calculate_charge_breakdown(
                total_price,
                plan,
                payment_type,
                prior_platform_fee_collected,
                plan_fee_bps=self._settings.fees.plan_fee_bps,
            )
        except ValueError as exc:
            return _invalid_amount(op, exc)
        return ServiceResult(ok=True, op=op, data=breakdown.model_dump())
