"""BookingService: lifecycle checks for bookings and job requests."""

from __future__ import annotations

from verial.domain.booking import (
    InvalidTransitionError,
    UnknownStatusError,
    allowed_job_transitions,
    allowed_transitions,
    assert_job_transition,
    assert_transition,
    normalize_job_status,
    normalize_status,
)
from verial.services.base import BaseService
from verial.services.result import ServiceError, ServiceResult
from verial.services.telemetry import traced


def _unknown_status(op: str, exc: UnknownStatusError) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(
            code="UNKNOWN_STATUS",
            message=str(exc),
            detail={"status": exc.status},
        ),
    )


class BookingService(BaseService):
    """Validates status changes before a caller persists them."""

    @traced
    def check_transition(self, current: str, target: str, *, job: bool = False) -> ServiceResult:
        """Validate *current* -> *target*; legacy booking aliases are accepted."""
        op = "check_transition"
        lifecycle = "job" if job else "booking"
        try:
            if job:
                assert_job_transition(current, target)
                normalized = (normalize_job_status(current), normalize_job_status(target))
            else:
                assert_transition(current, target)
                normalized = (normalize_status(current), normalize_status(target))
        except UnknownStatusError as exc:
            return _unknown_status(op, exc)
        except InvalidTransitionError as exc:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code="INVALID_TRANSITION",
                    message=str(exc),
                    detail={
                        "lifecycle": lifecycle,
                        "current": exc.current,
                        "target": exc.target,
                        "allowed": exc.allowed,
                    },
                ),
            )

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "lifecycle": lifecycle,
                "current": normalized[0],
                "target": normalized[1],
                "allowed": True,
            },
        )

    @traced
    def list_transitions(self, status: str, *, job: bool = False) -> ServiceResult:
        """List the statuses reachable from *status*."""
        op = "list_transitions"
        try:
            if job:
                current = normalize_job_status(status)
                successors = allowed_job_transitions(current)
            else:
                current = normalize_status(status)
                successors = allowed_transitions(current)
        except UnknownStatusError as exc:
            return _unknown_status(op, exc)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "lifecycle": "job" if job else "booking",
                "status": current,
                "transitions": successors,
                "terminal": not successors,
            },
        )
