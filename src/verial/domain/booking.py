"""Booking and job-request lifecycle guards.

Both lifecycles are fixed adjacency tables. Terminal states map to an
empty successor list, and a self-transition is never listed, so
"same state" and "not reachable from here" are rejected by the same
membership test.

INVARIANT: Status changes are validated here before any caller writes them.
"""

from __future__ import annotations

from enum import StrEnum


class BookingStatus(StrEnum):
    """Lifecycle status of a service booking."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    PAID = "paid"
    COMPLETED_BY_PROVIDER = "completed_by_provider"
    COMPLETED = "completed"
    CANCELED_CUSTOMER = "canceled_customer"
    CANCELED_PROVIDER = "canceled_provider"
    DISPUTED = "disputed"
    REFUNDED = "refunded"


class JobStatus(StrEnum):
    """Lifecycle status of a customer job request."""

    OPEN = "open"
    ASSIGNED = "assigned"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CLOSED = "closed"
    CANCELLED = "cancelled"
    EXPIRED = "expired"


# Older rows and clients still carry the pre-split status names.
LEGACY_STATUS_MAP: dict[str, str] = {
    "confirmed": "accepted",
    "canceled": "canceled_customer",
}

# --- Transition maps ---

BOOKING_TRANSITIONS: dict[str, list[str]] = {
    "pending": ["accepted", "declined", "canceled_customer"],
    "accepted": ["paid", "canceled_provider", "canceled_customer"],
    "declined": [],
    "paid": ["completed_by_provider", "completed", "disputed", "refunded"],
    "completed_by_provider": ["completed", "disputed", "refunded"],
    "completed": [],
    "canceled_customer": [],
    "canceled_provider": [],
    "disputed": ["refunded"],
    "refunded": [],
}

JOB_TRANSITIONS: dict[str, list[str]] = {
    "open": ["assigned", "cancelled", "expired"],
    "assigned": ["in_progress", "cancelled"],
    "in_progress": ["completed"],
    "completed": ["closed"],
    "closed": [],
    "cancelled": [],
    "expired": [],
}


class UnknownStatusError(ValueError):
    """Raised when a status string is not part of the lifecycle."""

    def __init__(self, status: str) -> None:
        self.status = status
        super().__init__(f"Unknown status: {status!r}")


class InvalidTransitionError(ValueError):
    """Raised when a lifecycle transition is not permitted."""

    def __init__(self, current: str, target: str, allowed: list[str]) -> None:
        self.current = current
        self.target = target
        self.allowed = list(allowed)
        shown = ", ".join(allowed) or "(none)"
        super().__init__(
            f"Invalid status transition from '{current}' to '{target}'. Allowed: {shown}"
        )


def normalize_status(status: str) -> str:
    """Map *status* (including legacy aliases) onto a booking status value."""
    value = status.strip().lower()
    value = LEGACY_STATUS_MAP.get(value, value)
    if value not in BOOKING_TRANSITIONS:
        raise UnknownStatusError(status)
    return value


def allowed_transitions(current: str) -> list[str]:
    """Return a copy of the successors allowed from *current*."""
    return list(BOOKING_TRANSITIONS[normalize_status(current)])


def can_transition(current: str, target: str) -> bool:
    """Check if a booking may move from *current* to *target*."""
    return normalize_status(target) in BOOKING_TRANSITIONS[normalize_status(current)]


def assert_transition(current: str, target: str) -> None:
    """Raise :class:`InvalidTransitionError` unless *current* -> *target* is allowed."""
    normalized_current = normalize_status(current)
    normalized_target = normalize_status(target)
    allowed = BOOKING_TRANSITIONS[normalized_current]
    if normalized_target not in allowed:
        raise InvalidTransitionError(normalized_current, normalized_target, allowed)


# --- Job requests ---


def normalize_job_status(status: str) -> str:
    """Validate a job-request status string."""
    value = status.strip().lower()
    if value not in JOB_TRANSITIONS:
        raise UnknownStatusError(status)
    return value


def allowed_job_transitions(current: str) -> list[str]:
    """Return a copy of the successors allowed from job status *current*."""
    return list(JOB_TRANSITIONS[normalize_job_status(current)])


def assert_job_transition(current: str, target: str) -> None:
    """Raise :class:`InvalidTransitionError` unless the job may move to *target*."""
    normalized_current = normalize_job_status(current)
    normalized_target = normalize_job_status(target)
    allowed = JOB_TRANSITIONS[normalized_current]
    if normalized_target not in allowed:
        raise InvalidTransitionError(normalized_current, normalized_target, allowed)
