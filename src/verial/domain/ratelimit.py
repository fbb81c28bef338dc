"""Fixed-window rate limiting as a pure decision function.

The function holds no state of its own: callers load the previous
:class:`WindowState` for a key (usually a user id) from a shared store,
call :func:`apply_fixed_window`, and write ``decision.state`` back with a
TTL of ``window_seconds``. That keeps the limit consistent across
processes, which an in-memory map per process cannot do.
"""

from __future__ import annotations

import math

from pydantic import BaseModel, Field


class WindowState(BaseModel):
    """Requests counted in the current window and when it resets (epoch seconds)."""

    model_config = {"frozen": True}

    count: int = Field(ge=0)
    reset_at: float


class RateLimitDecision(BaseModel):
    """Outcome of one rate-limit check."""

    model_config = {"frozen": True}

    allowed: bool
    retry_after: int = 0
    remaining: int = 0
    state: WindowState


def apply_fixed_window(
    state: WindowState | None,
    now: float,
    limit: int,
    window_seconds: float,
) -> RateLimitDecision:
    """Count one request against a fixed window.

    A missing or expired *state* opens a fresh window at *now*. Once the
    window holds *limit* requests, further requests are refused with
    ``retry_after`` set to the whole seconds left until it resets; the
    refused request is not counted.

    Raises:
        ValueError: If *limit* is negative or *window_seconds* not positive.
    """
    if limit < 0:
        msg = f"limit must not be negative, got {limit}"
        raise ValueError(msg)
    if not window_seconds > 0:
        msg = f"window_seconds must be positive, got {window_seconds}"
        raise ValueError(msg)

    if state is None or now >= state.reset_at:
        state = WindowState(count=0, reset_at=now + window_seconds)

    if state.count >= limit:
        retry_after = max(1, math.ceil(state.reset_at - now))
        return RateLimitDecision(allowed=False, retry_after=retry_after, remaining=0, state=state)

    updated = WindowState(count=state.count + 1, reset_at=state.reset_at)
    return RateLimitDecision(
        allowed=True,
        remaining=limit - updated.count,
        state=updated,
    )
