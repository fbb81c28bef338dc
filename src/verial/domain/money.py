"""Integer-cent arithmetic helpers.

All money in the domain layer is an ``int`` number of cents. Division
is exact integer arithmetic, so rounding is true half-up rather than
binary-float or banker's rounding at any magnitude.
"""

from __future__ import annotations

import math
from numbers import Real

BPS_DENOMINATOR = 10_000

# Largest amount a signed 64-bit column can hold.
MAX_CENTS = 2**63 - 1


def require_cents(value: object, name: str) -> int:
    """Validate a non-negative integral cent amount and return it as ``int``.

    Integral floats (``100.0``) are accepted; bools, NaN, infinities,
    fractions, negatives and amounts above :data:`MAX_CENTS` raise
    :class:`ValueError`.
    """
    if isinstance(value, bool) or not isinstance(value, Real):
        msg = f"{name} must be a number of cents, got {type(value).__name__}"
        raise ValueError(msg)
    if isinstance(value, int):
        cents = value
    else:
        try:
            as_float = float(value)
        except OverflowError:
            msg = f"{name} is too large, got {value!r}"
            raise ValueError(msg) from None
        if not math.isfinite(as_float):
            msg = f"{name} must be finite, got {value!r}"
            raise ValueError(msg)
        if as_float != int(as_float):
            msg = f"{name} must be a whole number of cents, got {value!r}"
            raise ValueError(msg)
        cents = int(as_float)
    if cents < 0:
        msg = f"{name} must not be negative, got {value!r}"
        raise ValueError(msg)
    if cents > MAX_CENTS:
        msg = f"{name} must be at most {MAX_CENTS}, got {value!r}"
        raise ValueError(msg)
    return cents


def require_bps(value: object, name: str) -> int:
    """Validate a basis-point rate in ``[0, 10000]``."""
    bps = require_cents(value, name)
    if bps > BPS_DENOMINATOR:
        msg = f"{name} must be at most {BPS_DENOMINATOR}, got {value!r}"
        raise ValueError(msg)
    return bps


def round_half_up(numerator: int, denominator: int) -> int:
    """Return ``numerator / denominator`` rounded half away from zero.

    *denominator* must be positive.
    """
    quotient = (2 * abs(numerator) + denominator) // (2 * denominator)
    return -quotient if numerator < 0 else quotient


def round_up(numerator: int, denominator: int) -> int:
    """Return ``numerator / denominator`` rounded towards positive infinity."""
    return -(-numerator // denominator)


def apply_bps(amount: int, bps: int) -> int:
    """Apply a basis-point rate to *amount*, rounded half-up to the cent."""
    return round_half_up(amount * bps, BPS_DENOMINATOR)


def clamp(value: int, lower: int, upper: int) -> int:
    """Clamp *value* into ``[lower, upper]``."""
    return max(lower, min(upper, value))
