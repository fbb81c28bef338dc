"""Job-quote scoring and the badges shown on a job's quote list.

Scores and badges come from one :class:`QuotePool` computed over the
same quotes, so the "best value", "fastest" and "top rated" badges can
never be derived from different numbers than the scores beside them.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

MAX_RATING = 5.0
DEFAULT_RESPONSE_HOURS = 24.0


class Quote(BaseModel):
    """A provider's quote on a job request."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: str
    provider_id: str | None = None
    amount_total: int = Field(ge=0)
    rating: float = 0.0
    response_speed_hours: float | None = None


class QuoteWeights(BaseModel):
    """Weights of the composite quote score; they should sum to 1."""

    model_config = {"frozen": True}

    rating_weight: float = 0.4
    price_weight: float = 0.2
    availability_weight: float = 0.2
    response_weight: float = 0.2
    default_response_hours: float = DEFAULT_RESPONSE_HOURS


class QuotePool(BaseModel):
    """Price and response-time bounds over a job's candidate quotes."""

    model_config = {"frozen": True}

    min_amount: int = 0
    max_amount: int = 0
    max_response_hours: float = DEFAULT_RESPONSE_HOURS

    @classmethod
    def from_quotes(
        cls,
        quotes: Sequence[Quote],
        default_response_hours: float = DEFAULT_RESPONSE_HOURS,
    ) -> QuotePool:
        if not quotes:
            return cls(max_response_hours=default_response_hours)
        amounts = [q.amount_total for q in quotes]
        hours = [_response_hours(q.response_speed_hours, default_response_hours) for q in quotes]
        return cls(min_amount=min(amounts), max_amount=max(amounts), max_response_hours=max(hours))


class RankedQuote(BaseModel):
    """A quote with its composite score and display badges."""

    model_config = {"frozen": True}

    id: str
    provider_id: str | None
    amount_total: int
    rating: float
    response_speed_hours: float | None
    score: float
    badges: list[str] = Field(default_factory=list)


def _finite(value: float | None, fallback: float) -> float:
    if value is None or not math.isfinite(value):
        return fallback
    return float(value)


def _response_hours(value: float | None, default: float) -> float:
    return max(0.0, _finite(value, default))


def _clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


def score_quote(
    rating: float,
    amount_total: float,
    min_amount: float,
    max_amount: float,
    response_speed_hours: float | None,
    max_response_hours: float,
    weights: QuoteWeights | None = None,
) -> float:
    """Composite score in ``[0, 1]``; higher is better.

    A zero-width price range gives every quote the full price component,
    and missing response speed counts as the default (24h).
    """
    w = weights or QuoteWeights()

    normalized_rating = _clamp01(_finite(rating, 0.0) / MAX_RATING)

    low = _finite(min_amount, 0.0)
    price_range = max(1.0, _finite(max_amount, low) - low)
    price_competitiveness = _clamp01(1 - (_finite(amount_total, low) - low) / price_range)

    hours = max(1.0, _response_hours(response_speed_hours, w.default_response_hours))
    horizon = max(1.0, _finite(max_response_hours, w.default_response_hours))
    availability_speed = _clamp01(1 - min(1.0, hours / horizon))
    response_speed = availability_speed

    score = (
        normalized_rating * w.rating_weight
        + price_competitiveness * w.price_weight
        + availability_speed * w.availability_weight
        + response_speed * w.response_weight
    )
    return score if math.isfinite(score) else 0.0


def rank_quotes(quotes: Sequence[Quote], weights: QuoteWeights | None = None) -> list[RankedQuote]:
    """Score every quote and assign badges, preserving input order.

    Badges: ``best_value`` (lowest amount), ``fastest`` (fewest response
    hours), ``top_rated`` (highest rating). Ties go to the earliest quote.
    """
    w = weights or QuoteWeights()
    if not quotes:
        return []

    pool = QuotePool.from_quotes(quotes, w.default_response_hours)

    def hours(q: Quote) -> float:
        return _response_hours(q.response_speed_hours, w.default_response_hours)

    best_value = min(range(len(quotes)), key=lambda i: quotes[i].amount_total)
    fastest = min(range(len(quotes)), key=lambda i: hours(quotes[i]))
    top_rated = max(range(len(quotes)), key=lambda i: (_finite(quotes[i].rating, 0.0), -i))

    ranked: list[RankedQuote] = []
    for index, quote in enumerate(quotes):
        badges: list[str] = []
        if index == best_value:
            badges.append("best_value")
        if index == fastest:
            badges.append("fastest")
        if index == top_rated:
            badges.append("top_rated")
        ranked.append(
            RankedQuote(
                id=quote.id,
                provider_id=quote.provider_id,
                amount_total=quote.amount_total,
                rating=quote.rating,
                response_speed_hours=quote.response_speed_hours,
                score=score_quote(
                    quote.rating,
                    quote.amount_total,
                    pool.min_amount,
                    pool.max_amount,
                    quote.response_speed_hours,
                    pool.max_response_hours,
                    w,
                ),
                badges=badges,
            )
        )
    return ranked
