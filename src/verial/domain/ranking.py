"""Ordering of service listings for the "most relevant" sort.

Ordering is lexicographic: plan tier first, relevance score second.
A tier is only granted to verified providers whose subscription is
active or trialing; any other combination is tier 0. Within a tier the
higher relevance score wins, and fully equal entries keep their input
order (the sort is stable).
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

ACTIVE_SUBSCRIPTION_STATUSES = frozenset({"active", "trialing"})

PLAN_TIERS: dict[str, int] = {
    "elite": 2,
    "pro": 1,
}


class Listing(BaseModel):
    """Listing summary as exported by the marketplace search."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: str
    title: str = ""
    description: str | None = None
    business_name: str | None = None
    handle: str | None = None
    plan: str | None = None
    stripe_subscription_status: str | None = None
    is_verified: bool = False
    avg_rating: float = 0.0
    review_count: int = 0
    favorite_count: int = 0
    trust_score: float = 0.0
    relevance_score: float | None = None


class ScoreWeights(BaseModel):
    """Tunable weights of the relevance score."""

    model_config = {"frozen": True}

    title_match_points: float = 60.0
    description_match_points: float = 40.0
    business_match_points: float = 20.0
    verified_points: float = 10.0
    rating_weight: float = 10.0
    review_weight: float = 10.0
    trust_weight: float = 0.4
    favorite_weight: float = 5.0


def _is_subscribed(status: object) -> bool:
    return isinstance(status, str) and status in ACTIVE_SUBSCRIPTION_STATUSES


def get_plan_tier(plan: object, stripe_subscription_status: object, is_verified: object) -> int:
    """Return 2 (elite), 1 (pro) or 0 for a provider.

    All three gates must pass; this is not a graduated boost.
    """
    if is_verified is not True or not _is_subscribed(stripe_subscription_status):
        return 0
    if not isinstance(plan, str):
        return 0
    return PLAN_TIERS.get(plan, 0)


def get_public_plan_badge(plan: object, stripe_subscription_status: object) -> str | None:
    """Return the ``elite``/``pro`` badge shown on a listing card, if any."""
    if not _is_subscribed(stripe_subscription_status):
        return None
    if plan in PLAN_TIERS:
        return str(plan)
    return None


def _safe(value: float) -> float:
    return value if math.isfinite(value) else 0.0


def text_match_points(listing: Listing, query: str | None, weights: ScoreWeights) -> float:
    """Points for the strongest field a case-insensitive *query* appears in."""
    needle = (query or "").strip().lower()
    if not needle:
        return 0.0
    if needle in listing.title.lower():
        return weights.title_match_points
    if needle in (listing.description or "").lower():
        return weights.description_match_points
    if needle in (listing.business_name or "").lower():
        return weights.business_match_points
    if needle in (listing.handle or "").lower():
        return weights.business_match_points
    return 0.0


def relevance_score(
    listing: Listing,
    query: str | None = None,
    weights: ScoreWeights | None = None,
) -> float:
    """Continuous quality/relevance score for *listing*.

    A ``relevance_score`` already present on the record is used as-is.
    Counts are log-scaled so a handful of outliers cannot dominate.
    """
    if listing.relevance_score is not None:
        return _safe(listing.relevance_score)

    w = weights or ScoreWeights()
    rating = min(5.0, max(0.0, _safe(listing.avg_rating)))
    reviews = max(0, listing.review_count)
    favorites = max(0, listing.favorite_count)

    score = text_match_points(listing, query, w)
    score += w.verified_points if listing.is_verified else 0.0
    score += rating * w.rating_weight
    score += math.log(reviews + 1) * w.review_weight
    score += _safe(listing.trust_score) * w.trust_weight
    score += math.log(favorites + 1) * w.favorite_weight
    return score


def rank_key(
    listing: Listing,
    query: str | None = None,
    weights: ScoreWeights | None = None,
) -> tuple[int, float]:
    """Return ``(tier, score)``; larger sorts first."""
    tier = get_plan_tier(listing.plan, listing.stripe_subscription_status, listing.is_verified)
    return tier, relevance_score(listing, query, weights)


def compare_most_relevant(
    a: Listing,
    b: Listing,
    query: str | None = None,
    weights: ScoreWeights | None = None,
) -> int:
    """Comparator for ``functools.cmp_to_key``: negative when *a* ranks first.

    Bind *query* and *weights* with :func:`functools.partial` to match a
    configured :func:`sort_most_relevant`.
    """
    key_a = rank_key(a, query, weights)
    key_b = rank_key(b, query, weights)
    if key_a == key_b:
        return 0
    return -1 if key_a > key_b else 1


def sort_most_relevant(
    listings: Iterable[Listing],
    query: str | None = None,
    weights: ScoreWeights | None = None,
) -> list[Listing]:
    """Return *listings* in "most relevant" order (stable)."""
    keyed = [(rank_key(item, query, weights), item) for item in listings]
    keyed.sort(key=lambda pair: pair[0], reverse=True)
    return [item for _, item in keyed]
