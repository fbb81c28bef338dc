"""RankingService: "most relevant" ordering of exported listings."""

from __future__ import annotations

from pathlib import Path

from verial.domain.ranking import (
    Listing,
    ScoreWeights,
    get_plan_tier,
    get_public_plan_badge,
    relevance_score,
    sort_most_relevant,
)
from verial.services._helpers import load_records
from verial.services.base import BaseService
from verial.services.result import ServiceResult
from verial.services.telemetry import trace_span, traced


class RankingService(BaseService):
    """Orders listings by plan tier, then relevance score."""

    def _weights(self) -> ScoreWeights:
        return ScoreWeights.model_validate(self._settings.ranking.model_dump())

    @traced
    def rank_listings(self, path: Path, *, query: str | None = None) -> ServiceResult:
        op = "rank_listings"
        loaded = load_records(op, path, Listing, "listings")
        if isinstance(loaded, ServiceResult):
            return loaded

        weights = self._weights()
        with trace_span("sort") as span:
            ordered = sort_most_relevant(loaded, query, weights)
            if span:
                span.annotate("count", len(ordered))

        items = [
            {
                "rank": position,
                "id": listing.id,
                "title": listing.title,
                "tier": get_plan_tier(
                    listing.plan, listing.stripe_subscription_status, listing.is_verified
                ),
                "badge": get_public_plan_badge(listing.plan, listing.stripe_subscription_status),
                "score": round(relevance_score(listing, query, weights), 4),
            }
            for position, listing in enumerate(ordered, start=1)
        ]
        return ServiceResult(
            ok=True,
            op=op,
            data={"query": query, "count": len(items), "items": items},
        )
