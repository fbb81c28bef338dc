"""QuoteService: scores and badges for a job's quote list."""

from __future__ import annotations

from pathlib import Path

from verial.domain.quotes import Quote, QuoteWeights, rank_quotes
from verial.services._helpers import load_records
from verial.services.base import BaseService
from verial.services.result import ServiceResult
from verial.services.telemetry import traced


class QuoteService(BaseService):
    """Ranks quotes with configurable weights."""

    @traced
    def rank_quotes(self, path: Path) -> ServiceResult:
        """Score every quote in *path*; items keep file order, ``order`` ranks them."""
        op = "rank_quotes"
        loaded = load_records(op, path, Quote, "quotes")
        if isinstance(loaded, ServiceResult):
            return loaded

        weights = QuoteWeights.model_validate(self._settings.quotes.model_dump())
        ranked = rank_quotes(loaded, weights)
        order = sorted(range(len(ranked)), key=lambda i: -ranked[i].score)

        items = [q.model_dump() for q in ranked]
        for item in items:
            item["score"] = round(item["score"], 4)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "count": len(items),
                "items": items,
                "order": [ranked[i].id for i in order],
            },
        )
