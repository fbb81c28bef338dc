"""Tests for operation-specific Rich renderers."""

from __future__ import annotations

from verial.output.renderers import render_quiet, render_result
from verial.services.result import ServiceError, ServiceResult


def _ok(op: str, data: dict, **kwargs: object) -> ServiceResult:  # type: ignore[type-arg]
    return ServiceResult(ok=True, op=op, data=data, **kwargs)  # type: ignore[arg-type]


class TestRenderQuiet:
    def test_error(self) -> None:
        result = ServiceResult(
            ok=False, op="check_transition", error=ServiceError(code="X", message="bad move")
        )
        assert render_quiet(result) == "ERROR: check_transition: bad move"

    def test_items(self) -> None:
        result = _ok("rank_listings", {"items": [{"id": "a"}, {"id": "b"}, {"title": "no id"}]})
        assert render_quiet(result) == "a\nb"

    def test_plain_ok(self) -> None:
        assert render_quiet(_ok("calculate_earnings", {"net_amount": 9000})) == (
            "OK: calculate_earnings"
        )


class TestRenderError:
    def test_code_and_message(self) -> None:
        result = ServiceResult(
            ok=False,
            op="check_transition",
            error=ServiceError(
                code="INVALID_TRANSITION",
                message="Invalid status transition from 'pending' to 'paid'",
                detail={"allowed": ["accepted"]},
            ),
        )
        out = render_result(result)
        assert out.startswith("ERROR  check_transition [INVALID_TRANSITION]:")
        assert "pending" in out
        assert "detail" not in out
        assert "allowed: ['accepted']" in render_result(result, verbose=True)


class TestBookingRenderers:
    def test_transition(self) -> None:
        data = {"lifecycle": "booking", "current": "pending", "target": "accepted", "allowed": True}
        out = render_result(_ok("check_transition", data))
        assert "transition: pending -> accepted" in out

    def test_terminal(self) -> None:
        data = {"lifecycle": "job", "status": "closed", "transitions": [], "terminal": True}
        assert "next: (terminal)" in render_result(_ok("list_transitions", data))


class TestMoneyRenderer:
    def test_dollars_and_bps(self) -> None:
        data = {
            "gross_amount": 10000,
            "platform_fee_amount": 1000,
            "gst_amount": 1304,
            "net_amount": 9000,
            "platform_fee_bps": 1000,
            "charges_gst": True,
        }
        out = render_result(_ok("calculate_earnings", data))
        assert "gross_amount: $100.00  (10000)" in out
        assert "gst_amount: $13.04  (1304)" in out
        assert "platform_fee_bps: 1000 bps (10%)" in out
        assert "charges_gst: True" in out


class TestRankingRenderers:
    def test_listings_table(self) -> None:
        data = {
            "query": "lawn",
            "count": 1,
            "items": [
                {"rank": 1, "id": "l1", "title": "Lawns", "tier": 2, "badge": "elite", "score": 60.0}
            ],
        }
        out = render_result(_ok("rank_listings", data))
        assert "query: lawn" in out
        assert "Lawns" in out
        assert "60.0000" in out

    def test_quotes_table(self) -> None:
        item = {
            "id": "q1",
            "provider_id": "p1",
            "amount_total": 12345,
            "rating": 4.5,
            "response_speed_hours": None,
            "score": 0.8123,
            "badges": ["best_value", "top_rated"],
        }
        out = render_result(_ok("rank_quotes", {"count": 1, "items": [item], "order": ["q1"]}))
        assert "$123.45" in out
        assert "best_value, top_rated" in out

    def test_empty_quotes(self) -> None:
        out = render_result(_ok("rank_quotes", {"count": 0, "items": [], "order": []}))
        assert out == "OK  rank_quotes\n  count: 0"


class TestRegionsRenderer:
    DATA = {
        "output": "data/nz-regions.generated.json",
        "stats": {"linzRowsProcessed": 3},
        "rowsSkippedInvalid": 0,
        "counts": {"Auckland": 2, "Waikato": 1},
        "assignedBy": {"centroid": 2, "interior": 1, "forced": 0},
    }

    def test_summary(self) -> None:
        out = render_result(_ok("generate_regions", self.DATA))
        assert "output: data/nz-regions.generated.json" in out
        assert "linzRowsProcessed: 3" in out
        assert "Auckland" in out
        assert "assignedBy" not in out

    def test_verbose_shows_strategies_and_telemetry(self) -> None:
        meta = {
            "telemetry": {
                "name": "RegionLookupService.generate",
                "duration_ms": 12.5,
                "children": [
                    {"name": "load_regions", "duration_ms": 2.0, "annotations": {"regions": 16}}
                ],
            }
        }
        out = render_result(_ok("generate_regions", self.DATA, meta=meta), verbose=True)
        assert "assignedBy: centroid=2, interior=1, forced=0" in out
        assert "RegionLookupService.generate" in out
        assert "load_regions  (regions=16)" in out


class TestGenericRenderer:
    def test_unknown_op(self) -> None:
        out = render_result(_ok("something_else", {"a": 1, "b": [1, 2]}))
        assert out.startswith("OK  something_else")
        assert "b: [1,2]" in out
