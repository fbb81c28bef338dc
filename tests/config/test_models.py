"""Tests for config section models: defaults and validation."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from verial.config.models import (
    CustomerFeeConfig,
    FeesConfig,
    QuotesConfig,
    RankingConfig,
    RegionsConfig,
)


class TestSectionDefaults:
    def test_fees(self) -> None:
        cfg = FeesConfig()
        assert cfg.platform_fee_bps == 1000
        assert cfg.gst_bps == 1500
        assert cfg.plan_fee_bps == {"starter": 1000, "pro": 800, "elite": 600}

    def test_customer_fee(self) -> None:
        cfg = CustomerFeeConfig()
        assert cfg.min_cents == 100
        assert cfg.max_cents == 1500

    def test_ranking_and_quotes(self) -> None:
        assert RankingConfig().title_match_points == 60.0
        assert QuotesConfig().rating_weight == 0.4

    def test_regions(self) -> None:
        cfg = RegionsConfig()
        assert cfg.source_crs == "EPSG:4326"
        assert cfg.included_types == ["Suburb", "Locality"]
        assert cfg.forced_assignments == {"Panguru": "Northland"}

    def test_sparse_override(self) -> None:
        cfg = QuotesConfig.model_validate({"price_weight": 0.3})
        assert cfg.price_weight == 0.3
        assert cfg.rating_weight == 0.4


class TestFeesConfig:
    @pytest.mark.parametrize("bps", [-1, 10001])
    def test_bps_range(self, bps: int) -> None:
        with pytest.raises(ValidationError):
            FeesConfig(platform_fee_bps=bps)

    def test_frozen(self) -> None:
        cfg = FeesConfig()
        with pytest.raises(ValidationError):
            cfg.gst_bps = 0  # type: ignore[misc]
