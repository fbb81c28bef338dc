"""Tests for region name folding and lookup."""

from __future__ import annotations

import pytest

from verial.domain.geometry import IndexedRing
from verial.domain.regions import (
    REGION_KEYS,
    REGION_ORDER,
    RegionDataError,
    RegionShape,
    locate,
    normalize_region_name,
    normalize_text,
    outer_rings,
    sort_names,
)
from verial.domain.wkt import Polygon


def _square(x0: float, y0: float, size: float) -> IndexedRing:
    return IndexedRing.of([(x0, y0), (x0 + size, y0), (x0 + size, y0 + size), (x0, y0 + size)])


class TestRegionOrder:
    def test_sixteen_unique_keys(self) -> None:
        assert len(REGION_ORDER) == 16
        assert len(REGION_KEYS) == 16
        assert REGION_ORDER[0] == "Auckland"


class TestNormalizeText:
    def test_bom_apostrophe_whitespace(self) -> None:
        assert normalize_text("\ufeff  Hawke\u2019s   Bay ") == "Hawke's Bay"

    def test_none(self) -> None:
        assert normalize_text(None) == ""


class TestNormalizeRegionName:
    @pytest.mark.parametrize(
        ("raw", "key"),
        [
            ("Auckland Region", "Auckland"),
            ("Auckland", "Auckland"),
            ("West Coast Region", "Westland"),
            ("West Coast", "Westland"),
            ("Manawatū-Whanganui Region", "Manawatu"),
            ("Manawatu-Whanganui", "Manawatu"),
            ("Hawke\u2019s Bay Region", "Hawke's Bay"),
            ("\ufeffOtago", "Otago"),
            ("  Bay   of  Plenty  region", "Bay of Plenty"),
        ],
    )
    def test_known_spellings(self, raw: str, key: str) -> None:
        assert normalize_region_name(raw) == key

    @pytest.mark.parametrize("raw", ["Area Outside Region", "Atlantis", "", "   ", None])
    def test_unknown(self, raw: str | None) -> None:
        assert normalize_region_name(raw) is None


class TestSortNames:
    def test_accent_and_case_insensitive(self) -> None:
        names = ["Otara", "Ōtāhuhu", "avondale", "Avondale", "Otara"]
        assert sort_names(names) == ["Avondale", "avondale", "Ōtāhuhu", "Otara"]

    def test_accepts_set(self) -> None:
        assert sort_names({"b", "a"}) == ["a", "b"]


class TestRegionDataError:
    def test_message(self) -> None:
        err = RegionDataError("regions.csv", ["WKT", "REGC2023_V1_00_NAME"])
        assert err.missing_columns == ["WKT", "REGC2023_V1_00_NAME"]
        assert str(err) == "regions.csv is missing required columns: WKT, REGC2023_V1_00_NAME"


class TestOuterRings:
    def test_takes_first_ring(self) -> None:
        outer = [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0)]
        hole = [(0.2, 0.2), (0.3, 0.2), (0.3, 0.3)]
        assert outer_rings([Polygon(rings=[outer, hole]), Polygon(rings=[])]) == [outer]


class TestLocate:
    def test_first_containing_region(self) -> None:
        regions = [
            RegionShape("Auckland", [_square(0, 0, 10)]),
            RegionShape("Waikato", [_square(10, 0, 10), _square(100, 100, 5)]),
        ]
        assert locate((5, 5), regions) == "Auckland"
        assert locate((15, 5), regions) == "Waikato"
        assert locate((102, 102), regions) == "Waikato"
        assert locate((50, 50), regions) is None
