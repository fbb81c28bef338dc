"""Tests for seeded interior-point sampling."""

from __future__ import annotations

from verial.domain.geometry import IndexedRing, point_in_ring
from verial.domain.sampling import (
    FNV_OFFSET_BASIS,
    find_interior_point,
    fnv1a32,
    xorshift32,
)

U_SHAPE = [
    (0.0, 0.0),
    (30.0, 0.0),
    (30.0, 30.0),
    (20.0, 30.0),
    (20.0, 10.0),
    (10.0, 10.0),
    (10.0, 30.0),
    (0.0, 30.0),
]


class TestFnv1a32:
    def test_empty_is_offset_basis(self) -> None:
        assert fnv1a32("") == FNV_OFFSET_BASIS

    def test_known_ascii_vectors(self) -> None:
        assert fnv1a32("a") == 0xE40C292C
        assert fnv1a32("foobar") == 0xBF9CF968

    def test_non_ascii_hashes_code_units(self) -> None:
        assert fnv1a32("Ōtāhuhu") != fnv1a32("Otahuhu")
        assert 0 <= fnv1a32("Ōtāhuhu") <= 0xFFFFFFFF


class TestXorshift32:
    def test_first_value(self) -> None:
        assert xorshift32(1)() == 270369 / 0xFFFFFFFF

    def test_zero_seed_behaves_like_one(self) -> None:
        assert xorshift32(0)() == xorshift32(1)()

    def test_deterministic_and_in_range(self) -> None:
        a = xorshift32(12345)
        b = xorshift32(12345)
        draws = [a() for _ in range(100)]
        assert draws == [b() for _ in range(100)]
        assert all(0.0 <= d <= 1.0 for d in draws)


class TestFindInteriorPoint:
    def test_point_lies_inside_concave_polygon(self) -> None:
        point = find_interior_point([IndexedRing.of(U_SHAPE)], "Crescent Bay")
        assert point is not None
        assert point_in_ring(point, U_SHAPE)

    def test_same_key_same_point(self) -> None:
        polygons = [IndexedRing.of(U_SHAPE)]
        assert find_interior_point(polygons, "Kelburn") == find_interior_point(
            polygons, "Kelburn"
        )

    def test_no_polygons(self) -> None:
        assert find_interior_point([], "anything") is None

    def test_non_finite_bbox_skipped(self) -> None:
        broken = IndexedRing.of([(0.0, 0.0), (float("inf"), 0.0), (0.0, 1.0)])
        assert find_interior_point([broken], "x") is None

    def test_zero_attempts(self) -> None:
        assert find_interior_point([IndexedRing.of(U_SHAPE)], "x", max_attempts=0) is None
