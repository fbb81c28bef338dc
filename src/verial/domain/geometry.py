"""Planar polygon math: signed area, centroid, bounding box, containment.

Coordinates must already be in a planar projection (metres); none of
this is valid on raw longitude/latitude. Holes are ignored throughout.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from verial.domain.wkt import Point, Ring


@dataclass(frozen=True)
class BBox:
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @classmethod
    def of(cls, ring: Sequence[Point]) -> BBox:
        xs = [x for x, _ in ring]
        ys = [y for _, y in ring]
        return cls(min(xs), min(ys), max(xs), max(ys))

    def contains(self, point: Point) -> bool:
        x, y = point
        return self.min_x <= x <= self.max_x and self.min_y <= y <= self.max_y

    @property
    def is_finite(self) -> bool:
        return all(math.isfinite(v) for v in (self.min_x, self.min_y, self.max_x, self.max_y))


@dataclass(frozen=True)
class IndexedRing:
    """An outer ring with its precomputed bounding box."""

    ring: Ring
    bbox: BBox

    @classmethod
    def of(cls, ring: Ring) -> IndexedRing:
        return cls(ring=ring, bbox=BBox.of(ring))


def _edges(ring: Sequence[Point]) -> Iterable[tuple[Point, Point]]:
    # (previous, current) pairs, closing the ring implicitly.
    previous = ring[-1]
    for current in ring:
        yield previous, current
        previous = current


def ring_area(ring: Sequence[Point]) -> float:
    """Signed shoelace area (positive for counter-clockwise rings)."""
    total = 0.0
    for (x1, y1), (x2, y2) in _edges(ring):
        total += x1 * y2 - x2 * y1
    return total / 2


def ring_centroid(ring: Sequence[Point]) -> Point:
    """Area centroid of *ring*; vertex average when the area is degenerate."""
    area = ring_area(ring)
    if area == 0 or not math.isfinite(area):
        n = len(ring)
        return sum(x for x, _ in ring) / n, sum(y for _, y in ring) / n

    cx = 0.0
    cy = 0.0
    for (x1, y1), (x2, y2) in _edges(ring):
        cross = x1 * y2 - x2 * y1
        cx += (x1 + x2) * cross
        cy += (y1 + y2) * cross
    return cx / (6 * area), cy / (6 * area)


def weighted_centroid(rings: Sequence[Ring]) -> Point | None:
    """Centroid of several outer rings, weighted by absolute area.

    Zero-area rings still contribute with weight 1.
    """
    total_weight = 0.0
    sum_x = 0.0
    sum_y = 0.0
    for ring in rings:
        if len(ring) < 3:
            continue
        weight = abs(ring_area(ring)) or 1.0
        cx, cy = ring_centroid(ring)
        total_weight += weight
        sum_x += cx * weight
        sum_y += cy * weight
    if total_weight == 0:
        return None
    return sum_x / total_weight, sum_y / total_weight


def point_in_ring(point: Point, ring: Sequence[Point]) -> bool:
    """Even-odd ray casting test."""
    x, y = point
    inside = False
    for (xj, yj), (xi, yi) in _edges(ring):
        if (yi > y) != (yj > y) and x < (xj - xi) * (y - yi) / (yj - yi) + xi:
            inside = not inside
    return inside


def point_in_polygons(point: Point, polygons: Iterable[IndexedRing]) -> bool:
    """True when *point* falls inside any of *polygons* (bbox pre-filtered)."""
    return any(p.bbox.contains(point) and point_in_ring(point, p.ring) for p in polygons)
