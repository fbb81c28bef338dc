"""Deterministic interior-point sampling for awkward polygons.

Concave or crescent-shaped suburbs can have an area centroid that lies
outside the polygon itself (or in the sea). When that happens we fall
back to rejection sampling inside the polygon bounding boxes, seeded
from the feature's name so every run draws the same points.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from verial.domain.geometry import IndexedRing, point_in_polygons
from verial.domain.wkt import Point

FNV_OFFSET_BASIS = 0x811C9DC5
FNV_PRIME = 0x01000193
_U32 = 0xFFFFFFFF

DEFAULT_MAX_ATTEMPTS = 64


def fnv1a32(text: str) -> int:
    """32-bit FNV-1a over the UTF-16 code units of *text*."""
    h = FNV_OFFSET_BASIS
    encoded = text.encode("utf-16-le")
    for i in range(0, len(encoded), 2):
        h ^= encoded[i] | (encoded[i + 1] << 8)
        h = (h * FNV_PRIME) & _U32
    return h


def xorshift32(seed: int) -> Callable[[], float]:
    """Return a generator of floats in ``[0, 1]`` seeded with *seed*.

    A zero seed is replaced by 1, since xorshift would otherwise stay at 0.
    """
    state = (seed & _U32) or 1

    def next_float() -> float:
        nonlocal state
        x = state
        x ^= (x << 13) & _U32
        x ^= x >> 17
        x ^= (x << 5) & _U32
        state = x
        return x / _U32

    return next_float


def find_interior_point(
    polygons: Sequence[IndexedRing],
    seed_key: str,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> Point | None:
    """Draw up to *max_attempts* points, cycling through polygon bboxes.

    Returns the first sample that falls inside any of *polygons*, or None.
    """
    candidates = [p for p in polygons if p.bbox.is_finite]
    if not candidates:
        return None

    rand = xorshift32(fnv1a32(seed_key))
    for attempt in range(max_attempts):
        bbox = candidates[attempt % len(candidates)].bbox
        x = bbox.min_x + rand() * (bbox.max_x - bbox.min_x)
        y = bbox.min_y + rand() * (bbox.max_y - bbox.min_y)
        if point_in_polygons((x, y), candidates):
            return x, y
    return None
