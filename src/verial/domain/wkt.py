"""Minimal WKT reader for POLYGON and MULTIPOLYGON geometries.

Only the coordinate rings are recovered: ``[(x, y), ...]`` per ring,
outer ring first. Z/M ordinates are ignored, rings with fewer than
three valid coordinates are dropped, and anything that is not a
(multi)polygon parses to an empty list.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

Point = tuple[float, float]
Ring = list[Point]

_RING_SPLIT = re.compile(r"\)\s*,\s*\(")
_POLYGON_SPLIT = re.compile(r"\)\)\s*,\s*\(\(")


@dataclass(frozen=True)
class Polygon:
    """Polygon as a list of rings; ``rings[0]`` is the outer boundary."""

    rings: list[Ring]

    @property
    def outer(self) -> Ring:
        return self.rings[0]


def parse_coord_pair(text: str) -> Point | None:
    """Parse ``"x y"`` (extra ordinates ignored); None if not two finite numbers."""
    parts = text.split()
    if len(parts) < 2:
        return None
    try:
        x = float(parts[0])
        y = float(parts[1])
    except ValueError:
        return None
    if not (math.isfinite(x) and math.isfinite(y)):
        return None
    return x, y


def _parse_rings(chunk: str) -> list[Ring]:
    rings: list[Ring] = []
    for ring_chunk in _RING_SPLIT.split(chunk.strip()):
        body = ring_chunk.strip().lstrip("(").rstrip(")")
        if not body:
            continue
        coords = [p for p in (parse_coord_pair(c) for c in body.split(",")) if p is not None]
        if len(coords) >= 3:
            rings.append(coords)
    return rings


def parse_wkt_polygons(wkt: str | None) -> list[Polygon]:
    """Parse a WKT POLYGON or MULTIPOLYGON into :class:`Polygon` objects."""
    text = (wkt or "").strip()
    start = text.find("(")
    if not text or start < 0:
        return []

    kind = text[:start].strip().upper()
    body = text[start:].strip()

    if kind.startswith("MULTIPOLYGON"):
        inner = body.removeprefix("(((").removesuffix(")))")
        polygons: list[Polygon] = []
        for polygon_chunk in _POLYGON_SPLIT.split(inner):
            rings = _parse_rings(polygon_chunk.strip().lstrip("(").rstrip(")"))
            if rings:
                polygons.append(Polygon(rings=rings))
        return polygons

    if kind.startswith("POLYGON"):
        rings = _parse_rings(body.removeprefix("((").removesuffix("))"))
        return [Polygon(rings=rings)] if rings else []

    return []
