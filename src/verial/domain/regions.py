"""New Zealand region names as used by the marketplace's location filter.

Region council exports spell names several ways ("Auckland Region",
"Manawatū-Whanganui", curly apostrophes). Everything is folded onto the
sixteen keys in :data:`REGION_ORDER`; ``West Coast`` is published as
``Westland`` and ``Manawatū-Whanganui`` as ``Manawatu``.
"""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Iterable
from dataclasses import dataclass

from verial.domain.geometry import IndexedRing, point_in_polygons
from verial.domain.wkt import Point, Polygon, Ring

REGION_ORDER: tuple[str, ...] = (
    "Auckland",
    "Waikato",
    "Bay of Plenty",
    "Wellington",
    "Canterbury",
    "Otago",
    "Northland",
    "Hawke's Bay",
    "Taranaki",
    "Manawatu",
    "Nelson",
    "Marlborough",
    "Tasman",
    "Southland",
    "Westland",
    "Gisborne",
)

REGION_KEYS = frozenset(REGION_ORDER)

# Source spellings that differ from the published key.
REGION_NAME_TO_KEY: dict[str, str] = {
    "West Coast": "Westland",
    "Manawatū-Whanganui": "Manawatu",
    "Manawatu-Whanganui": "Manawatu",
}

_REGION_SUFFIX = re.compile(r"\s+Region$", re.IGNORECASE)
_WHITESPACE = re.compile(r"\s+")


class RegionDataError(ValueError):
    """Raised when a region or suburb export lacks required columns."""

    def __init__(self, source: str, missing_columns: list[str]) -> None:
        self.source = source
        self.missing_columns = list(missing_columns)
        super().__init__(f"{source} is missing required columns: {', '.join(missing_columns)}")


def normalize_text(value: str | None) -> str:
    """Strip BOMs, fold curly apostrophes and collapse whitespace."""
    text = (value or "").replace("\ufeff", "").replace("\u2019", "'")
    return _WHITESPACE.sub(" ", text).strip()


def _lookup(name: str) -> str | None:
    if name in REGION_NAME_TO_KEY:
        return REGION_NAME_TO_KEY[name]
    if name in REGION_KEYS:
        return name
    return None


def normalize_region_name(value: str | None) -> str | None:
    """Map a raw region name onto a key of :data:`REGION_ORDER`.

    Returns None for blank or unknown regions (e.g. "Area Outside Region").
    """
    name = normalize_text(value)
    if not name:
        return None

    key = _lookup(name)
    if key is not None:
        return key

    stripped = _REGION_SUFFIX.sub("", name).strip()
    if stripped and stripped != name:
        return _lookup(stripped)
    return None


def name_sort_key(name: str) -> tuple[str, str]:
    """Case- and accent-insensitive sort key; the raw name breaks ties."""
    decomposed = unicodedata.normalize("NFKD", name)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), name


def sort_names(names: set[str] | list[str]) -> list[str]:
    """De-duplicate and sort place names for publication."""
    return sorted(set(names), key=name_sort_key)


@dataclass(frozen=True)
class RegionShape:
    """A region key and its outer boundary rings in planar coordinates."""

    key: str
    polygons: list[IndexedRing]


def outer_rings(polygons: Iterable[Polygon]) -> list[Ring]:
    """Outer ring of every polygon that still has one."""
    return [p.outer for p in polygons if p.rings and len(p.outer) >= 3]


def locate(point: Point, regions: Iterable[RegionShape]) -> str | None:
    """Key of the first region whose polygons contain *point*."""
    for region in regions:
        if point_in_polygons(point, region.polygons):
            return region.key
    return None
