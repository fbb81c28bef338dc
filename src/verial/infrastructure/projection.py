"""Coordinate projection between geographic and planar CRSs (pyproj).

Suburb exports come in WGS84 longitude/latitude while the regional
council polygons are in NZTM2000 metres. Point-in-polygon tests are
only meaningful once both sides share the planar grid.
"""

from __future__ import annotations

import logging

from pyproj import CRS, Transformer
from pyproj.exceptions import CRSError

from verial.domain.wkt import Ring

logger = logging.getLogger(__name__)


class ProjectionError(ValueError):
    """Raised when a CRS definition cannot be used."""


class Projector:
    """Transform rings from *source_crs* to *target_crs*.

    Both arguments accept anything :meth:`pyproj.CRS.from_user_input`
    does: ``"EPSG:4326"``, a PROJ string, or WKT. Axis order is always
    ``(x, y)`` i.e. ``(lon, lat)`` on the geographic side.
    """

    def __init__(self, source_crs: str, target_crs: str) -> None:
        try:
            source = CRS.from_user_input(source_crs)
            target = CRS.from_user_input(target_crs)
        except CRSError as exc:
            msg = f"Invalid CRS definition: {exc}"
            raise ProjectionError(msg) from exc
        self._transformer = Transformer.from_crs(source, target, always_xy=True)
        logger.debug("Projector %s -> %s", source.name, target.name)

    def project_ring(self, ring: Ring) -> Ring:
        if not ring:
            return []
        xs = [x for x, _ in ring]
        ys = [y for _, y in ring]
        px, py = self._transformer.transform(xs, ys)
        return [(float(x), float(y)) for x, y in zip(px, py, strict=True)]
