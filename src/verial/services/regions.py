"""RegionLookupService: build the region -> suburbs lookup from open data.

Pipeline: LOAD REGIONS -> ASSIGN SUBURBS -> WRITE -> RESPOND

Region polygons (StatsNZ regional councils) arrive in NZTM2000 and are
used as-is. Suburb and locality polygons (LINZ) arrive in WGS84 and have
their outer rings projected to NZTM2000 before any containment test.
Each suburb is assigned by, in order: the area-weighted centroid of its
outer rings, a seeded interior sample, the forced-assignment table.
Anything left over is reported, never guessed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog

from verial.config.models import RegionsConfig
from verial.domain.geometry import IndexedRing, weighted_centroid
from verial.domain.regions import (
    REGION_KEYS,
    REGION_ORDER,
    RegionDataError,
    RegionShape,
    locate,
    name_sort_key,
    normalize_region_name,
    outer_rings,
    sort_names,
)
from verial.domain.sampling import find_interior_point
from verial.domain.wkt import Ring, parse_wkt_polygons
from verial.infrastructure.csv_source import CsvFormatError, cell, open_csv
from verial.infrastructure.filesystem import relative_posix, write_json
from verial.infrastructure.projection import ProjectionError, Projector
from verial.services._helpers import now_iso
from verial.services.base import BaseService
from verial.services.result import ServiceError, ServiceResult
from verial.services.telemetry import trace_span, traced

log = structlog.get_logger(__name__)

WKT_COLUMN = "WKT"
NAME_COLUMN = "name"
TYPE_COLUMN = "type"

# Unassigned names echoed as individual warnings.
MAX_LISTED_UNASSIGNED = 20


@dataclass
class AssignmentRun:
    """Counters and results accumulated while assigning suburbs."""

    suburbs: dict[str, set[str]] = field(default_factory=lambda: {k: set() for k in REGION_ORDER})
    processed: int = 0
    included: int = 0
    skipped_by_type: int = 0
    skipped_invalid: int = 0
    by_centroid: int = 0
    by_interior: int = 0
    by_forced: int = 0
    unassigned: list[tuple[str, str]] = field(default_factory=list)

    def stats(self) -> dict[str, int]:
        return {
            "linzRowsProcessed": self.processed,
            "linzRowsIncluded": self.included,
            "linzRowsSkippedByType": self.skipped_by_type,
            "unassignedNamesCount": len(self.unassigned),
        }


def _describe(name: str, kind: str) -> str:
    return f"{name} ({kind})" if kind else name


class RegionLookupService(BaseService):
    """Generates ``NZ_REGIONS_TO_SUBURBS`` from the configured CSV exports."""

    @traced
    def generate(self) -> ServiceResult:
        op = "generate_regions"
        cfg = self._settings.regions
        suburbs_path = self._settings.resolve_path(cfg.suburbs_csv)
        regions_path = self._settings.resolve_path(cfg.regions_csv)
        output_path = self._settings.resolve_path(cfg.output_json)

        for label, path in (("suburbs", suburbs_path), ("regions", regions_path)):
            if not path.is_file():
                return ServiceResult(
                    ok=False,
                    op=op,
                    error=ServiceError(
                        code="MISSING_INPUT",
                        message=f"Missing {label} CSV at {path}",
                        detail={"path": str(path)},
                    ),
                )

        try:
            projector = Projector(cfg.source_crs, cfg.target_crs)
        except ProjectionError as exc:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(code="INVALID_INPUT", message=str(exc)),
            )

        try:
            with trace_span("load_regions") as span:
                regions = self._load_regions(regions_path, cfg)
                if span:
                    span.annotate("regions", len(regions))
            with trace_span("assign_suburbs") as span:
                run = self._assign_suburbs(suburbs_path, regions, projector, cfg)
                if span:
                    span.annotate("rows", run.processed)
        except RegionDataError as exc:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code="MISSING_COLUMNS",
                    message=str(exc),
                    detail={"source": exc.source, "missing": exc.missing_columns},
                ),
            )
        except CsvFormatError as exc:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code="PARSE_ERROR",
                    message=str(exc),
                    detail={"path": str(exc.path), "line": exc.line, "reason": exc.reason},
                ),
            )

        root = self._settings.project_root
        lookup = {key: sort_names(run.suburbs[key]) for key in REGION_ORDER}
        document: dict[str, Any] = {
            "generatedAt": now_iso(),
            "sources": {
                "linzCsv": relative_posix(suburbs_path, root),
                "statsNzCsv": relative_posix(regions_path, root),
                "licenseNote": cfg.license_note,
            },
            "NZ_REGIONS_TO_SUBURBS": lookup,
            "stats": run.stats(),
        }

        try:
            write_json(output_path, document)
        except OSError as exc:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code="WRITE_FAILED",
                    message=f"Cannot write {output_path}: {exc}",
                    detail={"path": str(output_path)},
                ),
            )
        log.info("regions.written", path=str(output_path), regions=len(regions))

        unassigned = sorted(run.unassigned, key=lambda item: name_sort_key(item[0]))
        warnings: list[str] = []
        if unassigned:
            warnings.append(
                f"{len(unassigned)} names could not be assigned to a region (kept out)"
            )
            warnings.extend(
                f"Unassigned: {_describe(name, kind)}"
                for name, kind in unassigned[:MAX_LISTED_UNASSIGNED]
            )
        missing_regions = [key for key in REGION_ORDER if key not in {r.key for r in regions}]
        if missing_regions:
            warnings.append(f"No polygons loaded for: {', '.join(missing_regions)}")

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "output": relative_posix(output_path, root),
                "regionsLoaded": [r.key for r in regions],
                "counts": {key: len(names) for key, names in lookup.items()},
                "stats": run.stats(),
                "rowsSkippedInvalid": run.skipped_invalid,
                "assignedBy": {
                    "centroid": run.by_centroid,
                    "interior": run.by_interior,
                    "forced": run.by_forced,
                },
                "unassigned": [{"name": name, "type": kind} for name, kind in unassigned],
            },
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    def _load_regions(self, path: Path, cfg: RegionsConfig) -> list[RegionShape]:
        """Load region polygons; the first row for each region key wins."""
        by_key: dict[str, RegionShape] = {}
        duplicates = 0
        with open_csv(path) as table:
            missing = table.missing(WKT_COLUMN, cfg.region_name_column)
            if missing:
                raise RegionDataError(path.name, missing)
            index = table.header_index
            wkt_idx = index[WKT_COLUMN]
            name_idx = index[cfg.region_name_column]

            for record in table.rows:
                key = normalize_region_name(cell(record, name_idx))
                if key is None:
                    continue
                rings = outer_rings(parse_wkt_polygons(cell(record, wkt_idx)))
                if not rings:
                    continue
                if key in by_key:
                    duplicates += 1
                    continue
                by_key[key] = RegionShape(key=key, polygons=[IndexedRing.of(r) for r in rings])

        log.info(
            "regions.loaded",
            count=len(by_key),
            keys=sorted(by_key),
            duplicates=duplicates,
        )
        return list(by_key.values())

    def _assign_suburbs(
        self,
        path: Path,
        regions: list[RegionShape],
        projector: Projector,
        cfg: RegionsConfig,
    ) -> AssignmentRun:
        run = AssignmentRun()
        included_types = set(cfg.included_types)

        with open_csv(path) as table:
            missing = table.missing(WKT_COLUMN, NAME_COLUMN)
            if missing:
                raise RegionDataError(path.name, missing)
            index = table.header_index
            wkt_idx = index[WKT_COLUMN]
            name_idx = index[NAME_COLUMN]
            type_idx = index.get(TYPE_COLUMN)

            for record in table.rows:
                run.processed += 1
                name = cell(record, name_idx)
                if not name:
                    run.skipped_invalid += 1
                    continue

                kind = cell(record, type_idx)
                if kind and kind not in included_types:
                    run.skipped_by_type += 1
                    continue
                run.included += 1

                rings = outer_rings(parse_wkt_polygons(cell(record, wkt_idx)))
                if not rings:
                    run.skipped_invalid += 1
                    continue
                projected = [projector.project_ring(r) for r in rings]

                key = self._match(name, kind, projected, regions, cfg, run)
                if key is None:
                    run.unassigned.append((name, kind))
                    continue
                run.suburbs[key].add(name)

        log.info(
            "suburbs.assigned",
            processed=run.processed,
            included=run.included,
            centroid=run.by_centroid,
            interior=run.by_interior,
            forced=run.by_forced,
            unassigned=len(run.unassigned),
        )
        return run

    @staticmethod
    def _match(
        name: str,
        kind: str,
        projected: list[Ring],
        regions: list[RegionShape],
        cfg: RegionsConfig,
        run: AssignmentRun,
    ) -> str | None:
        centroid = weighted_centroid(projected)
        if centroid is not None:
            key = locate(centroid, regions)
            if key is not None:
                run.by_centroid += 1
                return key

        indexed = [IndexedRing.of(r) for r in projected]
        interior = find_interior_point(indexed, f"{name}|{kind}", cfg.max_attempts)
        if interior is not None:
            key = locate(interior, regions)
            if key is not None:
                run.by_interior += 1
                return key

        forced = cfg.forced_assignments.get(name)
        if forced in REGION_KEYS:
            log.debug("suburb.forced", name=name, region=forced)
            run.by_forced += 1
            return forced
        return None
