"""Shared service-layer helper functions."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ValidationError

from verial.infrastructure.filesystem import read_json
from verial.services.result import ServiceError, ServiceResult


def now_iso() -> str:
    """Current UTC time as ISO 8601 with millisecond precision and a ``Z`` suffix."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def load_records[M: BaseModel](
    op: str,
    path: Path,
    model: type[M],
    key: str,
) -> list[M] | ServiceResult:
    """Load a JSON array of *model* records from *path*.

    The file may hold a bare array or an object with the array under
    *key* (``{"listings": [...]}``). Returns a failure result instead of
    raising: ``MISSING_INPUT``, ``PARSE_ERROR`` or ``INVALID_INPUT``.
    """
    try:
        raw: Any = read_json(path)
    except FileNotFoundError:
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(
                code="MISSING_INPUT",
                message=f"Input file not found: {path}",
                detail={"path": str(path)},
            ),
        )
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(
                code="PARSE_ERROR",
                message=f"Invalid JSON in {path}: {exc}",
                detail={"path": str(path)},
            ),
        )

    if isinstance(raw, dict):
        raw = raw.get(key)
    if not isinstance(raw, list):
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(
                code="INVALID_INPUT",
                message=f"Expected a JSON array (or an object with {key!r}) in {path}",
                detail={"path": str(path)},
            ),
        )

    try:
        return [model.model_validate(item) for item in raw]
    except ValidationError as exc:
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(
                code="INVALID_INPUT",
                message=f"Invalid record in {path}",
                detail={"errors": exc.errors(include_url=False, include_context=False)},
            ),
        )
