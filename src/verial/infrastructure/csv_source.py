"""Streaming reader for large CSV exports with WKT geometry columns.

WKT cells routinely run to megabytes and span many lines inside quotes,
so the reader raises the csv field limit and streams rows lazily.
Quoting errors (including an unterminated quote at end of file) surface
as :class:`CsvFormatError` rather than a silently truncated row.
"""

from __future__ import annotations

import csv
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

# Large enough for national-scale MULTIPOLYGON cells, small enough for a C long.
FIELD_SIZE_LIMIT = 2**31 - 1


class CsvFormatError(ValueError):
    """Raised when a CSV file cannot be parsed."""

    def __init__(self, path: Path, reason: str, line: int | None = None) -> None:
        self.path = path
        self.reason = reason
        self.line = line
        where = f"{path}:{line}" if line is not None else str(path)
        super().__init__(f"{where}: {reason}")


def normalize_header(value: str) -> str:
    return value.replace("\ufeff", "").strip()


@dataclass
class CsvTable:
    """Header row plus a lazy iterator over the remaining records.

    Blank lines after the header come through as empty records.
    """

    path: Path
    headers: list[str]
    rows: Iterator[list[str]]

    @property
    def header_index(self) -> dict[str, int]:
        # First occurrence wins for duplicated headers.
        index: dict[str, int] = {}
        for i, header in enumerate(self.headers):
            index.setdefault(header, i)
        return index

    def missing(self, *required: str) -> list[str]:
        """Required column names absent from the header row."""
        index = self.header_index
        return [name for name in required if name not in index]


def _records(reader: Iterator[list[str]], path: Path) -> Iterator[list[str]]:
    try:
        yield from reader
    except (csv.Error, UnicodeDecodeError) as exc:
        raise CsvFormatError(path, str(exc), getattr(reader, "line_num", None)) from exc


@contextmanager
def open_csv(path: Path) -> Iterator[CsvTable]:
    """Open *path* and yield a :class:`CsvTable`.

    Handles a UTF-8 BOM, CRLF or LF line endings, quoted fields with
    embedded newlines and doubled quotes.

    Raises:
        CsvFormatError: If the file has no header row or is malformed.
    """
    csv.field_size_limit(FIELD_SIZE_LIMIT)
    with path.open(encoding="utf-8-sig", newline="") as fh:
        reader = csv.reader(fh, strict=True)
        records = _records(reader, path)
        raw_headers = next((r for r in records if r), None)
        if raw_headers is None:
            raise CsvFormatError(path, "missing header row")
        yield CsvTable(
            path=path,
            headers=[normalize_header(h) for h in raw_headers],
            rows=records,
        )


def cell(record: list[str], index: int | None) -> str:
    """Trimmed cell value, or ``""`` for a missing column or short row."""
    if index is None or index >= len(record):
        return ""
    return record[index].strip()
