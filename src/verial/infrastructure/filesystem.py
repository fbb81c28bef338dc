"""File output helpers for generated data artifacts."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def write_json(path: Path, payload: Any) -> None:
    """Write *payload* as 2-space indented UTF-8 JSON.

    Creates parent directories if they don't exist.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    rendered = json.dumps(payload, indent=2, ensure_ascii=False)
    path.write_text(rendered + "\n", encoding="utf-8")


def relative_posix(path: Path, root: Path) -> str:
    """*path* relative to *root* with forward slashes; absolute if outside *root*."""
    try:
        return path.resolve().relative_to(root.resolve()).as_posix()
    except ValueError:
        return path.resolve().as_posix()


def read_json(path: Path) -> Any:
    """Parse a UTF-8 JSON file (a leading BOM is tolerated).

    Raises:
        FileNotFoundError: If *path* does not exist.
        json.JSONDecodeError: If the content is not valid JSON.
    """
    return json.loads(path.read_text(encoding="utf-8-sig"))
