"""Shared pytest fixtures and test helpers for verial tests."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from verial.config.settings import VerialSettings
from verial.services.telemetry import disable_telemetry


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer ``VERIAL_*`` variables out of every test."""
    for key in list(os.environ):
        if key.startswith("VERIAL_"):
            monkeypatch.delenv(key)


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state and telemetry after each test.

    The CLI reconfigures logging on every invocation; without this the
    root handler would keep pointing at a closed CliRunner stream.
    """
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    verial = logging.getLogger("verial")
    verial_level = verial.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    verial.setLevel(verial_level)
    disable_telemetry()


@pytest.fixture
def project_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Empty project directory used as CWD, so no stray verial.toml is found."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def settings(project_root: Path) -> VerialSettings:
    """Default settings rooted at the temporary project directory."""
    return VerialSettings.from_cli(project_root=project_root)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def write_json_file(path: Path, payload: Any) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def square(x0: float, y0: float, size: float) -> str:
    """WKT POLYGON for an axis-aligned square."""
    x1, y1 = x0 + size, y0 + size
    return f"POLYGON (({x0} {y0}, {x1} {y0}, {x1} {y1}, {x0} {y1}, {x0} {y0}))"


def csv_quote(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def write_csv(path: Path, headers: list[str], rows: list[list[str]]) -> Path:
    """Write a CSV with every field quoted (WKT cells contain commas)."""
    lines = [",".join(csv_quote(h) for h in headers)]
    lines.extend(",".join(csv_quote(c) for c in row) for row in rows)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\r\n".join(lines) + "\r\n", encoding="utf-8")
    return path
