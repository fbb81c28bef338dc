"""Tests for generated-artifact file helpers."""

from __future__ import annotations

import json
from pathlib import Path

from verial.infrastructure.filesystem import read_json, relative_posix, write_json


class TestWriteJson:
    def test_creates_parents_and_trailing_newline(self, tmp_path: Path) -> None:
        path = tmp_path / "data" / "nested" / "out.json"
        write_json(path, {"b": 1, "a": [1, 2]})
        text = path.read_text(encoding="utf-8")
        assert text.endswith("}\n")
        assert text.startswith('{\n  "b": 1')
        assert json.loads(text) == {"b": 1, "a": [1, 2]}

    def test_non_ascii_preserved(self, tmp_path: Path) -> None:
        path = tmp_path / "out.json"
        write_json(path, {"name": "Ōtāhuhu"})
        assert "Ōtāhuhu" in path.read_text(encoding="utf-8")


class TestReadJson:
    def test_tolerates_bom(self, tmp_path: Path) -> None:
        path = tmp_path / "in.json"
        path.write_bytes(b'\xef\xbb\xbf[{"id": "a"}]')
        assert read_json(path) == [{"id": "a"}]


class TestRelativePosix:
    def test_inside_root(self, tmp_path: Path) -> None:
        assert relative_posix(tmp_path / "a" / "b.csv", tmp_path) == "a/b.csv"

    def test_outside_root(self, tmp_path: Path) -> None:
        other = tmp_path / "x.csv"
        root = tmp_path / "project"
        assert relative_posix(other, root) == other.resolve().as_posix()
