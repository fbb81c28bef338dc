"""Tests for the Rich console factory and small formatting helpers."""

from __future__ import annotations

import pytest

from verial.output.console import create_console, format_cents, get_output, style_for_tier


class TestCreateConsole:
    def test_renders_to_buffer(self) -> None:
        console = create_console(no_color=True, width=80)
        console.print("[verial.ok]OK[/verial.ok] done")
        assert get_output(console) == "OK done\n"

    def test_default_width(self) -> None:
        assert create_console().width == 120


class TestFormatCents:
    @pytest.mark.parametrize(
        ("cents", "text"),
        [(0, "$0.00"), (5, "$0.05"), (12345, "$123.45"), (123456789, "$1,234,567.89"), (-250, "-$2.50")],
    )
    def test_format(self, cents: int, text: str) -> None:
        assert format_cents(cents) == text


class TestStyleForTier:
    def test_styles(self) -> None:
        assert style_for_tier(2) == "verial.tier.elite"
        assert style_for_tier(1) == "verial.tier.pro"
        assert style_for_tier(0) == ""
