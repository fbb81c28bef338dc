"""Tests for the earnings command group."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from verial.cli import cli


def _data(result: object) -> dict:  # type: ignore[type-arg]
    return json.loads(result.stdout)["data"]  # type: ignore[attr-defined]


class TestCalculate:
    def test_json(self, cli_runner: CliRunner, project_root: Path) -> None:
        result = cli_runner.invoke(cli, ["--json", "earnings", "calculate", "10000"])
        assert result.exit_code == 0
        data = _data(result)
        assert data["gst_amount"] == 1304
        assert data["net_amount"] == 9000

    def test_human(self, cli_runner: CliRunner, project_root: Path) -> None:
        result = cli_runner.invoke(cli, ["earnings", "calculate", "10000", "--no-gst"])
        assert result.exit_code == 0
        assert "net_amount: $90.00  (9000)" in result.stdout

    def test_plan(self, cli_runner: CliRunner, project_root: Path) -> None:
        result = cli_runner.invoke(
            cli, ["--json", "earnings", "calculate", "10000", "--plan", "pro"]
        )
        assert _data(result)["platform_fee_amount"] == 800

    def test_fee_bps_and_plan_exclusive(self, cli_runner: CliRunner, project_root: Path) -> None:
        result = cli_runner.invoke(
            cli, ["earnings", "calculate", "10000", "--plan", "pro", "--fee-bps", "500"]
        )
        assert result.exit_code == 2
        assert "mutually exclusive" in result.output

    def test_negative_amount(self, cli_runner: CliRunner, project_root: Path) -> None:
        result = cli_runner.invoke(cli, ["earnings", "calculate", "--", "-5"])
        assert result.exit_code == 1
        assert "INVALID_AMOUNT" in result.stderr

    def test_oversized_amount(self, cli_runner: CliRunner, project_root: Path) -> None:
        result = cli_runner.invoke(cli, ["earnings", "calculate", "1" + "0" * 400])
        assert result.exit_code == 1
        assert result.exception is None or isinstance(result.exception, SystemExit)
        assert "INVALID_AMOUNT" in result.stderr

    def test_fee_bps_out_of_range(self, cli_runner: CliRunner, project_root: Path) -> None:
        result = cli_runner.invoke(cli, ["earnings", "calculate", "10000", "--fee-bps", "20000"])
        assert result.exit_code == 2
        assert "--fee-bps" in result.output

    def test_config_file(self, cli_runner: CliRunner, project_root: Path) -> None:
        (project_root / "verial.toml").write_text("[fees]\nplatform_fee_bps = 1500\n")
        result = cli_runner.invoke(cli, ["--json", "earnings", "calculate", "10000"])
        assert _data(result)["platform_fee_amount"] == 1500

    def test_explicit_config_flag(self, cli_runner: CliRunner, project_root: Path) -> None:
        custom = project_root / "alt.toml"
        custom.write_text("[fees]\nplatform_fee_bps = 200\n")
        result = cli_runner.invoke(
            cli, ["-c", str(custom), "--json", "earnings", "calculate", "10000"]
        )
        assert _data(result)["platform_fee_amount"] == 200


class TestTotals:
    def test_over_refund_warns_on_stderr(self, cli_runner: CliRunner, project_root: Path) -> None:
        result = cli_runner.invoke(cli, ["earnings", "totals", "15000", "--refunded", "20000"])
        assert result.exit_code == 0
        assert "WARNING:" in result.stderr
        assert "WARNING" not in result.stdout

    def test_json_keeps_warnings_in_payload(
        self, cli_runner: CliRunner, project_root: Path
    ) -> None:
        result = cli_runner.invoke(
            cli, ["--json", "earnings", "totals", "15000", "--refunded", "20000"]
        )
        payload = json.loads(result.stdout)
        assert payload["data"]["total_paid"] == 0
        assert payload["warnings"]
        assert "WARNING:" not in result.stderr


class TestCustomerFee:
    def test_small_order(self, cli_runner: CliRunner, project_root: Path) -> None:
        result = cli_runner.invoke(cli, ["--json", "earnings", "customer-fee", "1500"])
        assert _data(result) == {
            "currency": "nzd",
            "service_price": 1500,
            "service_fee": 500,
            "total": 2000,
        }


class TestJobCharge:
    def test_remainder(self, cli_runner: CliRunner, project_root: Path) -> None:
        result = cli_runner.invoke(
            cli,
            [
                "--json",
                "earnings",
                "job-charge",
                "20000",
                "--plan",
                "pro",
                "--payment-type",
                "remainder",
                "--prior-fee",
                "480",
            ],
        )
        data = _data(result)
        assert data["amount_total"] == 14000
        assert data["platform_fee_amount"] == 1120

    def test_bad_payment_type(self, cli_runner: CliRunner, project_root: Path) -> None:
        result = cli_runner.invoke(
            cli, ["earnings", "job-charge", "20000", "--plan", "pro", "--payment-type", "weekly"]
        )
        assert result.exit_code == 2

    def test_plan_required(self, cli_runner: CliRunner, project_root: Path) -> None:
        result = cli_runner.invoke(cli, ["earnings", "job-charge", "20000", "--payment-type", "full"])
        assert result.exit_code == 2
