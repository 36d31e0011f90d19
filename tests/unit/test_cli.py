"""Tests for the stub-calc CLI (generate, tables, settings)."""

import json
from decimal import Decimal

import pytest
import yaml
from click.testing import CliRunner

from stubcalc.cli.__main__ import build_inputs, cli


PERIOD_ARGS = ["--start", "2024-04-01", "--end", "2024-04-14"]


@pytest.fixture
def runner():
    return CliRunner()


def make_profile(**overrides):
    """Create an employee profile dict with shift and pay period sections."""
    profile = {
        "name": "Maria Lopez",
        "employee_id": "4411",
        "hourly_rate": 50,
        "state_code": "CA",
        "ytd_gross": 10000,
        "deductions": {"health": 20, "retirement_401k_pct": 6, "parking": 10},
        "time_worked": {"clock_in": "08:00", "clock_out": "18:00"},
        "pay_period": {"start": "2024-04-01", "end": "2024-04-14"},
    }
    profile.update(overrides)
    return profile


# === BUILD INPUTS ===


class TestBuildInputs:

    def test_profile_sections_split(self):
        employee, time_worked, pay_period = build_inputs(make_profile(), {})

        assert "time_worked" not in employee
        assert "pay_period" not in employee
        assert time_worked == {"clock_in": "08:00", "clock_out": "18:00"}
        assert pay_period["start"] == "2024-04-01"
        assert employee["deductions"]["health"] == 20

    def test_options_override_profile(self):
        employee, time_worked, _ = build_inputs(
            make_profile(),
            {"rate": "60", "state": "NY", "k401_pct": "10", "clock_out": "16:00", "name": None},
        )

        assert employee["hourly_rate"] == "60"
        assert employee["state_code"] == "NY"
        assert employee["name"] == "Maria Lopez"
        assert employee["deductions"]["retirement_401k_pct"] == "10"
        assert employee["deductions"]["health"] == 20
        assert time_worked == {"clock_in": "08:00", "clock_out": "16:00"}

    def test_profile_not_modified(self):
        profile = make_profile()
        build_inputs(profile, {"health": "99"})
        assert profile["deductions"]["health"] == 20
        assert "time_worked" in profile


# === GENERATE ===


class TestGenerate:

    def test_json_defaults(self, runner):
        result = runner.invoke(cli, ["generate", "--format", "json"] + PERIOD_ARGS)

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["earnings"]["gross"] == "225.00"
        assert data["netPay"]["current"] == "196.54"
        assert data["deductions"]["taxes"]["stateIncomeTax"]["current"] == "11.25"

    def test_table_output(self, runner):
        result = runner.invoke(cli, ["generate", "--name", "Jane Roe"] + PERIOD_ARGS)

        assert result.exit_code == 0, result.output
        assert "Jane Roe" in result.output
        assert "NET PAY" in result.output
        assert "$196.54" in result.output

    def test_profile_file(self, runner, tmp_path):
        profile_path = tmp_path / "employee.yaml"
        profile_path.write_text(yaml.dump(make_profile()))

        result = runner.invoke(cli, ["generate", "--profile", str(profile_path), "--format", "json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["netPay"]["current"] == "394.73"
        assert data["payInfo"]["currentPeriod"] == 21
        assert data["deductions"]["taxes"]["sdi"]["current"] == "4.05"

    def test_hand_written_profile_with_unquoted_times(self, runner, tmp_path):
        profile_path = tmp_path / "employee.yaml"
        profile_path.write_text(
            "name: Jane Roe\n"
            "hourly_rate: 25\n"
            "time_worked:\n"
            "  clock_in: 9:30\n"
            "  clock_out: 17:00\n"
            "pay_period:\n"
            "  start: 2024-04-01\n"
            "  end: 2024-04-14\n"
        )

        result = runner.invoke(cli, ["generate", "--profile", str(profile_path), "--format", "json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["earnings"]["regular"]["hours"] == "7.50"
        assert data["earnings"]["gross"] == "187.50"
        assert data["payPeriod"]["start"] == "2024-04-01"

    def test_profile_with_scalar_deductions(self, runner, tmp_path):
        profile_path = tmp_path / "employee.yaml"
        profile_path.write_text("deductions: none\n")

        result = runner.invoke(cli, ["generate", "--profile", str(profile_path), "--format", "json"] + PERIOD_ARGS)

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["netPay"]["current"] == "196.54"

    def test_json_profile_with_override(self, runner, tmp_path):
        profile_path = tmp_path / "employee.json"
        profile_path.write_text(json.dumps(make_profile()))

        result = runner.invoke(
            cli, ["generate", "--profile", str(profile_path), "--state", "TX", "--format", "json"]
        )

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["employee"]["stateCode"] == "TX"
        assert Decimal(data["deductions"]["taxes"]["sdi"]["current"]) == 0

    def test_default_format_from_settings(self, runner, write_settings):
        write_settings({"default_output_format": "json"})

        result = runner.invoke(cli, ["generate"] + PERIOD_ARGS)

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["taxYear"] == "2024"

    def test_year_option(self, runner):
        result = runner.invoke(cli, ["generate", "--year", "2025", "--format", "json"] + PERIOD_ARGS)

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["taxYear"] == "2025"

    def test_invalid_clock_time(self, runner):
        result = runner.invoke(cli, ["generate", "--clock-in", "25:00"] + PERIOD_ARGS)

        assert result.exit_code == 1
        assert "Error" in result.output

    def test_missing_pay_period(self, runner):
        result = runner.invoke(cli, ["generate"])

        assert result.exit_code == 1
        assert "Missing pay period" in result.output

    def test_unknown_year(self, runner):
        result = runner.invoke(cli, ["generate", "--year", "1999"] + PERIOD_ARGS)

        assert result.exit_code == 1
        assert "1999" in result.output

    def test_require_hours(self, runner):
        result = runner.invoke(
            cli, ["generate", "--clock-in", "09:00", "--clock-out", "09:00", "--require-hours"] + PERIOD_ARGS
        )
        assert result.exit_code == 1

    def test_malformed_rate_uses_default(self, runner):
        result = runner.invoke(cli, ["generate", "--rate", "abc", "--format", "json"] + PERIOD_ARGS)

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["earnings"]["regular"]["rate"] == "25.00"


# === TABLES ===


class TestTables:

    def test_years(self, runner):
        result = runner.invoke(cli, ["tables", "years"])

        assert result.exit_code == 0
        assert result.output.split() == ["2025", "2024"]

    def test_show(self, runner):
        result = runner.invoke(cli, ["tables", "show", "--year", "2024", "--status", "single"])

        assert result.exit_code == 0, result.output
        assert "Tax tables 2024" in result.output
        assert "$14,600" in result.output
        assert "FICA" in result.output
        assert "marriedJointly" not in result.output

    def test_show_unknown_year(self, runner):
        result = runner.invoke(cli, ["tables", "show", "--year", "1999"])
        assert result.exit_code == 1


# === SETTINGS ===


class TestSettings:

    def test_show_defaults(self, runner):
        result = runner.invoke(cli, ["settings", "show"])

        assert result.exit_code == 0
        assert "No settings configured" in result.output
        assert "tax_year: 2024" in result.output

    def test_set_show_unset(self, runner, isolated_env):
        result = runner.invoke(cli, ["settings", "set", "tax_year", "2025"])
        assert result.exit_code == 0

        saved = json.loads((isolated_env["config_dir"] / "settings.json").read_text())
        assert saved == {"tax_year": "2025"}

        result = runner.invoke(cli, ["settings", "show"])
        assert "tax_year: 2025" in result.output

        result = runner.invoke(cli, ["settings", "unset", "tax_year"])
        assert result.exit_code == 0
        assert "Removed tax_year" in result.output

        result = runner.invoke(cli, ["settings", "unset", "tax_year"])
        assert "was not set" in result.output

    def test_set_invalid_format(self, runner):
        result = runner.invoke(cli, ["settings", "set", "default_output_format", "xml"])
        assert result.exit_code == 2

    def test_set_invalid_year(self, runner):
        result = runner.invoke(cli, ["settings", "set", "tax_year", "24"])
        assert result.exit_code == 2

    def test_set_unknown_key(self, runner):
        result = runner.invoke(cli, ["settings", "set", "color", "blue"])
        assert result.exit_code == 2

    def test_show_invalid_settings_file(self, runner, isolated_env):
        (isolated_env["config_dir"] / "settings.json").write_text("{not json")

        result = runner.invoke(cli, ["settings", "show"])
        assert result.exit_code == 1
        assert "Invalid JSON" in result.output
