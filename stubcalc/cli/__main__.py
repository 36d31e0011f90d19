"""Stub Calc CLI - Command-line interface for paystub generation."""

import json
from pathlib import Path

import click
from rich.console import Console

from stubcalc import __version__
from stubcalc.sdk import (
    ConfigError,
    InvalidInputError,
    InvalidShiftError,
    TaxTableError,
    calculate_paystub,
    configure_logging,
    get_default_output_format,
    load_profile_file,
    load_tax_tables,
)

from .renderers.stub_renderer import render_paystub
from .settings_commands import settings as settings_group
from .tables_commands import tables as tables_group


@click.group()
@click.version_option(version=__version__, prog_name="stub-calc")
def cli():
    """Stub Calc - Paystub generation for a single shift.

    Computes gross pay, federal/state/FICA withholding, deductions,
    net pay and estimated YTD figures.

    Configuration is loaded from (in order):

    \b
    1. STUB_CALC_CONFIG_PATH environment variable
    2. ~/.config/stub-calc/settings.json (XDG default)

    Set LOG_LEVEL=DEBUG to trace each calculation step.
    """
    configure_logging()


cli.add_command(settings_group)
cli.add_command(tables_group)


# CLI option name -> profile key
_EMPLOYEE_OPTIONS = {
    "name": "name",
    "employee_id": "employee_id",
    "rate": "hourly_rate",
    "filing_status": "filing_status",
    "state": "state_code",
    "frequency": "pay_frequency",
    "ytd_gross": "ytd_gross",
}

_DEDUCTION_OPTIONS = {
    "health": "health",
    "dental": "dental",
    "k401_pct": "retirement_401k_pct",
    "hsa": "hsa",
    "parking": "parking",
    "life_insurance": "life_insurance",
    "garnishment": "garnishment",
}


def _section(value) -> dict:
    """Profile sub-section as a dict; anything but a mapping is empty."""
    return dict(value) if isinstance(value, dict) else {}


def build_inputs(profile: dict, options: dict) -> tuple:
    """Merge a profile file with command-line options.

    Options that were given override profile values. Numeric values are
    passed through as strings; the SDK normalizes them.

    Returns:
        Tuple of (employee, time_worked, pay_period) raw mappings
    """
    employee = dict(profile)
    time_worked = _section(employee.pop("time_worked", None))
    pay_period = _section(employee.pop("pay_period", None))
    deductions = _section(employee.pop("deductions", None))

    for option, key in _EMPLOYEE_OPTIONS.items():
        if options.get(option) is not None:
            employee[key] = options[option]
    for option, key in _DEDUCTION_OPTIONS.items():
        if options.get(option) is not None:
            deductions[key] = options[option]
    employee["deductions"] = deductions

    if options.get("clock_in") is not None:
        time_worked["clock_in"] = options["clock_in"]
    if options.get("clock_out") is not None:
        time_worked["clock_out"] = options["clock_out"]
    if options.get("start") is not None:
        pay_period["start"] = options["start"]
    if options.get("end") is not None:
        pay_period["end"] = options["end"]

    return employee, time_worked, pay_period


@cli.command("generate")
@click.option("--profile", "profile_path", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="Employee profile (YAML or JSON). May include time_worked and pay_period sections.")
@click.option("--name", help="Employee name")
@click.option("--employee-id", help="Employee ID")
@click.option("--rate", help="Hourly rate (default 25.00)")
@click.option("--filing-status",
              help="single, marriedJointly, marriedSeparately, headOfHousehold (default single)")
@click.option("--state", help="State code, e.g. CA (default DEFAULT)")
@click.option("--frequency", help="weekly, biweekly, semimonthly, monthly (default biweekly)")
@click.option("--ytd-gross", help="Gross earned this year before this period")
@click.option("--health", help="Pre-tax health premium")
@click.option("--dental", help="Pre-tax dental premium")
@click.option("--401k", "k401_pct", help="401(k) deferral percent of gross (10 = ten percent)")
@click.option("--hsa", help="Pre-tax HSA contribution")
@click.option("--parking", help="Post-tax parking")
@click.option("--life-insurance", help="Post-tax life insurance")
@click.option("--garnishment", help="Post-tax garnishment")
@click.option("--clock-in", help="Shift start HH:MM (default 08:00)")
@click.option("--clock-out", help="Shift end HH:MM (default 17:00); earlier than clock-in means next day")
@click.option("--start", help="Pay period start YYYY-MM-DD")
@click.option("--end", help="Pay period end YYYY-MM-DD")
@click.option("--year", help="Tax table year (default: tax_year setting)")
@click.option("--require-hours", is_flag=True, help="Fail on a zero-length shift")
@click.option("--format", "output_format", type=click.Choice(["table", "json"]),
              help="Output format (default: default_output_format setting)")
def generate(profile_path, year, require_hours, output_format, **options):
    """Generate a paystub for one shift.

    Examples:

    \b
        stub-calc generate --rate 25 --clock-in 08:00 --clock-out 17:00 \\
            --start 2024-04-01 --end 2024-04-15
        stub-calc generate --profile employee.yaml --state CA --format json
    """
    try:
        profile = load_profile_file(profile_path) if profile_path else {}
        employee, time_worked, pay_period = build_inputs(profile, options)
        tables = load_tax_tables(year)
        stub = calculate_paystub(
            employee, time_worked, pay_period, tables=tables, require_hours=require_hours,
        )
        output_format = output_format or get_default_output_format()
    except (ConfigError, InvalidInputError, InvalidShiftError, TaxTableError) as e:
        raise click.ClickException(str(e))

    if output_format == "json":
        click.echo(json.dumps(stub.to_dict(), indent=2))
    else:
        render_paystub(Console(), stub)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
