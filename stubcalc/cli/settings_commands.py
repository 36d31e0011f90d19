"""Settings CLI commands for Stub Calc.

Manages settings.json - default tax year, tax table directory, output format.
"""

import click

from stubcalc.sdk import (
    ConfigError,
    get_default_output_format,
    get_default_tax_year,
    get_settings_path,
    get_tax_rules_dir,
    load_settings,
    set_setting,
    unset_setting,
)
from stubcalc.sdk.config import KNOWN_SETTINGS


@click.group()
def settings():
    """Manage settings (settings.json).

    Available settings:
    - tax_year: default tax table year (e.g. 2024)
    - tax_rules_dir: directory of YYYY.yaml tax tables
    - default_output_format: table or json
    """
    pass


@settings.command("show")
def settings_show():
    """Show current settings and their effective values."""
    settings_path = get_settings_path()
    try:
        current = load_settings()
    except ConfigError as e:
        raise click.ClickException(str(e))

    click.echo(f"Settings file: {settings_path}")
    click.echo(f"File exists: {settings_path.exists()}")
    click.echo()

    if not current:
        click.echo("No settings configured (using defaults).")
    else:
        click.echo("Current settings:")
        for key, value in current.items():
            click.echo(f"  {key}: {value}")

    click.echo()
    click.echo("Effective values:")
    click.echo(f"  tax_year: {get_default_tax_year()}")
    click.echo(f"  tax_rules_dir: {get_tax_rules_dir()}")
    click.echo(f"  default_output_format: {get_default_output_format()}")


@settings.command("set")
@click.argument("key", type=click.Choice(KNOWN_SETTINGS))
@click.argument("value")
def settings_set(key, value):
    """Set KEY to VALUE.

    Examples:
        stub-calc settings set tax_year 2025
        stub-calc settings set default_output_format json
    """
    if key == "default_output_format" and value not in ("table", "json"):
        raise click.BadParameter(f"Invalid format '{value}'. Must be 'table' or 'json'.")
    if key == "tax_year" and (not value.isdigit() or len(value) != 4):
        raise click.BadParameter(f"Invalid year '{value}'. Must be 4 digits.")

    try:
        path = set_setting(key, value)
    except ConfigError as e:
        raise click.ClickException(str(e))
    click.echo(f"Set {key} = {value} in {path}")


@settings.command("unset")
@click.argument("key", type=click.Choice(KNOWN_SETTINGS))
def settings_unset(key):
    """Remove KEY, reverting to its default."""
    try:
        removed = unset_setting(key)
    except ConfigError as e:
        raise click.ClickException(str(e))

    if removed:
        click.echo(f"Removed {key}")
    else:
        click.echo(f"{key} was not set")
