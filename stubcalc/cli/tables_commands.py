"""Tax table inspection commands."""

import click
from rich import box
from rich.console import Console
from rich.table import Table

from stubcalc.sdk import FilingStatus, TaxTableError, load_tax_tables
from stubcalc.sdk.taxes import get_available_years


@click.group()
def tables():
    """Inspect the tax tables used for withholding."""
    pass


@tables.command("years")
def tables_years():
    """List available tax table years."""
    years = get_available_years()
    if not years:
        raise click.ClickException("No tax tables found")
    for year in years:
        click.echo(year)


@tables.command("show")
@click.option("--year", help="Tax table year (default: tax_year setting)")
@click.option("--status", type=click.Choice([s.value for s in FilingStatus]),
              help="Only show this filing status")
def tables_show(year, status):
    """Show brackets, standard deductions, FICA and state rates."""
    try:
        provider = load_tax_tables(year)
    except TaxTableError as e:
        raise click.ClickException(str(e))

    console = Console()
    console.print(f"[bold]Tax tables {provider.year}[/bold] [dim]{provider.source}[/dim]")

    statuses = [FilingStatus(status)] if status else list(provider.filing_statuses)
    for filing_status in statuses:
        table = Table(
            title=f"{filing_status.value} (standard deduction {_fmt(provider.standard_deduction(filing_status))})",
            box=box.ROUNDED,
        )
        table.add_column("Over", justify="right")
        table.add_column("Up To", justify="right")
        table.add_column("Rate", justify="right")
        for bracket in provider.brackets(filing_status):
            upper = _fmt(bracket.max) if bracket.max is not None else "-"
            table.add_row(_fmt(bracket.min), upper, f"{bracket.rate * 100:.1f}%")
        console.print(table)

    ss = provider.fica.social_security
    medicare = provider.fica.medicare
    fica = Table(title="FICA", box=box.ROUNDED, show_header=False)
    fica.add_column("key", style="dim")
    fica.add_column("value", justify="right")
    fica.add_row("Social Security rate", f"{ss.rate * 100:.2f}%")
    fica.add_row("Social Security wage base", _fmt(ss.wage_base))
    fica.add_row("Medicare rate", f"{medicare.rate * 100:.2f}%")
    fica.add_row("Additional Medicare rate", f"{medicare.additional_rate * 100:.2f}%")
    fica.add_row("Additional Medicare threshold", _fmt(medicare.additional_threshold))
    console.print(fica)

    states = Table(title="States", box=box.ROUNDED)
    states.add_column("State")
    states.add_column("Rate", justify="right")
    states.add_column("SDI", justify="right")
    states.add_column("SDI Wage Base", justify="right")
    for code, config in sorted(provider.states.items()):
        sdi = f"{config.sdi_rate * 100:.2f}%" if config.sdi_rate else "-"
        base = _fmt(config.sdi_wage_base) if config.sdi_wage_base else "-"
        states.add_row(code, f"{config.rate * 100:.2f}%", sdi, base)
    console.print(states)


def _fmt(amount) -> str:
    return f"${amount:,.0f}"
