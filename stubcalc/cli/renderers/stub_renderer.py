"""Rich renderer for generated paystubs.

Displays the Paystub record as-is; no amount is recalculated here.
"""

from decimal import Decimal
from typing import Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from stubcalc.sdk.schemas import Paystub

FILING_STATUS_LABELS = {
    "single": "Single",
    "marriedJointly": "Married Filing Jointly",
    "marriedSeparately": "Married Filing Separately",
    "headOfHousehold": "Head of Household",
}


def render_paystub(console: Console, stub: Paystub) -> None:
    """Render a paystub as Rich panels and tables.

    Args:
        console: Rich Console instance
        stub: Output of calculate_paystub()
    """
    _render_header(console, stub)
    _render_earnings(console, stub)
    _render_deductions(console, stub)
    _render_summary(console, stub)


def _render_header(console: Console, stub: Paystub) -> None:
    """Render employee and pay info panel."""
    employee = stub.employee
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("key", style="dim")
    table.add_column("value")

    table.add_row("Employee", f"{employee.name} (#{employee.employee_id})")
    table.add_row("Address", employee.address.replace("\n", ", "))
    table.add_row("Filing Status", FILING_STATUS_LABELS.get(employee.filing_status.value, employee.filing_status.value))
    table.add_row("State", employee.state_code)
    table.add_row(
        "Pay Period",
        f"{stub.pay_period.start:%m/%d/%Y} - {stub.pay_period.end:%m/%d/%Y}",
    )
    table.add_row(
        "Frequency",
        f"{stub.pay_info.frequency.value} (period {stub.pay_info.current_period} "
        f"of {stub.pay_info.periods_per_year}, estimated)",
    )
    table.add_row("Tax Tables", stub.tax_year)

    console.print(Panel(table, title="Paystub", border_style="dim"))


def _render_earnings(console: Console, stub: Paystub) -> None:
    earnings = stub.earnings
    table = Table(title="Earnings", box=box.ROUNDED)
    table.add_column("", style="bold", min_width=18)
    table.add_column("Hours", justify="right")
    table.add_column("Rate", justify="right")
    table.add_column("Current", justify="right", min_width=12)

    for label, line in (
        ("Regular", earnings.regular),
        ("Overtime", earnings.overtime),
        ("Double Time", earnings.double_time),
    ):
        table.add_row(label, f"{line.hours}", _fmt(line.rate), _fmt(line.amount))

    table.add_row("[bold]Gross Pay[/bold]", "", "", f"[bold]{_fmt(earnings.gross)}[/bold]")
    console.print(table)


def _render_deductions(console: Console, stub: Paystub) -> None:
    deductions = stub.deductions
    taxes = deductions.taxes

    table = Table(title="Deductions", box=box.ROUNDED)
    table.add_column("", style="bold", min_width=25)
    table.add_column("Current", justify="right", min_width=12)
    table.add_column("YTD", justify="right", min_width=12)

    table.add_row("[bold]TAXES[/bold]", "", "")
    for label, line in (
        ("Federal Income Tax", taxes.federal_income_tax),
        ("State Income Tax", taxes.state_income_tax),
        ("State Disability (SDI)", taxes.sdi),
        ("Social Security", taxes.social_security),
        ("Medicare", taxes.medicare),
        ("Additional Medicare", taxes.additional_medicare),
    ):
        table.add_row(f"  {label}", _fmt(line.current), _fmt(line.ytd))
    table.add_row("", "", "")

    table.add_row("[bold]PRETAX DEDUCTIONS[/bold]", "", "")
    pre = deductions.pre_tax.items
    for label, amount in (
        ("Health", pre.health),
        ("Dental", pre.dental),
        ("401(k)", pre.retirement_401k),
        ("HSA", pre.hsa),
    ):
        table.add_row(f"  {label}", _fmt(amount), "")
    table.add_row("  [dim]Total Pretax[/dim]", f"[dim]{_fmt(deductions.pre_tax.total)}[/dim]", "")
    table.add_row("", "", "")

    table.add_row("[bold]POST-TAX DEDUCTIONS[/bold]", "", "")
    post = deductions.post_tax.items
    for label, amount in (
        ("Parking", post.parking),
        ("Life Insurance", post.life_insurance),
        ("Garnishment", post.garnishment),
    ):
        table.add_row(f"  {label}", _fmt(amount), "")
    table.add_row("  [dim]Total Post-tax[/dim]", f"[dim]{_fmt(deductions.post_tax.total)}[/dim]", "")
    table.add_row("", "", "")

    table.add_row("[bold]TOTAL DEDUCTIONS[/bold]", _fmt(deductions.total.current), _fmt(deductions.total.ytd))
    table.add_row(
        "[bold green]NET PAY[/bold green]",
        f"[bold green]{_fmt(stub.net_pay.current)}[/bold green]",
        _fmt(stub.net_pay.ytd),
    )

    console.print(table)


def _render_summary(console: Console, stub: Paystub) -> None:
    summary = stub.summary
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("key", style="dim")
    table.add_column("amount", justify="right")
    table.add_column("pct", justify="right")

    table.add_row("Income Taxes", _fmt(summary.total_taxes), f"{summary.tax_percentage}%")
    table.add_row("Benefits", _fmt(summary.total_benefit_deductions), f"{summary.benefit_percentage}%")
    table.add_row("Net Pay", _fmt(summary.net_pay), f"{summary.net_percentage}%")
    table.add_row("YTD Gross", _fmt(stub.ytd.gross), "")

    console.print(Panel(table, title="Summary", border_style="dim"))


def _fmt(amount: Optional[Decimal]) -> str:
    """Format currency amount."""
    if amount is None:
        return "-"
    return f"${amount:,.2f}"
