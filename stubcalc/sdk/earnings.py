"""Gross pay from hours worked.

A pay period here is a single shift, so the 40-hour overtime threshold is
applied to that shift rather than to a weekly total.
"""

from dataclasses import dataclass
from decimal import Decimal

from .money import ZERO, round_cents

OVERTIME_THRESHOLD_HOURS = Decimal("40")
OVERTIME_MULTIPLIER = Decimal("1.5")
DOUBLE_TIME_MULTIPLIER = Decimal("2.0")


@dataclass(frozen=True)
class GrossPay:
    regular_hours: Decimal
    overtime_hours: Decimal
    regular_pay: Decimal
    overtime_pay: Decimal
    gross_pay: Decimal
    double_time_hours: Decimal = ZERO
    double_time_pay: Decimal = ZERO


def calculate_gross_pay(hours_worked: Decimal, hourly_rate: Decimal) -> GrossPay:
    """Split hours into regular and overtime and price them.

    Double-time is never earned in this model; the fields are always 0.
    """
    hours_worked = Decimal(hours_worked)
    hourly_rate = Decimal(hourly_rate)

    regular_hours = min(hours_worked, OVERTIME_THRESHOLD_HOURS)
    overtime_hours = max(ZERO, hours_worked - OVERTIME_THRESHOLD_HOURS)

    regular_pay = round_cents(regular_hours * hourly_rate)
    overtime_pay = round_cents(overtime_hours * hourly_rate * OVERTIME_MULTIPLIER)

    return GrossPay(
        regular_hours=regular_hours,
        overtime_hours=overtime_hours,
        regular_pay=regular_pay,
        overtime_pay=overtime_pay,
        gross_pay=regular_pay + overtime_pay,
    )
