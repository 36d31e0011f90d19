"""Decimal rounding helpers shared by the calculators."""

from decimal import ROUND_HALF_CEILING, ROUND_HALF_UP, Decimal

CENTS = Decimal("0.01")
ZERO = Decimal("0")


def round_cents(amount: Decimal) -> Decimal:
    """Round to cents, half up (394.665 -> 394.67)."""
    return Decimal(amount).quantize(CENTS, rounding=ROUND_HALF_UP)


def percent_of(value: Decimal, whole: Decimal) -> int:
    """Whole-number percentage of value in whole. 0 when whole is 0.

    Halves round toward +inf, so 2.5 -> 3 and -2.5 -> -2.
    """
    if whole == 0:
        return 0
    return int((Decimal(value) / Decimal(whole) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_CEILING))
