"""Tests for cent rounding and summary percentages."""

from decimal import Decimal

import pytest

from stubcalc.sdk.money import percent_of, round_cents


def test_round_cents_half_up():
    assert round_cents(Decimal("394.665")) == Decimal("394.67")
    assert round_cents(Decimal("3.2625")) == Decimal("3.26")


@pytest.mark.parametrize("value,whole,expected", [
    ("2.5", "100", 3),
    ("-2.5", "100", -2),
    ("-2.6", "100", -3),
    ("196.54", "225.00", 87),
    ("5", "0", 0),
])
def test_percent_of(value, whole, expected):
    assert percent_of(Decimal(value), Decimal(whole)) == expected
