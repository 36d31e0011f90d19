"""Stub Calc - payroll paystub calculation for a single shift."""

__version__ = "0.1.0"

from .sdk.paystub import calculate_paystub  # noqa: E402

__all__ = ["__version__", "calculate_paystub"]
