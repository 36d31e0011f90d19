"""Pre-tax / post-tax deduction handling.

Tax treatment:
- Section 125 items (health, dental, HSA) reduce FIT, SIT and FICA wages.
- Traditional 401(k) reduces FIT and SIT wages but NOT FICA wages.
- Post-tax items (parking, life insurance, garnishment) reduce nothing.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal

from .money import ZERO, round_cents
from .schemas import ElectedDeductions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeductionBreakdown:
    health: Decimal
    dental: Decimal
    retirement_401k: Decimal
    hsa: Decimal
    parking: Decimal
    life_insurance: Decimal
    garnishment: Decimal

    @property
    def section_125_total(self) -> Decimal:
        """Pre-tax items that are also FICA-exempt."""
        return self.health + self.dental + self.hsa

    @property
    def pre_tax_total(self) -> Decimal:
        return self.section_125_total + self.retirement_401k

    @property
    def post_tax_total(self) -> Decimal:
        return self.parking + self.life_insurance + self.garnishment


@dataclass(frozen=True)
class TaxableWages:
    """Taxable wage bases for one period."""

    federal: Decimal  # FIT: gross - all pre-tax
    state: Decimal    # SIT: same base as FIT
    fica: Decimal     # SS/Medicare: gross - Section 125 only


@dataclass(frozen=True)
class DeductionResult:
    breakdown: DeductionBreakdown
    taxable_wages: TaxableWages


def calc_401k_amount(percent: Decimal, gross: Decimal) -> Decimal:
    """Resolve a 401(k) deferral percentage (10 = 10%) to a dollar amount."""
    return round_cents(Decimal(percent) / Decimal(100) * Decimal(gross))


def aggregate_deductions(elected: ElectedDeductions, gross: Decimal) -> DeductionResult:
    """Resolve elected deductions against gross pay and derive taxable wages.

    Args:
        elected: Normalized elected deductions
        gross: Gross pay for the period

    Returns:
        DeductionResult with per-item amounts and the FIT/SIT/FICA bases.
        Bases are floored at 0 when deductions exceed gross.
    """
    breakdown = DeductionBreakdown(
        health=round_cents(elected.health),
        dental=round_cents(elected.dental),
        retirement_401k=calc_401k_amount(elected.retirement_401k_pct, gross),
        hsa=round_cents(elected.hsa),
        parking=round_cents(elected.parking),
        life_insurance=round_cents(elected.life_insurance),
        garnishment=round_cents(elected.garnishment),
    )

    income_taxable = max(ZERO, gross - breakdown.pre_tax_total)
    fica_taxable = max(ZERO, gross - breakdown.section_125_total)

    logger.debug(
        f"Taxable wages: {gross} gross - {breakdown.pre_tax_total} pretax = {income_taxable} FIT/SIT; "
        f"{gross} - {breakdown.section_125_total} sec125 = {fica_taxable} FICA"
    )

    return DeductionResult(
        breakdown=breakdown,
        taxable_wages=TaxableWages(
            federal=income_taxable,
            state=income_taxable,
            fica=fica_taxable,
        ),
    )
