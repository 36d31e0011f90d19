"""Per-period tax withholding.

Federal income tax uses the annualized bracket method: annualize the
period's taxable wages, subtract the standard deduction, walk the annual
brackets, then divide back down to the period.

FICA uses prior YTD gross as a stand-in for prior YTD FICA wages. The two
diverge when Section 125 deductions are present; this model accepts that.

State withholding is a flat rate per state with optional SDI.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Union

from ..money import ZERO, round_cents
from ..schemas import FilingStatus
from .schemas import TaxBracket
from .tables import TaxTableProvider

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FicaResult:
    social_security: Decimal
    medicare: Decimal
    additional_medicare: Decimal
    social_security_wages: Decimal
    additional_medicare_wages: Decimal

    @property
    def total(self) -> Decimal:
        return self.social_security + self.medicare + self.additional_medicare


@dataclass(frozen=True)
class StateTaxResult:
    state_code: str
    state_tax: Decimal
    sdi: Decimal

    @property
    def total(self) -> Decimal:
        return self.state_tax + self.sdi


def calculate_annual_bracket_tax(taxable_income: Decimal, brackets: tuple[TaxBracket, ...]) -> Decimal:
    """Tax on annual taxable income, walking brackets in ascending order.

    Each bracket taxes min(remaining, max - min); the top bracket is unbounded.
    """
    annual_tax = ZERO
    remaining = Decimal(taxable_income)

    for bracket in brackets:
        if remaining <= 0:
            break
        width = bracket.width
        in_bracket = remaining if width is None else min(remaining, width)
        annual_tax += in_bracket * bracket.rate
        remaining -= in_bracket

    return annual_tax


def calculate_federal_withholding(
    taxable_wages: Decimal,
    filing_status: Union[FilingStatus, str, None],
    periods_per_year: int,
    tables: TaxTableProvider,
) -> Decimal:
    """Calculate federal income tax withholding for one period.

    Args:
        taxable_wages: FIT taxable wages for the period (gross minus pretax)
        filing_status: Filing status; unknown values use single
        periods_per_year: Pay periods per year (26 for biweekly)
        tables: Tax tables for the year

    Returns:
        Period withholding, rounded to cents
    """
    annualized = Decimal(taxable_wages) * periods_per_year
    standard_deduction = tables.standard_deduction(filing_status)
    taxable_annual = max(ZERO, annualized - standard_deduction)

    annual_tax = calculate_annual_bracket_tax(taxable_annual, tables.brackets(filing_status))
    period_tax = round_cents(annual_tax / periods_per_year)

    logger.debug(
        f"FIT: {taxable_wages} x {periods_per_year} = {annualized} annual, "
        f"- {standard_deduction} std = {taxable_annual}; "
        f"annual tax {annual_tax} -> {period_tax}/period"
    )
    return period_tax


def calculate_fica(fica_wages: Decimal, ytd_gross: Decimal, tables: TaxTableProvider) -> FicaResult:
    """Calculate Social Security, Medicare and Additional Medicare for a period.

    Args:
        fica_wages: FICA taxable wages for the period (gross minus Section 125)
        ytd_gross: Gross wages before this period, used as prior YTD FICA wages
        tables: Tax tables for the year

    Returns:
        FicaResult with each tax rounded to cents
    """
    fica_wages = Decimal(fica_wages)
    ytd_gross = Decimal(ytd_gross)
    ss = tables.fica.social_security
    medicare = tables.fica.medicare

    # Social Security stops at the wage base
    if ytd_gross < ss.wage_base:
        ss_wages = min(fica_wages, ss.wage_base - ytd_gross)
    else:
        ss_wages = ZERO
    social_security = round_cents(ss_wages * ss.rate)

    base_medicare = round_cents(fica_wages * medicare.rate)

    # Additional Medicare applies only to wages above the threshold
    threshold = medicare.additional_threshold
    new_ytd = ytd_gross + fica_wages
    if new_ytd > threshold:
        if ytd_gross >= threshold:
            additional_wages = fica_wages
        else:
            additional_wages = new_ytd - threshold
    else:
        additional_wages = ZERO
    additional_medicare = round_cents(additional_wages * medicare.additional_rate)

    logger.debug(
        f"FICA: wages {fica_wages}, prior ytd {ytd_gross}; SS on {ss_wages} = {social_security}, "
        f"Medicare {base_medicare}, Additional on {additional_wages} = {additional_medicare}"
    )

    return FicaResult(
        social_security=social_security,
        medicare=base_medicare,
        additional_medicare=additional_medicare,
        social_security_wages=ss_wages,
        additional_medicare_wages=additional_wages,
    )


def calculate_state_withholding(taxable_wages: Decimal, state_code: str, tables: TaxTableProvider) -> StateTaxResult:
    """Calculate state income tax and SDI for a period.

    SDI is capped at sdi_wage_base x sdi_rate per period, not against YTD.
    An SDI rate without a wage base is uncapped. Unknown states use DEFAULT.
    """
    taxable_wages = Decimal(taxable_wages)
    config = tables.state(state_code)

    state_tax = round_cents(taxable_wages * config.rate)

    sdi = ZERO
    if config.sdi_rate:
        sdi = taxable_wages * config.sdi_rate
        if config.sdi_wage_base is not None:
            sdi = min(sdi, config.sdi_wage_base * config.sdi_rate)
        sdi = round_cents(sdi)

    return StateTaxResult(state_code=state_code, state_tax=state_tax, sdi=sdi)
