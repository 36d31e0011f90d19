"""Paystub assembly.

calculate_paystub() is the single entry point of the calculation engine:

    normalize -> hours -> gross pay -> deductions / taxable wages
              -> federal, state, FICA withholding -> YTD projection
              -> Paystub

Every step is a pure function of its inputs. The only shared data is the
read-only tax tables, so concurrent calls need no coordination.
"""

import logging
from decimal import Decimal
from typing import Any, Mapping, Optional, Union

from .deductions import aggregate_deductions
from .earnings import DOUBLE_TIME_MULTIPLIER, OVERTIME_MULTIPLIER, calculate_gross_pay
from .hours import calculate_hours_worked
from .money import ZERO, percent_of, round_cents
from .normalize import normalize_employee, normalize_pay_period, normalize_time_worked
from .schemas import (
    AdditionalMedicareLine,
    CurrentYtd,
    Deductions,
    EarningLine,
    Earnings,
    EmployeeProfile,
    EmployeeSnapshot,
    ItemizedTaxes,
    PayInfo,
    PayPeriod,
    Paystub,
    PostTaxDeductions,
    PostTaxItems,
    PreTaxDeductions,
    PreTaxItems,
    SocialSecurityLine,
    Summary,
    TaxLine,
    TimeWorked,
    YtdSummary,
)
from .taxes.tables import TaxTableProvider, load_packaged_tax_tables
from .taxes.withholding import (
    calculate_federal_withholding,
    calculate_fica,
    calculate_state_withholding,
)
from .ytd import estimate_period_number, project_ytd, project_ytd_gross

logger = logging.getLogger(__name__)

HOURS = Decimal("0.01")


def _hours(value: Decimal) -> Decimal:
    return Decimal(value).quantize(HOURS)


def _line(current: Decimal, period: int, taxable_wages: Optional[Decimal] = None) -> TaxLine:
    return TaxLine(current=current, ytd=project_ytd(current, period), taxable_wages=taxable_wages)


def _amount(current: Decimal, period: int) -> CurrentYtd:
    return CurrentYtd(current=current, ytd=project_ytd(current, period))


def calculate_paystub(
    employee: Union[EmployeeProfile, Mapping[str, Any]],
    time_worked: Union[TimeWorked, Mapping[str, Any]],
    pay_period: Union[PayPeriod, Mapping[str, Any]],
    tables: Optional[TaxTableProvider] = None,
    require_hours: bool = False,
) -> Paystub:
    """Calculate a fully itemized paystub for one shift.

    Args:
        employee: EmployeeProfile, or a raw mapping resolved through
                  stubcalc.sdk.normalize (elected deductions under 'deductions')
        time_worked: TimeWorked or mapping with clock_in/clock_out ('HH:MM')
        pay_period: PayPeriod or mapping with start/end ('YYYY-MM-DD')
        tables: Tax tables; defaults to the packaged tables for DEFAULT_TAX_YEAR.
                Settings are never read here, so callers that honor the
                tax_year setting pass load_tax_tables() themselves.
        require_hours: If True, a zero-length shift raises InvalidShiftError

    Returns:
        Frozen Paystub

    Raises:
        InvalidShiftError: Malformed clock times, or zero hours with require_hours
        InvalidInputError: Malformed pay period dates
        TaxTableError: Missing or invalid tax tables
    """
    profile = normalize_employee(employee)
    shift = normalize_time_worked(time_worked)
    period_dates = normalize_pay_period(pay_period)
    if tables is None:
        tables = load_packaged_tax_tables()

    periods_per_year = profile.pay_frequency.periods_per_year
    rate = profile.hourly_rate

    # Earnings
    hours_worked = calculate_hours_worked(shift.clock_in, shift.clock_out, allow_zero=not require_hours)
    pay = calculate_gross_pay(hours_worked, rate)
    gross = pay.gross_pay

    # Deductions and taxable wage bases
    deductions = aggregate_deductions(profile.deductions, gross)
    items = deductions.breakdown
    wages = deductions.taxable_wages

    # Withholding
    federal_tax = calculate_federal_withholding(
        wages.federal, profile.filing_status, periods_per_year, tables
    )
    state = calculate_state_withholding(wages.state, profile.state_code, tables)
    fica = calculate_fica(wages.fica, profile.ytd_gross, tables)

    total_taxes = federal_tax + state.total
    total_benefits = items.pre_tax_total + items.post_tax_total
    total_deductions = total_taxes + fica.total + total_benefits
    net_pay = gross - total_deductions

    # YTD projection
    period = estimate_period_number(profile.ytd_gross, gross)

    logger.debug(
        f"Paystub {profile.employee_id}: hours {hours_worked}, gross {gross}, "
        f"taxes {total_taxes} + FICA {fica.total}, benefits {total_benefits}, net {net_pay}, "
        f"period {period}/{periods_per_year}"
    )

    ss_rules = tables.fica.social_security
    medicare_rules = tables.fica.medicare

    return Paystub(
        tax_year=tables.year,
        employee=EmployeeSnapshot(
            name=profile.name,
            employee_id=profile.employee_id,
            address=profile.address,
            filing_status=profile.filing_status,
            state_code=profile.state_code,
        ),
        pay_period=period_dates,
        pay_info=PayInfo(
            frequency=profile.pay_frequency,
            periods_per_year=periods_per_year,
            current_period=period,
        ),
        earnings=Earnings(
            regular=EarningLine(
                hours=_hours(pay.regular_hours), rate=rate, amount=pay.regular_pay,
            ),
            overtime=EarningLine(
                hours=_hours(pay.overtime_hours),
                rate=round_cents(rate * OVERTIME_MULTIPLIER),
                amount=pay.overtime_pay,
            ),
            double_time=EarningLine(
                hours=_hours(pay.double_time_hours),
                rate=round_cents(rate * DOUBLE_TIME_MULTIPLIER),
                amount=pay.double_time_pay,
            ),
            gross=gross,
            non_taxable=ZERO,
        ),
        deductions=Deductions(
            pre_tax=PreTaxDeductions(
                items=PreTaxItems(
                    health=items.health,
                    dental=items.dental,
                    retirement_401k=items.retirement_401k,
                    hsa=items.hsa,
                ),
                total=items.pre_tax_total,
            ),
            post_tax=PostTaxDeductions(
                items=PostTaxItems(
                    parking=items.parking,
                    life_insurance=items.life_insurance,
                    garnishment=items.garnishment,
                ),
                total=items.post_tax_total,
            ),
            taxes=ItemizedTaxes(
                federal_income_tax=_line(federal_tax, period, wages.federal),
                state_income_tax=_line(state.state_tax, period, wages.state),
                sdi=_line(state.sdi, period),
                social_security=SocialSecurityLine(
                    current=fica.social_security,
                    ytd=project_ytd(fica.social_security, period),
                    taxable_wages=wages.fica,
                    wage_base=ss_rules.wage_base,
                    max_tax=round_cents(ss_rules.max_tax),
                ),
                medicare=_line(fica.medicare, period, wages.fica),
                additional_medicare=AdditionalMedicareLine(
                    current=fica.additional_medicare,
                    ytd=project_ytd(fica.additional_medicare, period),
                    taxable_wages=wages.fica,
                    threshold=medicare_rules.additional_threshold,
                ),
            ),
            federal_tax=_amount(federal_tax, period),
            state_tax=_amount(state.total, period),
            social_security=_amount(fica.social_security, period),
            medicare=_amount(fica.medicare + fica.additional_medicare, period),
            total=_amount(total_deductions, period),
        ),
        net_pay=_amount(net_pay, period),
        ytd=YtdSummary(
            gross=project_ytd_gross(profile.ytd_gross, gross, period),
            deductions=project_ytd(total_deductions, period),
            net=project_ytd(net_pay, period),
        ),
        summary=Summary(
            gross_wages=gross,
            total_taxes=total_taxes,
            total_fica=fica.total,
            total_benefit_deductions=total_benefits,
            net_pay=net_pay,
            tax_percentage=percent_of(total_taxes, gross),
            benefit_percentage=percent_of(total_benefits, gross),
            net_percentage=percent_of(net_pay, gross),
        ),
    )
