"""Pydantic schemas for stub-calc inputs and the generated paystub.

Input records are produced by stubcalc.sdk.normalize and are frozen.
The Paystub output record is frozen as well: consumers render it, they
never modify it or re-derive its amounts.

All schemas use extra='forbid' so a misspelled field is an error rather
than silently ignored.
"""

from datetime import date, time
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field


def _to_decimal(value: Any) -> Any:
    """Convert floats through str() so 0.062 stays 0.062."""
    if isinstance(value, float):
        return Decimal(str(value))
    return value


Money = Annotated[Decimal, BeforeValidator(_to_decimal)]


class FilingStatus(str, Enum):
    """Federal filing status (W-4 Step 1c)."""

    SINGLE = "single"
    MARRIED_JOINTLY = "marriedJointly"
    MARRIED_SEPARATELY = "marriedSeparately"
    HEAD_OF_HOUSEHOLD = "headOfHousehold"


class PayFrequency(str, Enum):
    """Pay schedule."""

    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    SEMIMONTHLY = "semimonthly"
    MONTHLY = "monthly"

    @property
    def periods_per_year(self) -> int:
        return PAY_PERIODS[self]


PAY_PERIODS = {
    PayFrequency.WEEKLY: 52,
    PayFrequency.BIWEEKLY: 26,
    PayFrequency.SEMIMONTHLY: 24,
    PayFrequency.MONTHLY: 12,
}


# =============================================================================
# Inputs
# =============================================================================


class ElectedDeductions(BaseModel):
    """Employee-elected deductions for one period."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    # Pre-tax
    health: Money = Field(default=Decimal("0"), ge=0, description="Section 125 health premium")
    dental: Money = Field(default=Decimal("0"), ge=0, description="Section 125 dental premium")
    retirement_401k_pct: Money = Field(
        default=Decimal("0"), ge=0,
        description="Traditional 401(k) deferral as a percentage of gross (10 = 10%)",
    )
    hsa: Money = Field(default=Decimal("0"), ge=0, description="Health Savings Account")

    # Post-tax
    parking: Money = Field(default=Decimal("0"), ge=0)
    life_insurance: Money = Field(default=Decimal("0"), ge=0)
    garnishment: Money = Field(default=Decimal("0"), ge=0)


class EmployeeProfile(BaseModel):
    """Employee snapshot used for a single paystub."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    employee_id: str
    address: str
    hourly_rate: Money = Field(..., ge=0)
    filing_status: FilingStatus = FilingStatus.SINGLE
    state_code: str = "DEFAULT"
    pay_frequency: PayFrequency = PayFrequency.BIWEEKLY
    ytd_gross: Money = Field(default=Decimal("0"), ge=0, description="Gross earned before this period")
    deductions: ElectedDeductions = Field(default_factory=ElectedDeductions)


class TimeWorked(BaseModel):
    """A single shift. clock_out before clock_in means the shift ended the next day."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    clock_in: time
    clock_out: time


class PayPeriod(BaseModel):
    """Pay period dates. end >= start is expected but not enforced."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    start: date
    end: date


# =============================================================================
# Paystub output
# =============================================================================


class _Record(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class EmployeeSnapshot(_Record):
    name: str
    employee_id: str
    address: str
    filing_status: FilingStatus
    state_code: str


class PayInfo(_Record):
    frequency: PayFrequency
    periods_per_year: int
    current_period: int = Field(..., ge=1, description="Estimated, see stubcalc.sdk.ytd")


class EarningLine(_Record):
    hours: Decimal
    rate: Decimal
    amount: Decimal


class Earnings(_Record):
    regular: EarningLine
    overtime: EarningLine
    double_time: EarningLine
    gross: Decimal
    non_taxable: Decimal = Decimal("0")


class PreTaxItems(_Record):
    health: Decimal
    dental: Decimal
    retirement_401k: Decimal
    hsa: Decimal


class PostTaxItems(_Record):
    parking: Decimal
    life_insurance: Decimal
    garnishment: Decimal


class PreTaxDeductions(_Record):
    items: PreTaxItems
    total: Decimal


class PostTaxDeductions(_Record):
    items: PostTaxItems
    total: Decimal


class CurrentYtd(_Record):
    """A current-period amount and its projected year-to-date value."""

    current: Decimal
    ytd: Decimal


class TaxLine(CurrentYtd):
    """An itemized tax with the wage base it was computed on."""

    taxable_wages: Optional[Decimal] = None


class SocialSecurityLine(TaxLine):
    wage_base: Decimal
    max_tax: Decimal


class AdditionalMedicareLine(TaxLine):
    threshold: Decimal


class ItemizedTaxes(_Record):
    federal_income_tax: TaxLine
    state_income_tax: TaxLine
    sdi: TaxLine
    social_security: SocialSecurityLine
    medicare: TaxLine
    additional_medicare: AdditionalMedicareLine


class Deductions(_Record):
    pre_tax: PreTaxDeductions
    post_tax: PostTaxDeductions
    taxes: ItemizedTaxes

    # Legacy aggregates: state_tax includes SDI, medicare includes Additional Medicare.
    federal_tax: CurrentYtd
    state_tax: CurrentYtd
    social_security: CurrentYtd
    medicare: CurrentYtd
    total: CurrentYtd


class YtdSummary(_Record):
    gross: Decimal
    deductions: Decimal
    net: Decimal


class Summary(_Record):
    """Display totals and whole-number percentages of gross."""

    gross_wages: Decimal
    total_taxes: Decimal
    total_fica: Decimal
    total_benefit_deductions: Decimal
    net_pay: Decimal
    tax_percentage: int
    benefit_percentage: int
    net_percentage: int


class Paystub(_Record):
    """A fully itemized paystub for one shift."""

    tax_year: str
    employee: EmployeeSnapshot
    pay_period: PayPeriod
    pay_info: PayInfo
    earnings: Earnings
    deductions: Deductions
    net_pay: CurrentYtd
    ytd: YtdSummary
    summary: Summary

    def to_dict(self) -> dict:
        """JSON-ready dict with camelCase keys and amounts as strings."""
        return _camelize(self.model_dump(mode="json"))


def _camel(key: str) -> str:
    head, *rest = key.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def _camelize(value: Any) -> Any:
    if isinstance(value, dict):
        return {_camel(k): _camelize(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_camelize(v) for v in value]
    return value
