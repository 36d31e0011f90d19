"""Pydantic schemas for tax table validation.

These schemas validate the tax_rules/*.yaml files. A table that fails
validation is a configuration error: the calculator never runs against
brackets with gaps, overlaps, or a bounded top bracket.
"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..schemas import FilingStatus, Money


class TaxBracket(BaseModel):
    """Single annual bracket: [min, max) taxed at rate. max=None is unbounded."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    min: Money = Field(..., ge=0, description="Lower bound")
    max: Optional[Money] = Field(default=None, description="Upper bound (None for the top bracket)")
    rate: Money = Field(..., ge=0, le=1, description="Marginal rate as decimal")

    @property
    def width(self) -> Optional[Decimal]:
        return None if self.max is None else self.max - self.min


class FilingStatusRules(BaseModel):
    """Standard deduction and brackets for one filing status."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    standard_deduction: Money = Field(..., ge=0)
    brackets: tuple[TaxBracket, ...] = Field(..., min_length=1)

    @model_validator(mode="after")
    def check_partition(self) -> "FilingStatusRules":
        """Brackets must partition [0, inf) in ascending order."""
        errors = []
        expected_min = Decimal("0")

        for i, bracket in enumerate(self.brackets):
            is_last = i == len(self.brackets) - 1
            if bracket.min != expected_min:
                errors.append(
                    f"bracket {i} starts at {bracket.min}, expected {expected_min}"
                )
            if bracket.max is None:
                if not is_last:
                    errors.append(f"bracket {i} is unbounded but is not the last bracket")
                break
            if bracket.max <= bracket.min:
                errors.append(f"bracket {i} max {bracket.max} is not above min {bracket.min}")
            if is_last:
                errors.append(f"last bracket ends at {bracket.max}; the top bracket must be unbounded")
            expected_min = bracket.max

        if errors:
            raise ValueError("; ".join(errors))
        return self


class SocialSecurityRules(BaseModel):
    """Social Security tax rules."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    rate: Money = Field(..., ge=0, le=1, description="Employee rate")
    wage_base: Money = Field(..., gt=0, description="Annual wage base (max taxable)")

    @property
    def max_tax(self) -> Decimal:
        return self.wage_base * self.rate


class MedicareRules(BaseModel):
    """Medicare and Additional Medicare rules."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    rate: Money = Field(..., ge=0, le=1)
    additional_rate: Money = Field(..., ge=0, le=1)
    additional_threshold: Money = Field(..., ge=0, description="Per-employee withholding threshold")


class FicaRules(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    social_security: SocialSecurityRules
    medicare: MedicareRules


class StateTaxConfig(BaseModel):
    """Flat state withholding rate with optional SDI."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    rate: Money = Field(..., ge=0, le=1)
    sdi_rate: Optional[Money] = Field(default=None, ge=0, le=1)
    sdi_wage_base: Optional[Money] = Field(default=None, gt=0, description="None means uncapped")


class TaxTables(BaseModel):
    """Complete tax tables for a year."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    year: int
    source: str = ""
    filing_statuses: dict[FilingStatus, FilingStatusRules]
    fica: FicaRules
    states: dict[str, StateTaxConfig]

    @model_validator(mode="after")
    def check_fallbacks(self) -> "TaxTables":
        """Fallback entries must exist."""
        if FilingStatus.SINGLE not in self.filing_statuses:
            raise ValueError("filing_statuses must define 'single'")
        if "DEFAULT" not in self.states:
            raise ValueError("states must define 'DEFAULT'")
        return self
