"""Stub Calc SDK - paystub calculation engine."""

from .config import (
    ConfigError,
    configure_logging,
    get_config_dir,
    get_settings_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    unset_setting,
    get_default_tax_year,
    get_tax_rules_dir,
    get_default_output_format,
    load_profile_file,
)
from .schemas import (
    ElectedDeductions,
    EmployeeProfile,
    FilingStatus,
    PayFrequency,
    PayPeriod,
    Paystub,
    TimeWorked,
)
from .hours import InvalidShiftError, calculate_hours_worked
from .earnings import GrossPay, calculate_gross_pay
from .deductions import DeductionResult, aggregate_deductions
from .normalize import (
    FIELD_DEFAULTS,
    InvalidInputError,
    normalize_employee,
    normalize_pay_period,
    normalize_time_worked,
    safe_decimal,
)
from .taxes import TaxTableError, TaxTableProvider, load_tax_tables
from .ytd import estimate_period_number
from .paystub import calculate_paystub

__all__ = [
    # Config
    "ConfigError",
    "configure_logging",
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "save_settings",
    "get_setting",
    "set_setting",
    "unset_setting",
    "get_default_tax_year",
    "get_tax_rules_dir",
    "get_default_output_format",
    "load_profile_file",
    # Schemas
    "ElectedDeductions",
    "EmployeeProfile",
    "FilingStatus",
    "PayFrequency",
    "PayPeriod",
    "Paystub",
    "TimeWorked",
    # Calculation
    "InvalidShiftError",
    "calculate_hours_worked",
    "GrossPay",
    "calculate_gross_pay",
    "DeductionResult",
    "aggregate_deductions",
    "FIELD_DEFAULTS",
    "InvalidInputError",
    "normalize_employee",
    "normalize_pay_period",
    "normalize_time_worked",
    "safe_decimal",
    "TaxTableError",
    "TaxTableProvider",
    "load_tax_tables",
    "estimate_period_number",
    "calculate_paystub",
]
