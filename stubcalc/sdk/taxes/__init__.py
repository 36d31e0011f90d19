"""taxes - Tax tables and per-period withholding.

Scope:
- Versioned tax tables (tax_rules/YYYY.yaml) validated by pydantic schemas
- Federal income tax withholding (annualized bracket method)
- FICA: Social Security wage base, Medicare, Additional Medicare
- Flat state withholding with optional SDI

Constraints:
- Pure calculation - no employee data access
- Tables are read-only once loaded; invalid tables fail at load time

Usage:
    from stubcalc.sdk.taxes import load_tax_tables, calculate_federal_withholding

    tables = load_tax_tables("2024")
    fit = calculate_federal_withholding(Decimal("2000"), "single", 26, tables)
"""

from .schemas import (
    FicaRules,
    FilingStatusRules,
    StateTaxConfig,
    TaxBracket,
    TaxTables,
)
from .tables import (
    TaxTableError,
    TaxTableProvider,
    get_available_years,
    load_tax_tables,
    load_packaged_tax_tables,
    load_tax_tables_file,
    parse_tax_tables,
)
from .withholding import (
    FicaResult,
    StateTaxResult,
    calculate_annual_bracket_tax,
    calculate_federal_withholding,
    calculate_fica,
    calculate_state_withholding,
)

__all__ = [
    # Schemas
    "FicaRules",
    "FilingStatusRules",
    "StateTaxConfig",
    "TaxBracket",
    "TaxTables",
    # Tables
    "TaxTableError",
    "TaxTableProvider",
    "get_available_years",
    "load_tax_tables",
    "load_packaged_tax_tables",
    "load_tax_tables_file",
    "parse_tax_tables",
    # Withholding
    "FicaResult",
    "StateTaxResult",
    "calculate_annual_bracket_tax",
    "calculate_federal_withholding",
    "calculate_fica",
    "calculate_state_withholding",
]
