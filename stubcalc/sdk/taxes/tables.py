"""Tax table loading.

Tables live in <tax_rules_dir>/YYYY.yaml and are validated against
stubcalc.sdk.taxes.schemas.TaxTables when loaded. A table is loaded once
per (directory, year) and handed out as a read-only TaxTableProvider.
"""

import logging
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional, Union

import yaml
from pydantic import ValidationError

from ..config import (
    DEFAULT_TAX_YEAR,
    PACKAGED_TAX_RULES_DIR,
    get_default_tax_year,
    get_tax_rules_dir,
)
from ..schemas import FilingStatus
from .schemas import (
    FicaRules,
    FilingStatusRules,
    StateTaxConfig,
    TaxBracket,
    TaxTables,
)

logger = logging.getLogger(__name__)

DEFAULT_STATE = "DEFAULT"


class TaxTableError(ValueError):
    """Raised when tax tables are missing or violate their invariants."""
    pass


class TaxTableProvider:
    """Read-only access to one year's tax tables.

    Unknown filing statuses resolve to single and unknown state codes
    resolve to DEFAULT.
    """

    def __init__(self, tables: TaxTables):
        self._tables = tables
        self._statuses: Mapping[FilingStatus, FilingStatusRules] = MappingProxyType(
            dict(tables.filing_statuses)
        )
        self._states: Mapping[str, StateTaxConfig] = MappingProxyType(
            {code.strip().upper(): config for code, config in tables.states.items()}
        )

    def __repr__(self) -> str:
        return f"TaxTableProvider(year={self.year})"

    @property
    def year(self) -> str:
        return str(self._tables.year)

    @property
    def source(self) -> str:
        return self._tables.source

    @property
    def fica(self) -> FicaRules:
        return self._tables.fica

    @property
    def filing_statuses(self) -> Mapping[FilingStatus, FilingStatusRules]:
        return self._statuses

    @property
    def states(self) -> Mapping[str, StateTaxConfig]:
        return self._states

    def _rules_for(self, filing_status: Union[FilingStatus, str, None]) -> FilingStatusRules:
        try:
            status = FilingStatus(filing_status)
        except ValueError:
            logger.debug(f"Unknown filing status {filing_status!r}, using single")
            status = FilingStatus.SINGLE
        rules = self._statuses.get(status)
        if rules is None:
            logger.debug(f"No {self.year} table for {status.value}, using single")
            rules = self._statuses[FilingStatus.SINGLE]
        return rules

    def brackets(self, filing_status: Union[FilingStatus, str, None]) -> tuple[TaxBracket, ...]:
        """Ascending annual brackets for a filing status."""
        return self._rules_for(filing_status).brackets

    def standard_deduction(self, filing_status: Union[FilingStatus, str, None]):
        """Annual standard deduction for a filing status."""
        return self._rules_for(filing_status).standard_deduction

    def state(self, state_code: Optional[str]) -> StateTaxConfig:
        """State config for a code, falling back to DEFAULT."""
        code = (state_code or "").strip().upper()
        config = self._states.get(code)
        if config is None:
            logger.debug(f"No state config for {state_code!r}, using {DEFAULT_STATE}")
            config = self._states[DEFAULT_STATE]
        return config


def get_available_years(rules_dir: Optional[Path] = None) -> list[str]:
    """Sorted list of table versions in the rules directory (newest first)."""
    rules_dir = Path(rules_dir) if rules_dir else get_tax_rules_dir()
    years = [p.stem for p in rules_dir.glob("*.yaml") if p.stem.isdigit()]
    return sorted(years, reverse=True)


def parse_tax_tables(data: dict, origin: str = "<data>") -> TaxTableProvider:
    """Validate raw table data and wrap it in a provider.

    Raises:
        TaxTableError: If the data violates the table schema or invariants
    """
    if not isinstance(data, dict):
        raise TaxTableError(f"Tax tables in {origin} must be a mapping")
    try:
        tables = TaxTables.model_validate(data)
    except ValidationError as e:
        raise TaxTableError(f"Invalid tax tables in {origin}: {e}") from e
    return TaxTableProvider(tables)


def load_tax_tables_file(path: Path) -> TaxTableProvider:
    """Load and validate a single tax table file."""
    path = Path(path)
    if not path.exists():
        raise TaxTableError(f"Tax table file not found: {path}")

    with open(path, "r") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise TaxTableError(f"Could not parse {path}: {e}") from e

    provider = parse_tax_tables(data, origin=str(path))
    if provider.year != path.stem and path.stem.isdigit():
        raise TaxTableError(f"{path} declares year {provider.year}")
    return provider


@lru_cache(maxsize=None)
def _load_cached(rules_dir: str, year: str) -> TaxTableProvider:
    config_file = Path(rules_dir) / f"{year}.yaml"
    if not config_file.exists():
        available = ", ".join(get_available_years(Path(rules_dir))) or "none"
        raise TaxTableError(
            f"Tax tables not found for year {year} in {rules_dir} (available: {available})"
        )
    logger.debug(f"Loading tax tables from {config_file}")
    return load_tax_tables_file(config_file)


def load_tax_tables(year: Optional[str] = None, rules_dir: Optional[Path] = None) -> TaxTableProvider:
    """Load tax tables for a year.

    Args:
        year: Table version (e.g., "2024"). Defaults to the tax_year setting.
        rules_dir: Directory of YYYY.yaml files. Defaults to the tax_rules_dir
                   setting or the packaged tables.

    Returns:
        Cached, read-only TaxTableProvider

    Raises:
        TaxTableError: If the table is missing or invalid
    """
    year = str(year) if year else get_default_tax_year()
    rules_dir = Path(rules_dir) if rules_dir else get_tax_rules_dir()
    return _load_cached(str(rules_dir.resolve()), year)


def load_packaged_tax_tables(year: str = DEFAULT_TAX_YEAR) -> TaxTableProvider:
    """Load tables shipped with the package, ignoring settings.json.

    Used by the engine when no tables are passed in.
    """
    return _load_cached(str(PACKAGED_TAX_RULES_DIR.resolve()), str(year))
