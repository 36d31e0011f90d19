"""Tests for tax table loading and validation.

Invalid tables must fail at load time, never tax at 0% past a gap.
"""

import copy
from decimal import Decimal

import pytest
import yaml

from stubcalc.sdk.schemas import FilingStatus
from stubcalc.sdk.taxes import (
    TaxTableError,
    get_available_years,
    load_packaged_tax_tables,
    load_tax_tables,
    load_tax_tables_file,
    parse_tax_tables,
)


# === FIXTURES ===


@pytest.fixture
def valid_tables():
    """Minimal valid table data."""
    return {
        "year": 2030,
        "filing_statuses": {
            "single": {
                "standard_deduction": 10000,
                "brackets": [
                    {"min": 0, "max": 10000, "rate": 0.10},
                    {"min": 10000, "max": 50000, "rate": 0.20},
                    {"min": 50000, "max": None, "rate": 0.30},
                ],
            },
        },
        "fica": {
            "social_security": {"rate": 0.062, "wage_base": 150000},
            "medicare": {"rate": 0.0145, "additional_rate": 0.009, "additional_threshold": 200000},
        },
        "states": {
            "DEFAULT": {"rate": 0.05},
        },
    }


def _brackets(data):
    return data["filing_statuses"]["single"]["brackets"]


# === PACKAGED TABLES ===


class TestPackagedTables:

    def test_available_years(self):
        years = get_available_years()
        assert "2024" in years
        assert "2025" in years
        assert years == sorted(years, reverse=True)

    def test_2024_values(self, tables_2024):
        assert tables_2024.year == "2024"
        assert tables_2024.fica.social_security.wage_base == 168600
        assert tables_2024.fica.social_security.rate == Decimal("0.062")
        assert tables_2024.fica.medicare.additional_threshold == 200000
        assert tables_2024.standard_deduction(FilingStatus.SINGLE) == 14600
        assert tables_2024.standard_deduction(FilingStatus.MARRIED_JOINTLY) == 29200
        assert tables_2024.standard_deduction(FilingStatus.HEAD_OF_HOUSEHOLD) == 21900

    def test_all_statuses_defined(self, tables_2024, tables_2025):
        for tables in (tables_2024, tables_2025):
            assert set(tables.filing_statuses) == set(FilingStatus)

    def test_brackets_end_unbounded(self, tables_2024):
        for status in FilingStatus:
            brackets = tables_2024.brackets(status)
            assert brackets[0].min == 0
            assert brackets[-1].max is None

    def test_2025_wage_base(self, tables_2025):
        assert tables_2025.fica.social_security.wage_base == 176100

    def test_default_year_from_settings(self, write_settings):
        write_settings({"tax_year": "2025"})
        assert load_tax_tables().year == "2025"

    def test_default_year_without_settings(self):
        assert load_tax_tables().year == "2024"

    def test_packaged_tables_ignore_settings(self, tmp_path, write_settings):
        write_settings({"tax_year": "2025", "tax_rules_dir": str(tmp_path / "empty")})
        assert load_packaged_tax_tables().year == "2024"
        assert load_packaged_tax_tables("2025").year == "2025"

    def test_missing_year(self):
        with pytest.raises(TaxTableError, match="available"):
            load_tax_tables("1999")

    def test_tables_cached(self):
        assert load_tax_tables("2024") is load_tax_tables("2024")


class TestProviderFallbacks:

    def test_unknown_filing_status_uses_single(self, tables_2024):
        assert tables_2024.brackets("bogus") == tables_2024.brackets(FilingStatus.SINGLE)
        assert tables_2024.standard_deduction(None) == 14600

    def test_missing_status_uses_single(self, valid_tables):
        provider = parse_tax_tables(valid_tables)
        assert provider.brackets(FilingStatus.HEAD_OF_HOUSEHOLD) == provider.brackets(FilingStatus.SINGLE)

    def test_unknown_state_uses_default(self, tables_2024):
        assert tables_2024.state("ZZ") == tables_2024.state("DEFAULT")
        assert tables_2024.state(None).rate == Decimal("0.05")

    def test_state_lookup_case_insensitive(self, tables_2024):
        assert tables_2024.state(" ca ") == tables_2024.state("CA")

    def test_mappings_are_read_only(self, tables_2024):
        with pytest.raises(TypeError):
            tables_2024.states["XX"] = tables_2024.state("DEFAULT")
        with pytest.raises(TypeError):
            tables_2024.filing_statuses[FilingStatus.SINGLE] = None


# === VALIDATION ===


class TestTableValidation:

    def test_valid(self, valid_tables):
        provider = parse_tax_tables(valid_tables)
        assert provider.year == "2030"

    def test_gap_rejected(self, valid_tables):
        _brackets(valid_tables)[1]["min"] = 12000
        with pytest.raises(TaxTableError, match="starts at"):
            parse_tax_tables(valid_tables)

    def test_overlap_rejected(self, valid_tables):
        _brackets(valid_tables)[1]["min"] = 9000
        with pytest.raises(TaxTableError):
            parse_tax_tables(valid_tables)

    def test_bounded_top_bracket_rejected(self, valid_tables):
        _brackets(valid_tables)[2]["max"] = 100000
        with pytest.raises(TaxTableError, match="unbounded"):
            parse_tax_tables(valid_tables)

    def test_unbounded_middle_bracket_rejected(self, valid_tables):
        _brackets(valid_tables)[1]["max"] = None
        with pytest.raises(TaxTableError):
            parse_tax_tables(valid_tables)

    def test_first_bracket_must_start_at_zero(self, valid_tables):
        _brackets(valid_tables)[0]["min"] = 100
        with pytest.raises(TaxTableError):
            parse_tax_tables(valid_tables)

    def test_rate_out_of_range(self, valid_tables):
        _brackets(valid_tables)[0]["rate"] = 1.5
        with pytest.raises(TaxTableError):
            parse_tax_tables(valid_tables)

    def test_single_required(self, valid_tables):
        data = copy.deepcopy(valid_tables)
        data["filing_statuses"] = {"marriedJointly": data["filing_statuses"]["single"]}
        with pytest.raises(TaxTableError, match="single"):
            parse_tax_tables(data)

    def test_default_state_required(self, valid_tables):
        valid_tables["states"] = {"CA": {"rate": 0.01}}
        with pytest.raises(TaxTableError, match="DEFAULT"):
            parse_tax_tables(valid_tables)

    def test_unknown_field_rejected(self, valid_tables):
        valid_tables["fica"]["medicare"]["extra"] = 1
        with pytest.raises(TaxTableError):
            parse_tax_tables(valid_tables)

    def test_not_a_mapping(self):
        with pytest.raises(TaxTableError):
            parse_tax_tables(["not", "a", "table"])


class TestCustomRulesDir:

    def test_load_from_settings_dir(self, tmp_path, write_settings, valid_tables):
        rules_dir = tmp_path / "rules"
        rules_dir.mkdir()
        (rules_dir / "2030.yaml").write_text(yaml.dump(valid_tables))
        write_settings({"tax_rules_dir": str(rules_dir), "tax_year": "2030"})

        provider = load_tax_tables()
        assert provider.year == "2030"
        assert provider.standard_deduction("single") == 10000

    def test_invalid_file_is_fatal(self, tmp_path, valid_tables):
        _brackets(valid_tables)[1]["min"] = 12000
        path = tmp_path / "2030.yaml"
        path.write_text(yaml.dump(valid_tables))

        with pytest.raises(TaxTableError):
            load_tax_tables_file(path)

    def test_year_must_match_filename(self, tmp_path, valid_tables):
        path = tmp_path / "2031.yaml"
        path.write_text(yaml.dump(valid_tables))

        with pytest.raises(TaxTableError, match="declares year"):
            load_tax_tables_file(path)
