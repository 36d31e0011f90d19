"""Input normalization.

Form and profile data arrive as loose mappings: strings for numbers,
missing keys, camelCase names from the web form. Everything that has a
default is resolved here, before any calculation, from the tables below.

Numeric fields never fail: None, blank, non-numeric, non-finite or
negative values become the field's default. Dates and clock times have no
sensible default value once given, so malformed ones raise.
"""

import logging
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional, Union

from .hours import parse_clock_time
from .schemas import (
    ElectedDeductions,
    EmployeeProfile,
    FilingStatus,
    PayFrequency,
    PayPeriod,
    TimeWorked,
)

logger = logging.getLogger(__name__)


FIELD_DEFAULTS = {
    "name": "John Doe",
    "employee_id": "200000",
    "address": "1234 Main Street\nSanta Monica, CA 90401",
    "hourly_rate": Decimal("25.00"),
    "filing_status": FilingStatus.SINGLE,
    "state_code": "DEFAULT",
    "pay_frequency": PayFrequency.BIWEEKLY,
    "ytd_gross": Decimal("0"),
}

DEDUCTION_DEFAULTS = {
    "health": Decimal("0"),
    "dental": Decimal("0"),
    "retirement_401k_pct": Decimal("0"),
    "hsa": Decimal("0"),
    "parking": Decimal("0"),
    "life_insurance": Decimal("0"),
    "garnishment": Decimal("0"),
}

TIME_DEFAULTS = {
    "clock_in": time(8, 0),
    "clock_out": time(17, 0),
}

# Web form / legacy key -> canonical key
FIELD_ALIASES = {
    "employeeId": "employee_id",
    "hourlyRate": "hourly_rate",
    "filingStatus": "filing_status",
    "stateCode": "state_code",
    "state": "state_code",
    "payFrequency": "pay_frequency",
    "ytdGross": "ytd_gross",
    "clockIn": "clock_in",
    "clockOut": "clock_out",
    "startDate": "start",
    "endDate": "end",
}

DEDUCTION_ALIASES = {
    "healthInsurance": "health",
    "health_insurance": "health",
    "retirement401k": "retirement_401k_pct",
    "retirement_401k": "retirement_401k_pct",
    "hsa_contribution": "hsa",
    "parkingFee": "parking",
    "parking_fee": "parking",
    "lifeInsurance": "life_insurance",
}


class InvalidInputError(ValueError):
    """Raised for malformed non-numeric input (dates)."""
    pass


def _canonical(raw: Mapping[str, Any], aliases: Mapping[str, str]) -> dict:
    result = {}
    for key, value in raw.items():
        result[aliases.get(key, key)] = value
    return result


def safe_decimal(value: Any, default: Decimal) -> Decimal:
    """Coerce a number or numeric string to Decimal, else return default.

    '$1,250.50' -> 1250.50; 'abc', '', None, 'NaN', '-5' -> default.
    """
    if value is None or isinstance(value, bool):
        return default

    if isinstance(value, Decimal):
        number = value
    elif isinstance(value, (int, float)):
        number = Decimal(str(value))
    else:
        text = str(value).strip().replace("$", "").replace(",", "")
        if not text:
            return default
        try:
            number = Decimal(text)
        except InvalidOperation:
            logger.debug(f"Non-numeric value {value!r}, using {default}")
            return default

    if not number.is_finite() or number < 0:
        logger.debug(f"Unusable numeric value {value!r}, using {default}")
        return default
    return number


def _text(value: Any, default: str) -> str:
    if value is None:
        return default
    text = str(value)
    return text if text.strip() else default


def resolve_filing_status(value: Any) -> FilingStatus:
    """Filing status from enum or string; unknown values become single."""
    try:
        return FilingStatus(value)
    except ValueError:
        if value not in (None, ""):
            logger.debug(f"Unknown filing status {value!r}, using single")
        return FIELD_DEFAULTS["filing_status"]


def resolve_pay_frequency(value: Any) -> PayFrequency:
    """Pay frequency from enum or string; unknown values become biweekly."""
    try:
        return PayFrequency(value)
    except ValueError:
        if value not in (None, ""):
            logger.debug(f"Unknown pay frequency {value!r}, using biweekly")
        return FIELD_DEFAULTS["pay_frequency"]


def resolve_state_code(value: Any) -> str:
    """Upper-cased state code; blank becomes DEFAULT.

    Whether the code exists in the state table is decided by the tax
    tables at calculation time.
    """
    code = _text(value, FIELD_DEFAULTS["state_code"]).strip().upper()
    return code or FIELD_DEFAULTS["state_code"]


def normalize_deductions(raw: Optional[Mapping[str, Any]]) -> ElectedDeductions:
    """Build ElectedDeductions from a loose mapping. Missing items are 0."""
    if isinstance(raw, ElectedDeductions):
        return raw

    if raw is not None and not isinstance(raw, Mapping):
        logger.debug(f"Deductions {raw!r} are not a mapping, using none")
        raw = None

    values = _canonical(raw or {}, DEDUCTION_ALIASES)
    unknown = set(values) - set(DEDUCTION_DEFAULTS)
    if unknown:
        logger.debug(f"Ignoring unknown deduction keys: {sorted(unknown)}")

    return ElectedDeductions(**{
        field: safe_decimal(values.get(field), default)
        for field, default in DEDUCTION_DEFAULTS.items()
    })


def normalize_employee(raw: Union[EmployeeProfile, Mapping[str, Any], None]) -> EmployeeProfile:
    """Resolve every employee field to a concrete value.

    Args:
        raw: EmployeeProfile (returned as-is) or mapping of form/profile fields

    Returns:
        Frozen EmployeeProfile
    """
    if isinstance(raw, EmployeeProfile):
        return raw

    values = _canonical(raw or {}, FIELD_ALIASES)

    return EmployeeProfile(
        name=_text(values.get("name"), FIELD_DEFAULTS["name"]),
        employee_id=_text(values.get("employee_id"), FIELD_DEFAULTS["employee_id"]),
        address=_text(values.get("address"), FIELD_DEFAULTS["address"]),
        hourly_rate=safe_decimal(values.get("hourly_rate"), FIELD_DEFAULTS["hourly_rate"]),
        filing_status=resolve_filing_status(values.get("filing_status")),
        state_code=resolve_state_code(values.get("state_code")),
        pay_frequency=resolve_pay_frequency(values.get("pay_frequency")),
        ytd_gross=safe_decimal(values.get("ytd_gross"), FIELD_DEFAULTS["ytd_gross"]),
        deductions=normalize_deductions(values.get("deductions")),
    )


def normalize_time_worked(raw: Union[TimeWorked, Mapping[str, Any], None]) -> TimeWorked:
    """Resolve clock times; missing ones default to 08:00 and 17:00.

    Raises:
        InvalidShiftError: If a given time is not HH:MM
    """
    if isinstance(raw, TimeWorked):
        return raw

    values = _canonical(raw or {}, FIELD_ALIASES)
    resolved = {}
    for field, default in TIME_DEFAULTS.items():
        value = values.get(field)
        if value in (None, ""):
            resolved[field] = default
        else:
            resolved[field] = parse_clock_time(_sexagesimal_to_clock(value))
    return TimeWorked(**resolved)


def _sexagesimal_to_clock(value: Any) -> Any:
    """Undo YAML 1.1 base-60 parsing of unquoted times (17:00 -> 1020).

    Other values are returned unchanged.
    """
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        hours, minutes = divmod(value, 60)
        logger.debug(f"Reading integer clock time {value} as {hours:02d}:{minutes:02d}")
        return f"{hours:02d}:{minutes:02d}"
    return value


def _parse_date(value: Any, field: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if value in (None, ""):
        raise InvalidInputError(f"Missing pay period {field} date")
    try:
        return datetime.strptime(str(value).strip(), "%Y-%m-%d").date()
    except ValueError as e:
        raise InvalidInputError(f"Invalid {field} date {value!r}, expected YYYY-MM-DD") from e


def normalize_pay_period(raw: Union[PayPeriod, Mapping[str, Any]]) -> PayPeriod:
    """Parse pay period start/end dates (end >= start is not checked).

    Raises:
        InvalidInputError: If a date is missing or not YYYY-MM-DD
    """
    if isinstance(raw, PayPeriod):
        return raw

    values = _canonical(raw or {}, FIELD_ALIASES)
    return PayPeriod(
        start=_parse_date(values.get("start"), "start"),
        end=_parse_date(values.get("end"), "end"),
    )
