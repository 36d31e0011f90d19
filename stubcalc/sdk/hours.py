"""Shift time accumulation.

Turns a clock-in/clock-out pair into decimal hours. A clock-out earlier
than the clock-in is read as the next day, so 22:00 -> 06:00 is 8 hours.
"""

import logging
from datetime import time
from decimal import Decimal
from typing import Union

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60

TimeLike = Union[time, str]


class InvalidShiftError(ValueError):
    """Raised for unparseable shift times, or a zero-length shift when hours are required."""
    pass


def parse_clock_time(value: TimeLike) -> time:
    """Parse 'HH:MM' (24h) into a time. time objects pass through.

    Raises:
        InvalidShiftError: If the value is not HH:MM with hour 0-23 and minute 0-59
    """
    if isinstance(value, time):
        return value

    text = str(value).strip()
    parts = text.split(":")
    if len(parts) not in (2, 3) or not all(p.isascii() and p.isdigit() for p in parts):
        raise InvalidShiftError(f"Invalid clock time {value!r}, expected HH:MM")

    hour, minute = int(parts[0]), int(parts[1])
    if not 0 <= hour <= 23 or not 0 <= minute <= 59:
        raise InvalidShiftError(f"Clock time {value!r} out of range")
    return time(hour, minute)


def minutes_since_midnight(value: TimeLike) -> int:
    t = parse_clock_time(value)
    return t.hour * 60 + t.minute


def calculate_hours_worked(clock_in: TimeLike, clock_out: TimeLike, allow_zero: bool = True) -> Decimal:
    """Calculate hours between clock-in and clock-out.

    Args:
        clock_in: Shift start, time or 'HH:MM'
        clock_out: Shift end, time or 'HH:MM'. Earlier than clock_in means next day.
        allow_zero: If False, equal times raise instead of returning 0

    Returns:
        Hours worked as an exact Decimal (never negative)
    """
    in_minutes = minutes_since_midnight(clock_in)
    out_minutes = minutes_since_midnight(clock_out)

    if out_minutes < in_minutes:
        out_minutes += MINUTES_PER_DAY

    worked = out_minutes - in_minutes
    if worked == 0 and not allow_zero:
        raise InvalidShiftError(f"Zero-length shift: clock-in and clock-out are both {clock_in}")

    hours = Decimal(worked) / Decimal(60)
    logger.debug(f"Shift {clock_in} -> {clock_out}: {worked} min = {hours} h")
    return hours
