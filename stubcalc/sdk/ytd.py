"""Year-to-date projection.

No pay history is stored, so YTD values are estimated: the current period
number is inferred from prior YTD gross and this period's gross, and each
YTD figure is the current amount times that period number. When pay varies
between periods the estimate drifts; treat it as display data, not a
ledger.
"""

import logging
from decimal import ROUND_FLOOR, Decimal

logger = logging.getLogger(__name__)


def estimate_period_number(ytd_gross: Decimal, gross: Decimal) -> int:
    """Estimate which pay period of the year this is.

    floor(ytd_gross / gross) + 1 when both are positive, otherwise 1.
    """
    ytd_gross = Decimal(ytd_gross)
    gross = Decimal(gross)
    if ytd_gross <= 0 or gross <= 0:
        return 1

    period = int((ytd_gross / gross).to_integral_value(rounding=ROUND_FLOOR)) + 1
    logger.debug(f"Estimated period {period} from prior ytd {ytd_gross} / gross {gross}")
    return period


def project_ytd(current: Decimal, period_number: int) -> Decimal:
    """Project a per-period amount to year-to-date."""
    return Decimal(current) * period_number


def project_ytd_gross(ytd_gross: Decimal, gross: Decimal, period_number: int) -> Decimal:
    """YTD gross including this period.

    Uses the actual prior YTD when one was given, else the projection.
    """
    if ytd_gross > 0:
        return Decimal(ytd_gross) + Decimal(gross)
    return project_ytd(gross, period_number)
