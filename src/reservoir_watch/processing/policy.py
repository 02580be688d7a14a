"""
Staleness and capacity policy.

Pure functions; the reference instant is always passed in.
"""

import math
from datetime import datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from ..core import constants


def round_half_up(value: float, digits: int = 1) -> float:
    """
    Round to ``digits`` decimals, exact halves away from zero.

    Works on the exact binary value of the float, so 1.15 (stored as
    1.1499...) rounds to 1.1 while 6.25 rounds to 6.3.
    """
    # Beyond 2**53 a float has no fractional digits, and quantize would exceed
    # the decimal context precision
    if not math.isfinite(value) or abs(value) >= 2 ** 53:
        return value
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def percent_capacity(value: float, capacity: Optional[float]) -> Optional[float]:
    """
    Observed value as a percentage of site capacity.

    Args:
        value: Observed storage
        capacity: Nominal full capacity, None for sites without one

    Returns:
        Percentage rounded to one decimal, or None without a usable capacity
    """
    if capacity is None or capacity <= 0:
        return None
    return round_half_up(value / capacity * 100, 1)


def stale_days(timestamp: datetime, now: datetime) -> int:
    """
    Whole days elapsed between an observation and ``now``.

    Negative for timestamps in the future.
    """
    return math.floor((now - timestamp) / timedelta(days=1))


def is_stale(days: int, threshold: int = constants.STALE_THRESHOLD_DAYS) -> bool:
    """True when more than ``threshold`` whole days have passed."""
    return days > threshold
