"""
Series normalization module.

Validates, orders and deduplicates raw observations.
"""

import logging
import math
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from ..core import DateUtils
from ..models import RawObservation, Observation, Series


def parse_value(value: Any) -> Optional[float]:
    """
    Parse an observation value into a finite float.

    Numbers and numeric strings are accepted; None, empty strings,
    booleans, NaN, infinities and integers beyond float range are not.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(number):
        return None
    return number


class SeriesNormalizer:
    """Turn raw observations into a clean ascending series."""

    def __init__(
        self,
        date_utils: Optional[DateUtils] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize series normalizer.

        Args:
            date_utils: Timestamp parser (defaults to the default site timezone)
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.date_utils = date_utils or DateUtils(logger=self.logger)

    def normalize(self, raw: Iterable[RawObservation]) -> Series:
        """
        Normalize raw observations.

        Entries without a finite value or a parseable timestamp are dropped.
        The rest are sorted ascending; of several entries sharing a
        timestamp the first one seen in the feed is kept.

        Args:
            raw: Raw observations in feed order

        Returns:
            Series (possibly empty)
        """
        valid: List[Observation] = []
        dropped_values = 0
        dropped_timestamps = 0

        for item in raw:
            value = parse_value(item.value)
            if value is None:
                dropped_values += 1
                continue

            timestamp = self.date_utils.parse_timestamp(item.timestamp)
            if timestamp is None:
                dropped_timestamps += 1
                continue

            quality = item.quality_code if item.quality_code else None
            valid.append(Observation(timestamp=timestamp, value=value, quality_code=quality))

        # sorted() is stable, so feed order decides among equal timestamps
        by_time: Dict[datetime, Observation] = {}
        for observation in sorted(valid, key=lambda o: o.timestamp):
            by_time.setdefault(observation.timestamp, observation)

        duplicates = len(valid) - len(by_time)
        if dropped_values or dropped_timestamps or duplicates:
            self.logger.debug(
                f"Normalization dropped {dropped_values} invalid values, "
                f"{dropped_timestamps} invalid timestamps, {duplicates} duplicates"
            )

        return Series(tuple(by_time.values()))
