"""
Date and timezone utilities.

Centralizes timestamp parsing, period arithmetic and display formatting
with proper timezone handling.
"""

import logging
import re
from datetime import date, datetime, timedelta
from typing import Any, Optional

import pytz
from pytz.tzinfo import BaseTzInfo

from . import constants

# Formats used by the flat-array feeds (e.g. "2024-01-03 13:00")
FALLBACK_FORMATS = (
    "%Y-%m-%d %H:%M",
    "%Y/%m/%d %H:%M",
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d",
)

ISO_PERIOD_PATTERN = re.compile(
    r"^P(?:(?P<years>\d+)Y)?(?:(?P<months>\d+)M)?(?:(?P<weeks>\d+)W)?(?:(?P<days>\d+)D)?$"
)


class DateUtils:
    """Utilities for date and timezone handling."""

    def __init__(
        self,
        timezone_str: str = constants.DEFAULT_TIMEZONE,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize date utilities.

        Args:
            timezone_str: Timezone used for naive timestamps and display
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.timezone_str = timezone_str
        self.tz = self.parse_timezone(timezone_str)

    @staticmethod
    def parse_timezone(timezone_str: str) -> BaseTzInfo:
        """
        Parse timezone string to pytz timezone object.

        Args:
            timezone_str: Timezone string (e.g., 'America/Los_Angeles', 'UTC')

        Returns:
            pytz timezone object

        Raises:
            ValueError: If timezone is invalid
        """
        try:
            return pytz.timezone(timezone_str)
        except pytz.exceptions.UnknownTimeZoneError:
            raise ValueError(f"Invalid timezone: {timezone_str}")

    def parse_timestamp(self, value: Any) -> Optional[datetime]:
        """
        Parse an upstream timestamp into a timezone-aware datetime.

        Accepts ISO dates and datetimes (with 'Z' or an explicit offset) and
        the space/slash separated formats used by flat-array feeds. Naive
        values are localized to the configured timezone; aware values are
        converted to it.

        Args:
            value: Raw timestamp

        Returns:
            Aware datetime, or None if the value cannot be parsed
        """
        if not isinstance(value, str) or not value.strip():
            return None

        text = value.strip()
        parsed: Optional[datetime] = None

        iso_text = text[:-1] + "+00:00" if text.endswith("Z") else text
        try:
            parsed = datetime.fromisoformat(iso_text)
        except ValueError:
            for fmt in FALLBACK_FORMATS:
                try:
                    parsed = datetime.strptime(text, fmt)
                    break
                except ValueError:
                    continue

        if parsed is None:
            self.logger.debug(f"Unparseable timestamp: {value!r}")
            return None

        if parsed.tzinfo is None:
            return self.tz.localize(parsed)
        return parsed.astimezone(self.tz)

    def now(self) -> datetime:
        """Current instant in the configured timezone."""
        return datetime.now(pytz.UTC).astimezone(self.tz)

    def today(self) -> date:
        """Current date in the configured timezone."""
        return self.now().date()

    @staticmethod
    def period_start(end: date, period: str) -> date:
        """
        Get the start date of an ISO-8601 period ending at ``end``.

        Supports the date components of a duration (``PnYnMnWnD``).

        Args:
            end: Last day of the period
            period: ISO-8601 duration, e.g. 'P7D', 'P1Y', 'P2W'

        Returns:
            First day of the period

        Raises:
            ValueError: If the period is not a supported duration
        """
        match = ISO_PERIOD_PATTERN.match(period or "")
        if not match or not any(match.groupdict().values()):
            raise ValueError(f"Unsupported ISO-8601 period: {period!r}")

        parts = {k: int(v) if v else 0 for k, v in match.groupdict().items()}

        total_months = end.year * 12 + (end.month - 1) - parts["years"] * 12 - parts["months"]
        year, month = divmod(total_months, 12)
        month += 1
        # Clamp to the last valid day of the target month
        day = end.day
        while True:
            try:
                start = date(year, month, day)
                break
            except ValueError:
                day -= 1

        return start - timedelta(weeks=parts["weeks"], days=parts["days"])

    @staticmethod
    def format_short_date(dt: datetime) -> str:
        """Format as en-US short date, e.g. 'Jan 3, 2024'."""
        return f"{dt.strftime('%b')} {dt.day}, {dt.year}"

    @staticmethod
    def format_long_date(dt: datetime) -> str:
        """Format as en-US long date, e.g. 'January 3, 2024'."""
        return f"{dt.strftime('%B')} {dt.day}, {dt.year}"

    @staticmethod
    def format_numeric_date(dt: datetime) -> str:
        """Format as en-US numeric date, e.g. '1/3/2024'."""
        return f"{dt.month}/{dt.day}/{dt.year}"
