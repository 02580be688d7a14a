"""
Tests for date utilities and query ranges.
"""

import pytest  # type: ignore
from datetime import date, datetime

import pytz

from src.reservoir_watch.core import DateUtils
from src.reservoir_watch.models import DateRange


class TestDateUtils:
    """Test cases for DateUtils."""

    @pytest.fixture
    def utils(self):
        return DateUtils("America/Los_Angeles")

    def test_invalid_timezone(self):
        """Test that an unknown timezone is rejected."""
        with pytest.raises(ValueError):
            DateUtils("Nowhere/Special")

    def test_date_only_is_local_midnight(self, utils):
        """Test that a bare date is local midnight."""
        parsed = utils.parse_timestamp("2024-07-04")

        assert parsed.date() == date(2024, 7, 4)
        assert parsed.hour == 0
        assert parsed.utcoffset().total_seconds() == -7 * 3600

    def test_utc_timestamp_converted(self, utils):
        """Test that a UTC timestamp is converted to local time."""
        parsed = utils.parse_timestamp("2024-01-02T08:00:00Z")

        assert parsed.astimezone(pytz.UTC) == pytz.UTC.localize(datetime(2024, 1, 2, 8))
        assert parsed.hour == 0

    def test_unparseable(self, utils):
        """Test that unparseable timestamps give None."""
        assert utils.parse_timestamp("yesterday") is None
        assert utils.parse_timestamp(None) is None

    @pytest.mark.parametrize("period,expected", [
        ("P7D", date(2024, 3, 24)),
        ("P2W", date(2024, 3, 17)),
        ("P1M", date(2024, 2, 29)),
        ("P1Y", date(2023, 3, 31)),
        ("P1Y1M1D", date(2023, 2, 27)),
    ])
    def test_period_start(self, period, expected):
        """Test period start dates, clamping month ends."""
        assert DateUtils.period_start(date(2024, 3, 31), period) == expected

    @pytest.mark.parametrize("period", ["", "P", "7D", "PT6H", "P1.5D"])
    def test_unsupported_period(self, period):
        """Test that unsupported periods are rejected."""
        with pytest.raises(ValueError):
            DateUtils.period_start(date(2024, 3, 31), period)

    def test_formats(self):
        """Test the short, long and numeric date formats."""
        moment = datetime(2024, 1, 3, 15, 30)

        assert DateUtils.format_short_date(moment) == "Jan 3, 2024"
        assert DateUtils.format_long_date(moment) == "January 3, 2024"
        assert DateUtils.format_numeric_date(moment) == "1/3/2024"


class TestDateRange:
    """Test cases for DateRange."""

    def test_start_after_end(self):
        """Test that a start after the end is rejected."""
        with pytest.raises(ValueError):
            DateRange(start=date(2024, 2, 1), end=date(2024, 1, 1))

    def test_requires_dates_or_period(self):
        """Test that a range needs both dates or a period."""
        with pytest.raises(ValueError):
            DateRange(start=date(2024, 2, 1))

    def test_string_forms(self):
        """Test the string form of explicit and period ranges."""
        assert str(DateRange(start=date(2024, 1, 1), end=date(2024, 1, 31))) == "2024-01-01/2024-01-31"
        assert str(DateRange(period="P7D")) == "P7D"

    def test_last_days(self):
        """Test a range ending today."""
        date_range = DateRange.last_days(365, date(2024, 12, 31))

        assert date_range.start == date(2024, 1, 1)
        assert date_range.end == date(2024, 12, 31)
