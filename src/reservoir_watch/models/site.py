"""
Site and query range models.

Contains the static per-site configuration and the date range of a fetch.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Any, Dict, Optional


class ApiFlavor(str, Enum):
    """Shape of the upstream time-series API."""

    FEATURE_COLLECTION = "feature_collection"  # USGS OGC API
    FLAT_ARRAY = "flat_array"  # CDEC through the relay


@dataclass(frozen=True)
class SiteProfile:
    """Static configuration of one monitored site."""

    key: str
    site_id: str
    parameter_code: str
    api_flavor: ApiFlavor
    unit_label: str = ""
    capacity: Optional[float] = None  # only for reservoir storage sites
    display_name: str = ""
    value_label: str = "value"
    max_points: Optional[int] = None
    duration_code: str = "D"  # flat-array feeds only
    chart_color: str = "rgba(75, 192, 192, 1)"

    @property
    def has_capacity(self) -> bool:
        return self.capacity is not None

    @property
    def name(self) -> str:
        return self.display_name or self.key

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SiteProfile":
        """
        Build a profile from a configuration mapping.

        Args:
            data: Site mapping (see constants.DEFAULT_SITES)

        Returns:
            SiteProfile instance

        Raises:
            ValueError: If a required key is missing or a value is invalid
        """
        if not isinstance(data, dict):
            raise ValueError(f"Site configuration must be an object, got {data!r}")

        missing = [k for k in ("key", "site_id", "parameter_code", "api_flavor") if not data.get(k)]
        if missing:
            raise ValueError(f"Site configuration missing keys: {', '.join(missing)}")

        try:
            flavor = ApiFlavor(data["api_flavor"])
        except ValueError:
            raise ValueError(
                f"Unknown api_flavor '{data['api_flavor']}' for site {data['key']}"
            )

        capacity = data.get("capacity")
        if capacity is not None:
            try:
                capacity = float(capacity)
            except (TypeError, ValueError):
                raise ValueError(f"Capacity must be a number for site {data['key']}")
            if capacity <= 0:
                raise ValueError(f"Capacity must be positive for site {data['key']}")

        max_points = data.get("max_points")
        if max_points is not None:
            try:
                max_points = int(max_points)
            except (TypeError, ValueError):
                raise ValueError(f"max_points must be an integer for site {data['key']}")
            if max_points < 1:
                raise ValueError(f"max_points must be >= 1 for site {data['key']}")

        return cls(
            key=data["key"],
            site_id=str(data["site_id"]),
            parameter_code=str(data["parameter_code"]),
            api_flavor=flavor,
            unit_label=data.get("unit_label", ""),
            capacity=capacity,
            display_name=data.get("display_name", ""),
            value_label=data.get("value_label", "value"),
            max_points=max_points,
            duration_code=data.get("duration_code", "D"),
            chart_color=data.get("chart_color", cls.chart_color),
        )


@dataclass(frozen=True)
class DateRange:
    """
    Query range, either explicit start/end dates or an ISO-8601 period.

    A period range still carries its ``end`` so flat-array feeds, which
    only accept dates, can resolve it.
    """

    start: Optional[date] = None
    end: Optional[date] = None
    period: Optional[str] = None

    def __post_init__(self):
        if self.period is None:
            if self.start is None or self.end is None:
                raise ValueError("DateRange needs start and end, or a period")
            if self.start > self.end:
                raise ValueError(f"Start date {self.start} is after end date {self.end}")

    @classmethod
    def last_days(cls, days: int, today: date) -> "DateRange":
        """Range covering ``days`` days back from ``today``."""
        return cls(start=today - timedelta(days=days), end=today)

    @property
    def is_period(self) -> bool:
        return self.period is not None

    def __str__(self) -> str:
        if self.period is not None:
            return self.period
        return f"{self.start.isoformat()}/{self.end.isoformat()}"
