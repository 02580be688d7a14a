"""
Data models for reservoir watch.

Contains DTOs for observations, sites, query ranges and presentation data.
"""

from .observation import RawObservation, Observation, Series
from .site import ApiFlavor, SiteProfile, DateRange
from .presentation import (
    SummaryRecord,
    ChartPoint,
    TableRow,
    Projection,
    FeedStatus,
    FeedResult,
)

__all__ = [
    "RawObservation",
    "Observation",
    "Series",
    "ApiFlavor",
    "SiteProfile",
    "DateRange",
    "SummaryRecord",
    "ChartPoint",
    "TableRow",
    "Projection",
    "FeedStatus",
    "FeedResult",
]
