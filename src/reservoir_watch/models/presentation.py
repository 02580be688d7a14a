"""
Presentation data models.

Contains the shapes handed to rendering collaborators and feed outcomes.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .site import SiteProfile


@dataclass(frozen=True)
class SummaryRecord:
    """Latest observation with derived capacity and staleness."""

    timestamp: datetime
    value: float
    percent_capacity: Optional[float]
    is_stale: bool
    stale_days: int


@dataclass(frozen=True)
class ChartPoint:
    """Chart point (ascending time order)."""

    x: datetime
    y: float


@dataclass(frozen=True)
class TableRow:
    """Table row (descending time order)."""

    date_label: str
    value: float
    percent_capacity: Optional[float] = None
    quality_code: Optional[str] = None


@dataclass(frozen=True)
class Projection:
    """Everything a renderer needs for one feed."""

    summary: Optional[SummaryRecord] = None
    chart_points: List[ChartPoint] = field(default_factory=list)
    table_rows: List[TableRow] = field(default_factory=list)

    @property
    def has_data(self) -> bool:
        return self.summary is not None


class FeedStatus(str, Enum):
    """Terminal state of one feed run."""

    OK = "ok"
    NO_DATA = "no_data"
    ERROR = "error"
    SUPERSEDED = "superseded"  # a newer run for the same feed was started


@dataclass
class FeedResult:
    """Outcome of one fetch-and-render cycle."""

    profile: "SiteProfile"
    status: FeedStatus
    projection: Optional[Projection] = None
    error: Optional[Exception] = None
