"""
Presentation projection module.

Maps a normalized series to the summary, chart and table shapes.
"""

from datetime import datetime

from ..core import constants, DateUtils
from ..models import (
    Series,
    SiteProfile,
    SummaryRecord,
    ChartPoint,
    TableRow,
    Projection,
)
from . import policy


def project(
    series: Series,
    profile: SiteProfile,
    now: datetime,
    stale_threshold: int = constants.STALE_THRESHOLD_DAYS
) -> Projection:
    """
    Project a series into presentation data.

    Args:
        series: Normalized (optionally downsampled) series
        profile: Site the series belongs to
        now: Reference instant for staleness
        stale_threshold: Days after which the latest observation is stale

    Returns:
        Projection; empty (no summary, no points, no rows) for an empty series
    """
    latest = series.latest
    if latest is None:
        return Projection()

    days = policy.stale_days(latest.timestamp, now)
    summary = SummaryRecord(
        timestamp=latest.timestamp,
        value=latest.value,
        percent_capacity=policy.percent_capacity(latest.value, profile.capacity),
        is_stale=policy.is_stale(days, stale_threshold),
        stale_days=days,
    )

    chart_points = [ChartPoint(x=o.timestamp, y=o.value) for o in series]

    table_rows = [
        TableRow(
            date_label=DateUtils.format_short_date(o.timestamp),
            value=o.value,
            percent_capacity=policy.percent_capacity(o.value, profile.capacity),
            quality_code=o.quality_code,
        )
        for o in reversed(series.observations)
    ]

    return Projection(summary=summary, chart_points=chart_points, table_rows=table_rows)
