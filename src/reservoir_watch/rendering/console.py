"""
Plain-text renderer.

Keeps one output region per feed, like the element groups of a dashboard
page, and writes all regions to a stream on flush.
"""

import logging
import sys
import threading
from typing import Dict, List, Optional, TextIO

from ..core import DateUtils
from ..models import ApiFlavor, SiteProfile, SummaryRecord, ChartPoint, TableRow
from .base import ChartHandle, Renderer


def format_number(value: float) -> str:
    """Format with thousands separators and at most three decimals."""
    text = f"{value:,.3f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


class TextChart(ChartHandle):
    """Chart stand-in holding the plotted points."""

    def __init__(self, label: str, points: List[ChartPoint], color: str):
        super().__init__()
        self.label = label
        self.points = list(points)
        self.color = color

    def _release(self) -> None:
        self.points = []

    def describe(self) -> str:
        if not self.points:
            return f"Chart: {self.label} (empty)"
        first = DateUtils.format_short_date(self.points[0].x)
        last = DateUtils.format_short_date(self.points[-1].x)
        low = min(p.y for p in self.points)
        high = max(p.y for p in self.points)
        return (
            f"Chart: {self.label}, {len(self.points)} points, {first} to {last}, "
            f"range {format_number(low)} to {format_number(high)}"
        )


class ConsoleRenderer(Renderer):
    """Render feed results as text blocks."""

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize console renderer.

        Args:
            stream: Output stream (defaults to stdout)
            logger: Logger instance
        """
        self.stream = stream or sys.stdout
        self.logger = logger or logging.getLogger(__name__)
        self.regions: Dict[str, List[str]] = {}
        self.loading: Dict[str, bool] = {}
        self._lock = threading.Lock()

    def _write(self, profile: SiteProfile, *lines: str) -> None:
        with self._lock:
            self.regions.setdefault(profile.key, []).extend(lines)

    def show_loading(self, profile: SiteProfile, message: str) -> None:
        with self._lock:
            self.regions[profile.key] = []
            self.loading[profile.key] = True
        self.logger.info(f"[{profile.key}] {message}")

    def hide_loading(self, profile: SiteProfile) -> None:
        with self._lock:
            self.loading[profile.key] = False

    def show_summary(self, profile: SiteProfile, summary: SummaryRecord) -> None:
        lines = []
        if summary.is_stale:
            lines.append(
                f"Advisory: Latest data is {summary.stale_days} days old "
                f"(last update: {DateUtils.format_numeric_date(summary.timestamp)})"
            )

        sentence = (
            f"As of {DateUtils.format_long_date(summary.timestamp)}, "
            f"{profile.name} {profile.value_label} is "
            f"{format_number(summary.value)} {profile.unit_label}".rstrip()
        )
        if summary.percent_capacity is not None:
            sentence += f", which is {summary.percent_capacity:.1f}% of its capacity"
        lines.append(sentence + ".")
        self._write(profile, *lines)

    def show_gauge(self, profile: SiteProfile, percent: float) -> None:
        width = 20
        filled = max(0, min(width, round(percent / 100 * width)))
        self._write(profile, f"E [{'#' * filled}{'.' * (width - filled)}] F  {percent:.1f}%")

    def draw_chart(self, profile: SiteProfile, points: List[ChartPoint]) -> ChartHandle:
        label = f"{profile.name} {profile.value_label.title()} ({profile.unit_label})"
        chart = TextChart(label, points, profile.chart_color)
        self._write(profile, chart.describe())
        return chart

    def show_table(self, profile: SiteProfile, rows: List[TableRow]) -> None:
        headers = ["Date", f"{profile.value_label.title()} ({profile.unit_label})"]
        with_capacity = profile.has_capacity
        with_status = profile.api_flavor == ApiFlavor.FEATURE_COLLECTION
        if with_capacity:
            headers.append("% Capacity")
        if with_status:
            headers.append("Status")

        body = []
        for row in rows:
            cells = [row.date_label, format_number(row.value)]
            if with_capacity:
                cells.append(
                    f"{row.percent_capacity:.1f}%" if row.percent_capacity is not None else ""
                )
            if with_status:
                cells.append(row.quality_code or "")
            body.append(cells)

        widths = [
            max(len(str(line[i])) for line in [headers] + body)
            for i in range(len(headers))
        ]
        lines = ["  ".join(h.ljust(w) for h, w in zip(headers, widths)).rstrip()]
        lines.append("  ".join("-" * w for w in widths))
        for cells in body:
            lines.append("  ".join(c.ljust(w) for c, w in zip(cells, widths)).rstrip())
        self._write(profile, *lines)

    def show_no_data(self, profile: SiteProfile, message: str) -> None:
        self._write(profile, message)

    def show_error(self, profile: SiteProfile, message: str) -> None:
        self._write(profile, f"ERROR: {message}")

    def flush(self, profiles: List[SiteProfile]) -> None:
        """Write every region in the given order."""
        with self._lock:
            for profile in profiles:
                title = f"{profile.name} ({profile.value_label})"
                self.stream.write(f"{title}\n{'=' * len(title)}\n")
                for line in self.regions.get(profile.key, []):
                    self.stream.write(line + "\n")
                self.stream.write("\n")
            self.stream.flush()
