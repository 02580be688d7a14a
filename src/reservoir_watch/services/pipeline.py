"""
Feed pipeline service.

Runs one fetch-and-render cycle per feed and owns the per-feed state:
the generation counter and the currently displayed chart.
"""

import logging
import threading
from contextlib import contextmanager
from datetime import datetime
from typing import Iterator, Optional

from ..api import ObservationSourceError
from ..core import DateUtils, LoggerContext
from ..models import DateRange, FeedResult, FeedStatus, Projection, SiteProfile
from ..processing import SeriesProcessor
from ..rendering import ChartHandle, Renderer
from .observation_source import ObservationSource


class ChartSlot:
    """Receives the chart drawn inside FeedContext.chart_slot()."""

    def __init__(self):
        self.chart: Optional[ChartHandle] = None

    def install(self, chart: ChartHandle) -> None:
        if self.chart is not None:
            self.chart.release()
        self.chart = chart


class FeedContext:
    """Mutable state of one feed: run generation and displayed chart."""

    def __init__(self, profile: SiteProfile):
        self.profile = profile
        self.generation = 0
        self.chart: Optional[ChartHandle] = None
        self.render_lock = threading.Lock()
        self._lock = threading.Lock()

    def begin(self) -> int:
        """Start a new run and return its generation token."""
        with self._lock:
            self.generation += 1
            return self.generation

    def is_current(self, token: int) -> bool:
        """True if no newer run was started after ``token``."""
        with self._lock:
            return token == self.generation

    @contextmanager
    def chart_slot(self) -> Iterator[ChartSlot]:
        """
        Replace the displayed chart.

        The previous chart is released on entry. The chart installed in the
        slot becomes the displayed chart on normal exit and is released if
        the block raises.
        """
        with self._lock:
            if self.chart is not None:
                self.chart.release()
                self.chart = None

        slot = ChartSlot()
        try:
            yield slot
        except BaseException:
            if slot.chart is not None:
                slot.chart.release()
            raise

        with self._lock:
            self.chart = slot.chart

    def release(self) -> None:
        """Release the displayed chart, if any."""
        with self.chart_slot():
            pass


class FeedPipeline:
    """Fetch, process and render one feed."""

    def __init__(
        self,
        source: ObservationSource,
        processor: SeriesProcessor,
        renderer: Renderer,
        date_utils: Optional[DateUtils] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize feed pipeline.

        Args:
            source: Observation source adapter
            processor: Series processor
            renderer: Display collaborator
            date_utils: Clock and date helper
            logger: Logger instance
        """
        self.source = source
        self.processor = processor
        self.renderer = renderer
        self.date_utils = date_utils or DateUtils(logger=logger)
        self.logger = logger or logging.getLogger(__name__)

    def run(
        self,
        context: FeedContext,
        date_range: DateRange,
        now: Optional[datetime] = None
    ) -> FeedResult:
        """
        Run one fetch-and-render cycle.

        Results of a run that was superseded by a newer run for the same
        feed are discarded without rendering.

        Args:
            context: Feed state
            date_range: Query range
            now: Reference instant for staleness (defaults to the clock)

        Returns:
            FeedResult describing the outcome
        """
        profile = context.profile
        token = context.begin()
        self.renderer.show_loading(profile, f"Loading {profile.value_label} data...")

        try:
            try:
                with LoggerContext(self.logger, f"fetch for {profile.key} ({date_range})"):
                    raw = self.source.fetch(profile, date_range)

                projection = self.processor.process(raw, profile, now or self.date_utils.now())

                with context.render_lock:
                    if not context.is_current(token):
                        self.logger.info(f"Discarding superseded result for {profile.key}")
                        return FeedResult(profile, FeedStatus.SUPERSEDED, projection=projection)

                    with context.chart_slot() as slot:
                        if not projection.has_data:
                            self.renderer.show_no_data(
                                profile,
                                f"No {profile.value_label} data found for {profile.name} "
                                f"in the selected period."
                            )
                            self.logger.warning(f"No data for {profile.key} in {date_range}")
                            return FeedResult(profile, FeedStatus.NO_DATA, projection=projection)

                        self._render(profile, projection, slot)
            except ObservationSourceError as e:
                return self._render_error(context, token, e)
            except Exception as e:
                # render_lock is already released here; _render_error takes it again
                self.logger.error(f"Unexpected error processing {profile.key}: {e}", exc_info=True)
                return self._render_error(context, token, e)

            summary = projection.summary
            self.logger.info(
                f"{profile.key}: latest {summary.value} {profile.unit_label} "
                f"at {summary.timestamp.isoformat()}"
                + (f", {summary.stale_days} days old" if summary.is_stale else "")
            )
            return FeedResult(profile, FeedStatus.OK, projection=projection)

        finally:
            if context.is_current(token):
                self.renderer.hide_loading(profile)

    def _render(self, profile: SiteProfile, projection: Projection, slot: ChartSlot) -> None:
        summary = projection.summary
        self.renderer.show_summary(profile, summary)
        if summary.percent_capacity is not None:
            self.renderer.show_gauge(profile, summary.percent_capacity)
        slot.install(self.renderer.draw_chart(profile, projection.chart_points))
        self.renderer.show_table(profile, projection.table_rows)

    def _render_error(
        self,
        context: FeedContext,
        token: int,
        error: Exception
    ) -> FeedResult:
        profile = context.profile
        with context.render_lock:
            if not context.is_current(token):
                return FeedResult(profile, FeedStatus.SUPERSEDED, error=error)
            context.release()
            self.renderer.show_error(profile, f"Failed to load {profile.value_label} data: {error}")
        return FeedResult(profile, FeedStatus.ERROR, error=error)
