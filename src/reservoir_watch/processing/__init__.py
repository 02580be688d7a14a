"""
Data processing module for reservoir watch.

Provides normalization, downsampling, policy and projection of series data.
"""

import logging
from datetime import datetime
from typing import Iterable, Optional

from ..core import constants, DateUtils
from ..models import RawObservation, Series, SiteProfile, Projection
from .normalizer import SeriesNormalizer
from .downsampler import downsample
from .projector import project
from . import policy


class SeriesProcessor:
    """
    Unified processor combining normalization, downsampling and projection.

    This class provides a convenient interface to all processing operations.
    """

    def __init__(
        self,
        date_utils: Optional[DateUtils] = None,
        stale_threshold: int = constants.STALE_THRESHOLD_DAYS,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize series processor.

        Args:
            date_utils: Timestamp parser/formatter
            stale_threshold: Days after which data is stale
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.normalizer = SeriesNormalizer(date_utils, logger)
        self.stale_threshold = stale_threshold

    def normalize(self, raw: Iterable[RawObservation]) -> Series:
        """Normalize raw observations into an ascending series."""
        return self.normalizer.normalize(raw)

    def process(
        self,
        raw: Iterable[RawObservation],
        profile: SiteProfile,
        now: datetime
    ) -> Projection:
        """
        Run normalization, optional downsampling and projection.

        Args:
            raw: Raw observations from the source adapter
            profile: Site profile (capacity and point cap)
            now: Reference instant for staleness

        Returns:
            Projection for the renderer
        """
        series = self.normalize(raw)
        if profile.max_points is not None and len(series) > profile.max_points:
            self.logger.debug(
                f"Downsampling {profile.key} from {len(series)} to {profile.max_points} points"
            )
            series = downsample(series, profile.max_points)
        return project(series, profile, now, self.stale_threshold)


__all__ = [
    "SeriesNormalizer",
    "SeriesProcessor",
    "downsample",
    "project",
    "policy",
]
