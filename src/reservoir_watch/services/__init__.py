"""
Business logic services for reservoir watch.

Services orchestrate API operations, processing and rendering per feed.
"""

from .observation_source import ObservationSource
from .pipeline import ChartSlot, FeedContext, FeedPipeline

__all__ = [
    "ObservationSource",
    "ChartSlot",
    "FeedContext",
    "FeedPipeline",
]
