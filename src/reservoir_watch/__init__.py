"""
Reservoir Watch

This package fetches public hydrological time series (reservoir storage,
creek discharge, reservoir outflow) and prepares them for display as a
summary, gauge, chart and table.
"""

__version__ = "0.1.0"
__description__ = "Reservoir storage, discharge and outflow dashboard pipeline"


def __getattr__(name):
    """Lazy import to avoid importing dependencies when not needed."""
    if name == "WatchApp":
        from .main import WatchApp
        return WatchApp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "WatchApp",
]
