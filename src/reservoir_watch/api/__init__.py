"""
API layer for the public water-data services.

Provides low-level clients for the USGS OGC API and the CDEC relay.
"""

from .client import APIClient
from .usgs import USGSDailyAPI
from .cdec import CDECRelayAPI
from .errors import ObservationSourceError, FetchError, MalformedResponseError

__all__ = [
    "APIClient",
    "USGSDailyAPI",
    "CDECRelayAPI",
    "ObservationSourceError",
    "FetchError",
    "MalformedResponseError",
]
