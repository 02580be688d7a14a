"""
Errors raised by the observation source layer.
"""

from typing import Optional


class ObservationSourceError(Exception):
    """Base class for upstream data source failures."""


class FetchError(ObservationSourceError):
    """
    Network or HTTP failure while fetching a feed.

    Carries the HTTP status code when the server answered, or the
    underlying exception when it did not.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        cause: Optional[BaseException] = None,
        timeout: bool = False
    ):
        super().__init__(message)
        self.status_code = status_code
        self.cause = cause
        self.timeout = timeout


class MalformedResponseError(ObservationSourceError):
    """Response body is not JSON or does not have the expected shape."""
