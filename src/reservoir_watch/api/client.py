"""
Base API client for the public water-data APIs.

Handles HTTP requests, session management, and error handling.
"""

import logging
from typing import Dict, Any, Optional

import requests  # type: ignore

from .errors import FetchError, MalformedResponseError


class APIClient:
    """Base client for a read-only JSON API."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize API client.

        Upstream requests are never retried; a failed request surfaces
        immediately as FetchError.

        Args:
            base_url: Base URL for the API
            timeout: Request timeout in seconds
            logger: Logger instance
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.logger = logger or logging.getLogger(__name__)

        self.session = requests.Session()
        self.session.headers.update({
            "Accept": "application/json"
        })

    def _make_request(
        self,
        method: str,
        endpoint: str,
        **kwargs
    ) -> requests.Response:
        """
        Make HTTP request to API.

        Args:
            method: HTTP method
            endpoint: API endpoint (without base URL)
            **kwargs: Additional arguments for requests

        Returns:
            Response object

        Raises:
            FetchError: On timeout, connection failure or non-success status
        """
        url = f"{self.base_url}/{endpoint.lstrip('/')}"

        self.logger.debug(f"{method} {url} params={kwargs.get('params')}")

        try:
            response = self.session.request(
                method=method,
                url=url,
                timeout=self.timeout,
                **kwargs
            )
            response.raise_for_status()
            return response

        except requests.exceptions.Timeout as e:
            self.logger.error(f"API request timed out after {self.timeout}s: {method} {url}")
            raise FetchError(
                f"Request timed out after {self.timeout}s", cause=e, timeout=True
            ) from e

        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            details = e.response.text[:200] if e.response is not None else ""
            self.logger.error(f"API request failed: {method} {url} - HTTP {status}")
            message = f"HTTP error! Status: {status}"
            if details:
                message += f". Details: {details}"
            raise FetchError(message, status_code=status, cause=e) from e

        except requests.exceptions.RequestException as e:
            self.logger.error(f"API request failed: {method} {url} - {e}")
            raise FetchError(f"Network error: {e}", cause=e) from e

    def get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Make GET request.

        Args:
            endpoint: API endpoint
            params: Query parameters

        Returns:
            Decoded JSON body

        Raises:
            FetchError: On transport or HTTP failure
            MalformedResponseError: If the body is not valid JSON
        """
        response = self._make_request("GET", endpoint, params=params)
        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponseError(f"Invalid JSON from {endpoint}: {e}") from e

    def close(self) -> None:
        """Close the session."""
        self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
