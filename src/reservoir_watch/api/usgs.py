"""
USGS Water Data OGC API operations.

Handles retrieval of daily values as GeoJSON feature collections.
"""

import logging
from typing import Any, Dict, List, Optional

from .client import APIClient
from .errors import MalformedResponseError


class USGSDailyAPI(APIClient):
    """Daily-values collection of the USGS OGC API."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30,
        logger: Optional[logging.Logger] = None
    ):
        super().__init__(base_url=base_url, timeout=timeout, logger=logger)

    def get_daily_values(
        self,
        site_id: str,
        parameter_code: str,
        time: str
    ) -> List[Dict[str, Any]]:
        """
        Get daily values for a monitoring location.

        Args:
            site_id: USGS site number (without the 'USGS-' agency prefix)
            parameter_code: USGS parameter code (e.g. '00054' storage)
            time: ISO-8601 interval 'start/end' or duration (e.g. 'P7D')

        Returns:
            List of feature objects (empty if the feed has no data)

        Raises:
            FetchError: On transport or HTTP failure
            MalformedResponseError: If the body is not a feature collection
        """
        self.logger.info(f"Fetching USGS daily values for {site_id} ({parameter_code}), time={time}")
        params = {
            "f": "json",
            "monitoring_location_id": f"USGS-{site_id}",
            "parameter_code": parameter_code,
            "time": time,
        }

        result = self.get("/collections/daily/items", params=params)

        if not isinstance(result, dict):
            raise MalformedResponseError(
                f"Expected a feature collection object, got {type(result).__name__}"
            )

        features = result.get("features")
        if features is None:
            return []
        if not isinstance(features, list):
            raise MalformedResponseError(
                f"Expected 'features' to be a list, got {type(features).__name__}"
            )

        self.logger.debug(f"Retrieved {len(features)} features for {site_id}")
        return features
