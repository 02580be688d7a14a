"""
CDEC sensor data operations through the relay service.

The relay forwards the query to the California Data Exchange Center and
returns its JSON array unchanged.
"""

import logging
from typing import Any, Dict, List, Optional

from .client import APIClient


class CDECRelayAPI(APIClient):
    """Sensor data endpoint of the CDEC relay."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30,
        logger: Optional[logging.Logger] = None
    ):
        super().__init__(base_url=base_url, timeout=timeout, logger=logger)

    def get_sensor_data(
        self,
        station: str,
        sensor_num: str,
        dur_code: str,
        start_date: str,
        end_date: str
    ) -> List[Dict[str, Any]]:
        """
        Get sensor readings for a station.

        Args:
            station: CDEC station ID (e.g. 'CAS')
            sensor_num: Sensor number (e.g. '23' reservoir outflow)
            dur_code: Duration code ('H' hourly, 'D' daily, 'E' event)
            start_date: Start date (YYYY-MM-DD)
            end_date: End date (YYYY-MM-DD)

        Returns:
            List of {date, value} records (empty if the feed has no data)

        Raises:
            FetchError: On transport or HTTP failure
            MalformedResponseError: If the body is not valid JSON
        """
        self.logger.info(
            f"Fetching CDEC sensor {sensor_num} for {station} ({dur_code}) "
            f"{start_date} to {end_date}"
        )
        params = {
            "Stations": station,
            "SensorNums": sensor_num,
            "dur_code": dur_code,
            "Start": start_date,
            "End": end_date,
        }

        result = self.get("/api/cdec-data", params=params)

        # A non-array body means "no data" for this endpoint
        if not isinstance(result, list):
            self.logger.warning(f"Unexpected CDEC response type: {type(result).__name__}")
            return []

        self.logger.debug(f"Retrieved {len(result)} records for {station}")
        return result
