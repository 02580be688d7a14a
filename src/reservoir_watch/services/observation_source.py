"""
Observation source adapter.

Fetches one site's feed from the matching upstream API and maps it into
raw observations.
"""

import logging
from datetime import date
from typing import Any, List, Optional, Tuple, TYPE_CHECKING

from ..core import DateUtils
from ..models import ApiFlavor, DateRange, RawObservation, SiteProfile

if TYPE_CHECKING:
    from ..api import USGSDailyAPI, CDECRelayAPI


class ObservationSource:
    """Uniform access to feature-collection and flat-array feeds."""

    def __init__(
        self,
        usgs_api: "USGSDailyAPI",
        cdec_api: "CDECRelayAPI",
        date_utils: Optional[DateUtils] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize observation source.

        Args:
            usgs_api: Client for feature-collection sites
            cdec_api: Client for flat-array sites
            date_utils: Date helper (resolves "today" for period ranges)
            logger: Logger instance
        """
        self.usgs_api = usgs_api
        self.cdec_api = cdec_api
        self.date_utils = date_utils or DateUtils(logger=logger)
        self.logger = logger or logging.getLogger(__name__)

    def fetch(self, site: SiteProfile, date_range: DateRange) -> List[RawObservation]:
        """
        Fetch raw observations for a site.

        Args:
            site: Site profile
            date_range: Query range

        Returns:
            Raw observations in feed order (empty when there is no data)

        Raises:
            FetchError: On transport or HTTP failure
            MalformedResponseError: If the body has an unexpected shape
        """
        if site.api_flavor == ApiFlavor.FEATURE_COLLECTION:
            features = self.usgs_api.get_daily_values(
                site_id=site.site_id,
                parameter_code=site.parameter_code,
                time=str(date_range),
            )
            observations = self._from_features(features)
        else:
            start, end = self._resolve_dates(date_range)
            records = self.cdec_api.get_sensor_data(
                station=site.site_id,
                sensor_num=site.parameter_code,
                dur_code=site.duration_code,
                start_date=start.isoformat(),
                end_date=end.isoformat(),
            )
            observations = self._from_records(records)

        self.logger.info(f"Fetched {len(observations)} raw observations for {site.key}")
        return observations

    def _resolve_dates(self, date_range: DateRange) -> Tuple[date, date]:
        """Concrete start/end dates for endpoints that only accept dates."""
        if not date_range.is_period:
            return date_range.start, date_range.end
        end: date = date_range.end or self.date_utils.today()
        return DateUtils.period_start(end, date_range.period), end

    def _from_features(self, features: List[Any]) -> List[RawObservation]:
        observations = []
        for feature in features:
            properties = feature.get("properties") if isinstance(feature, dict) else None
            if not isinstance(properties, dict):
                self.logger.debug(f"Skipping feature without properties: {feature!r}")
                continue
            observations.append(RawObservation(
                timestamp=properties.get("time"),
                value=properties.get("value"),
                quality_code=properties.get("approval_status"),
            ))
        return observations

    def _from_records(self, records: List[Any]) -> List[RawObservation]:
        observations = []
        for record in records:
            if not isinstance(record, dict):
                self.logger.debug(f"Skipping non-object record: {record!r}")
                continue
            observations.append(RawObservation(
                timestamp=record.get("date"),
                value=record.get("value"),
            ))
        return observations
