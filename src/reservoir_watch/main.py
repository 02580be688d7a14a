"""
Main entry point for reservoir watch.

Fetches every configured feed concurrently and renders the results.
"""

import sys
from concurrent.futures import Future, ThreadPoolExecutor
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from .core import Config, DateUtils, setup_logger, LoggerContext
from .api import USGSDailyAPI, CDECRelayAPI
from .models import DateRange, FeedResult, FeedStatus, SiteProfile
from .processing import SeriesProcessor
from .rendering import ConsoleRenderer, Renderer
from .services import FeedContext, FeedPipeline, ObservationSource


class WatchApp:
    """Dashboard application for the configured water-data feeds."""

    def __init__(
        self,
        config_file: Optional[str] = None,
        renderer: Optional[Renderer] = None,
        log_level: str = "INFO"
    ):
        """
        Initialize application.

        Args:
            config_file: Path to configuration file
            renderer: Display collaborator (defaults to console output)
            log_level: Logging level
        """
        self.config = Config(config_file)

        self.logger = setup_logger(log_level=log_level)
        self.logger.info("=" * 60)
        self.logger.info("Reservoir Watch")
        self.logger.info("=" * 60)
        self.logger.info(f"Configuration: {self.config}")

        self.date_utils = DateUtils(self.config.timezone, logger=self.logger)
        self.renderer = renderer or ConsoleRenderer(logger=self.logger)
        self.profiles: List[SiteProfile] = self.config.site_profiles
        self.contexts: Dict[str, FeedContext] = {
            profile.key: FeedContext(profile) for profile in self.profiles
        }

        self.usgs_api: Optional[USGSDailyAPI] = None
        self.cdec_api: Optional[CDECRelayAPI] = None
        self.pipeline: Optional[FeedPipeline] = None

    def initialize_components(self) -> None:
        """Initialize API clients and the feed pipeline."""
        self.logger.info("Initializing components...")

        self.usgs_api = USGSDailyAPI(
            base_url=self.config.usgs_base_url,
            timeout=self.config.api_timeout,
            logger=self.logger
        )
        self.cdec_api = CDECRelayAPI(
            base_url=self.config.cdec_base_url,
            timeout=self.config.api_timeout,
            logger=self.logger
        )

        source = ObservationSource(
            usgs_api=self.usgs_api,
            cdec_api=self.cdec_api,
            date_utils=self.date_utils,
            logger=self.logger
        )
        processor = SeriesProcessor(
            date_utils=self.date_utils,
            stale_threshold=self.config.stale_threshold_days,
            logger=self.logger
        )
        self.pipeline = FeedPipeline(
            source=source,
            processor=processor,
            renderer=self.renderer,
            date_utils=self.date_utils,
            logger=self.logger
        )

        self.logger.info("All components initialized successfully")

    def default_range(self) -> DateRange:
        """Range covering the configured number of days up to today."""
        return DateRange.last_days(self.config.default_range_days, self.date_utils.today())

    def select_profiles(self, keys: Optional[Sequence[str]] = None) -> List[SiteProfile]:
        """
        Get profiles for the given site keys (all sites if None).

        Raises:
            ValueError: If a key is not configured
        """
        if not keys:
            return list(self.profiles)
        unknown = [k for k in keys if k not in self.contexts]
        if unknown:
            raise ValueError(
                f"Unknown site(s): {', '.join(unknown)}. "
                f"Available: {', '.join(self.contexts)}"
            )
        return [p for p in self.profiles if p.key in keys]

    def refresh(
        self,
        date_range: Optional[DateRange] = None,
        keys: Optional[Sequence[str]] = None,
        now: Optional[datetime] = None
    ) -> List[FeedResult]:
        """
        Run every selected feed concurrently.

        Args:
            date_range: Query range (defaults to default_range())
            keys: Site keys to refresh (all if None)
            now: Reference instant for staleness

        Returns:
            Feed results in site order
        """
        if self.pipeline is None:
            self.initialize_components()

        date_range = date_range or self.default_range()
        profiles = self.select_profiles(keys)

        with LoggerContext(self.logger, f"refresh of {len(profiles)} feeds for {date_range}"):
            with ThreadPoolExecutor(max_workers=len(profiles), thread_name_prefix="feed") as pool:
                futures = [
                    (p, pool.submit(self.pipeline.run, self.contexts[p.key], date_range, now))
                    for p in profiles
                ]
                results = [self._collect(profile, future) for profile, future in futures]

        for result in results:
            self.logger.info(f"{result.profile.key}: {result.status.value}")
        return results

    def _collect(self, profile: SiteProfile, future: Future) -> FeedResult:
        try:
            return future.result()
        except Exception as e:
            self.logger.error(f"Feed {profile.key} failed: {e}", exc_info=True)
            return FeedResult(profile, FeedStatus.ERROR, error=e)

    def close(self) -> None:
        """Release charts and close API sessions."""
        for context in self.contexts.values():
            context.release()
        if self.usgs_api:
            self.usgs_api.close()
        if self.cdec_api:
            self.cdec_api.close()


def parse_date(value: str) -> datetime:
    return datetime.strptime(value, "%Y-%m-%d")


def main(argv: Optional[Sequence[str]] = None):
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Reservoir storage, discharge and outflow dashboard"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to configuration file"
    )
    parser.add_argument(
        "--start",
        type=str,
        default=None,
        help="Start date (YYYY-MM-DD). Default: one year ago"
    )
    parser.add_argument(
        "--end",
        type=str,
        default=None,
        help="End date (YYYY-MM-DD). Default: today"
    )
    parser.add_argument(
        "--period",
        type=str,
        default=None,
        help="ISO-8601 period ending today (e.g. P7D, P1M, P1Y) instead of --start/--end"
    )
    parser.add_argument(
        "--site",
        action="append",
        default=None,
        help="Site key to fetch (repeatable). Default: all configured sites"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )

    args = parser.parse_args(argv)

    if args.period and (args.start or args.end):
        print("Use either --period or --start/--end, not both")
        sys.exit(2)

    try:
        app = WatchApp(config_file=args.config, log_level=args.log_level)
    except (FileNotFoundError, ValueError) as e:
        print(f"Configuration error: {e}")
        sys.exit(2)

    date_range = None
    try:
        if args.period:
            DateUtils.period_start(app.date_utils.today(), args.period)
            date_range = DateRange(period=args.period, end=app.date_utils.today())
        elif args.start or args.end:
            default = app.default_range()
            start = parse_date(args.start).date() if args.start else default.start
            end = parse_date(args.end).date() if args.end else default.end
            date_range = DateRange(start=start, end=end)
        profiles = app.select_profiles(args.site)
    except ValueError as e:
        print(f"Invalid arguments: {e}")
        sys.exit(2)

    try:
        results = app.refresh(date_range=date_range, keys=args.site)
        if isinstance(app.renderer, ConsoleRenderer):
            app.renderer.flush(profiles)
    except Exception as e:
        print(f"Application failed: {e}")
        sys.exit(1)
    finally:
        app.close()

    if any(r.status == FeedStatus.ERROR for r in results):
        sys.exit(1)


if __name__ == "__main__":
    main()
