"""
Configuration module for reservoir watch.

Loads configuration from JSON file and environment variables.
"""

import copy
import json
import os
from typing import Dict, Any, List, Optional
from pathlib import Path

import pytz

from . import constants
from ..models.site import SiteProfile


DEFAULT_CONFIG: Dict[str, Any] = {
    "api": {
        "usgs_base_url": constants.USGS_API_BASE_URL,
        "cdec_base_url": constants.CDEC_RELAY_BASE_URL,
        "timeout": constants.DEFAULT_TIMEOUT,
    },
    "processing": {
        "timezone": constants.DEFAULT_TIMEZONE,
        "stale_threshold_days": constants.STALE_THRESHOLD_DAYS,
        "default_range_days": constants.DEFAULT_RANGE_DAYS,
    },
    "sites": constants.DEFAULT_SITES,
}


class Config:
    """Configuration manager for the application."""

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to configuration JSON file. If None, uses CONFIG_FILE env var
                        or defaults to 'config.json'. Only an explicitly given file
                        must exist; otherwise built-in defaults are used.
        """
        self.explicit = config_file is not None or bool(os.getenv("CONFIG_FILE"))
        self.config_file = config_file or os.getenv("CONFIG_FILE", "config.json")
        self.config: Dict[str, Any] = copy.deepcopy(DEFAULT_CONFIG)
        self._load_config()
        self._override_from_env()
        self._validate_config()

    def _load_config(self) -> None:
        """Load configuration from JSON file and merge it over the defaults."""
        config_path = Path(self.config_file)
        if not config_path.exists():
            if self.explicit:
                raise FileNotFoundError(f"Configuration file not found: {self.config_file}")
            return

        with open(config_path, "r", encoding="utf-8") as f:
            loaded = json.load(f)

        if not isinstance(loaded, dict):
            raise ValueError(f"Configuration file must contain a JSON object: {self.config_file}")

        for section, values in loaded.items():
            if isinstance(self.config.get(section), dict):
                if not isinstance(values, dict):
                    raise ValueError(f"Configuration section '{section}' must be an object")
                self.config[section].update(values)
            else:
                self.config[section] = values

    def _override_from_env(self) -> None:
        """Override configuration with environment variables."""
        if os.getenv("USGS_API_BASE_URL"):
            self.config["api"]["usgs_base_url"] = os.getenv("USGS_API_BASE_URL")

        if os.getenv("CDEC_RELAY_BASE_URL"):
            self.config["api"]["cdec_base_url"] = os.getenv("CDEC_RELAY_BASE_URL")

        if os.getenv("API_TIMEOUT"):
            try:
                self.config["api"]["timeout"] = float(os.getenv("API_TIMEOUT"))
            except ValueError:
                raise ValueError(f"Invalid API_TIMEOUT: {os.getenv('API_TIMEOUT')}")

        if os.getenv("TIMEZONE"):
            self.config["processing"]["timezone"] = os.getenv("TIMEZONE")

    def _validate_config(self) -> None:
        """Validate configuration values."""
        required_config = {
            "api": ["usgs_base_url", "cdec_base_url", "timeout"],
            "processing": ["timezone", "stale_threshold_days", "default_range_days"],
        }

        missing_keys = []
        for section, keys in required_config.items():
            for key in keys:
                if self.get(f"{section}.{key}") is None:
                    missing_keys.append(f"{section}.{key}")

        if missing_keys:
            raise ValueError(
                f"Missing required configuration keys: {', '.join(missing_keys)}"
            )

        self._coerce("api.timeout", float)
        self._coerce("processing.stale_threshold_days", int)
        self._coerce("processing.default_range_days", int)

        if self.api_timeout <= 0:
            raise ValueError(f"api.timeout must be positive, got {self.api_timeout}")

        if self.timezone not in pytz.all_timezones_set:
            raise ValueError(f"Invalid timezone: {self.timezone}")

        if self.stale_threshold_days < 0:
            raise ValueError("processing.stale_threshold_days must not be negative")

        sites = self.config.get("sites")
        if not isinstance(sites, list) or not sites:
            raise ValueError("Configuration must define a non-empty 'sites' list")

        # Builds every profile once so bad site entries fail at load time
        keys = [profile.key for profile in self.site_profiles]
        duplicates = sorted({k for k in keys if keys.count(k) > 1})
        if duplicates:
            raise ValueError(f"Duplicate site keys: {', '.join(duplicates)}")

    def _coerce(self, key: str, cast) -> None:
        """Convert a numeric setting in place, raising ValueError when it cannot be."""
        section, name = key.split(".")
        value = self.config[section][name]
        try:
            self.config[section][name] = cast(value)
        except (TypeError, ValueError):
            raise ValueError(f"{key} must be a number, got {value!r}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key (supports dot notation).

        Args:
            key: Configuration key (e.g., 'api.usgs_base_url')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        keys = key.split(".")
        value = self.config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value

    @property
    def usgs_base_url(self) -> str:
        """Get USGS OGC API base URL."""
        return self.get("api.usgs_base_url", constants.USGS_API_BASE_URL)

    @property
    def cdec_base_url(self) -> str:
        """Get CDEC relay base URL."""
        return self.get("api.cdec_base_url", constants.CDEC_RELAY_BASE_URL)

    @property
    def api_timeout(self) -> float:
        """Get API timeout in seconds."""
        return self.get("api.timeout", constants.DEFAULT_TIMEOUT)

    @property
    def timezone(self) -> str:
        """Get processing timezone."""
        return self.get("processing.timezone", constants.DEFAULT_TIMEZONE)

    @property
    def stale_threshold_days(self) -> int:
        """Get number of days after which data is considered stale."""
        return int(self.get("processing.stale_threshold_days", constants.STALE_THRESHOLD_DAYS))

    @property
    def default_range_days(self) -> int:
        """Get length of the default query range in days."""
        return int(self.get("processing.default_range_days", constants.DEFAULT_RANGE_DAYS))

    @property
    def site_profiles(self) -> List[SiteProfile]:
        """
        Get configured site profiles.

        Raises:
            ValueError: If a site entry is invalid
        """
        return [SiteProfile.from_dict(site) for site in self.config.get("sites", [])]

    def __repr__(self) -> str:
        """String representation of config."""
        return f"Config(file={self.config_file}, sites={len(self.config.get('sites', []))})"
