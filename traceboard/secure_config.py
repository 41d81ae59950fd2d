"""
Secure Configuration Management

Provides centralized, validated configuration for the traceability engine.
Replaces scattered os.getenv() calls with strict validation and fail-fast behavior.

Usage:
    from traceboard.secure_config import get_config

    config = get_config()
    dashboard = config.get_dashboard_config()
    print(dashboard.data_dir)
    print(dashboard.overview_url)

Environment variables:
    TRACEBOARD_DATA_DIR         Directory holding one JSON file per domain collection
    TRACEBOARD_OVERVIEW_URL     Optional dashboard overview endpoint (http/https)
    TRACEBOARD_REFRESH_SECONDS  Refresh interval for --watch mode (default: 30)
    TRACEBOARD_HTTP_TIMEOUT     Overview request timeout in seconds (default: 30)
    TRACEBOARD_LOG_LEVEL        Logging level name (default: INFO)

Raises:
    ConfigurationError: If configuration is invalid
"""

import os
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlparse

from dotenv import load_dotenv

DEFAULT_DATA_DIR = ".tmp/traceboard"
DEFAULT_REFRESH_SECONDS = 30
DEFAULT_HTTP_TIMEOUT = 30.0
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigurationError(Exception):
    """Raised when configuration is missing or invalid."""

    pass


@dataclass
class DashboardConfig:
    """
    Validated dashboard engine configuration.

    Attributes:
        data_dir: Directory with the per-domain collection files
        overview_url: Optional overview endpoint used as an alternative data source
        refresh_interval_seconds: Seconds between refreshes in watch mode
        http_timeout_seconds: Timeout for the overview request
        log_level: Logging level name
    """

    data_dir: Path
    overview_url: str | None = None
    refresh_interval_seconds: int = DEFAULT_REFRESH_SECONDS
    http_timeout_seconds: float = DEFAULT_HTTP_TIMEOUT
    log_level: str = "INFO"

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self):
        """
        Validate dashboard configuration.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        if not str(self.data_dir).strip():
            raise ConfigurationError("TRACEBOARD_DATA_DIR must not be empty")

        if self.overview_url:
            parsed = urlparse(self.overview_url)
            if parsed.scheme not in ("http", "https") or not parsed.netloc:
                raise ConfigurationError(
                    f"TRACEBOARD_OVERVIEW_URL must be an http(s) URL: {self.overview_url}"
                )

            placeholders = ["example.com", "your_host", "placeholder", "replace_me"]
            if any(placeholder in self.overview_url.lower() for placeholder in placeholders):
                raise ConfigurationError("TRACEBOARD_OVERVIEW_URL contains a placeholder value")

        if self.refresh_interval_seconds < 1:
            raise ConfigurationError(
                f"TRACEBOARD_REFRESH_SECONDS must be at least 1, got {self.refresh_interval_seconds}"
            )

        if self.http_timeout_seconds <= 0:
            raise ConfigurationError(
                f"TRACEBOARD_HTTP_TIMEOUT must be positive, got {self.http_timeout_seconds}"
            )

        if self.log_level.upper() not in LOG_LEVELS:
            raise ConfigurationError(f"TRACEBOARD_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from e


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from e


class SecureConfig:
    """
    Centralized secure configuration manager.

    Loads and validates configuration from environment variables (and .env).
    """

    def __init__(self):
        """Initialize configuration (loads .env file)."""
        load_dotenv()

    def get_dashboard_config(self, data_dir: str | Path | None = None) -> DashboardConfig:
        """
        Get validated dashboard configuration.

        Args:
            data_dir: Optional directory (overrides TRACEBOARD_DATA_DIR)

        Returns:
            DashboardConfig: Validated configuration

        Raises:
            ConfigurationError: If configuration is invalid
        """
        directory = data_dir or os.getenv("TRACEBOARD_DATA_DIR") or DEFAULT_DATA_DIR

        return DashboardConfig(
            data_dir=Path(directory),
            overview_url=os.getenv("TRACEBOARD_OVERVIEW_URL") or None,
            refresh_interval_seconds=_int_env("TRACEBOARD_REFRESH_SECONDS", DEFAULT_REFRESH_SECONDS),
            http_timeout_seconds=_float_env("TRACEBOARD_HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT),
            log_level=(os.getenv("TRACEBOARD_LOG_LEVEL") or "INFO").upper(),
        )


_config_instance = None


def get_config() -> SecureConfig:
    """
    Get the global configuration instance (singleton pattern).

    Returns:
        SecureConfig: The configuration manager
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = SecureConfig()
    return _config_instance


def validate_config_on_startup() -> DashboardConfig:
    """
    Validate configuration at application startup.

    Returns:
        The validated DashboardConfig

    Raises:
        ConfigurationError: If configuration is invalid
    """
    return get_config().get_dashboard_config()
