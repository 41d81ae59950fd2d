"""
Core Infrastructure - Configuration and Logging

Usage:
    from traceboard.core import get_config, get_logger

    logger = get_logger(__name__)
    dashboard = get_config().get_dashboard_config()
"""

from ..secure_config import (
    ConfigurationError,
    DashboardConfig,
    SecureConfig,
    get_config,
    validate_config_on_startup,
)
from .logging_config import get_logger, log_with_context, setup_logging

__all__ = [
    # Configuration
    "get_config",
    "validate_config_on_startup",
    "ConfigurationError",
    "DashboardConfig",
    "SecureConfig",
    # Logging
    "get_logger",
    "log_with_context",
    "setup_logging",
]
