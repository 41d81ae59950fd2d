"""
Centralized logging configuration with structured JSON output.

Provides:
- JSON structured logging for log shipping
- Human-readable console logging for the refresh CLI
- Context fields (domain, record id, counts) attached through `extra`
- Optional file output

Usage:
    from traceboard.core.logging_config import get_logger

    logger = get_logger(__name__)
    logger.info("Snapshot built", extra={"extra_fields": {"domains": 9}})
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

# Third-party loggers that are chatty at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "hpack", "asyncio")


class JSONFormatter(logging.Formatter):
    """
    Format log records as one JSON object per line.

    Context passed as ``extra={"extra_fields": {...}}`` (see log_with_context)
    is merged into the top-level object.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON string"""
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "extra_fields"):
            log_data.update(record.extra_fields)

        # Structured context from utils.error_handling
        for key in ("error_type", "exception_class", "context"):
            if hasattr(record, key):
                log_data[key] = getattr(record, key)

        return json.dumps(log_data, default=str)


class ContextFormatter(logging.Formatter):
    """
    Human-readable formatter for console output.

    Level names are colour coded when writing to a terminal.
    """

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with color coding"""
        levelname = record.levelname
        if sys.stderr.isatty():
            color = self.COLORS.get(levelname, "")
            record = logging.makeLogRecord(record.__dict__)
            record.levelname = f"{color}{levelname}{self.RESET}"

        return super().format(record)


def setup_logging(
    level: str = "INFO",
    log_file: Path | None = None,
    json_output: bool = False,
) -> None:
    """
    Configure application-wide logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for log output (always JSON)
        json_output: If True, use JSON on the console too

    Example:
        # Interactive refresh
        setup_logging(level="DEBUG")

        # Scheduled refresh shipping logs
        setup_logging(level="INFO", log_file=Path(".tmp/logs/traceboard.log"), json_output=True)
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    # Snapshots go to stdout, so logs go to stderr
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)

    if json_output:
        console_handler.setFormatter(JSONFormatter())
    else:
        console_handler.setFormatter(
            ContextFormatter(
                fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )

    root_logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(log_level)
        file_handler.setFormatter(JSONFormatter())

        root_logger.addHandler(file_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for the specified module.

    Args:
        name: Module name (use __name__ in calling module)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def log_with_context(logger: logging.Logger, level: str, message: str, **context: Any) -> None:
    """
    Log message with additional context fields.

    Args:
        logger: Logger instance
        level: Log level (debug, info, warning, error, critical)
        message: Log message
        **context: Additional context fields (key-value pairs)

    Example:
        log_with_context(
            logger,
            "info",
            "Hierarchy validated",
            orphaned_scenarios=2,
            orphaned_test_cases=5,
        )
    """
    log_func = getattr(logger, level.lower())
    log_func(message, extra={"extra_fields": context})
