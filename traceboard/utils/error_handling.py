"""
Error Handling Utility Module

Reusable error handling patterns for the snapshot pipeline. Every failure the
dashboard can survive is logged with structured context and then absorbed;
only write failures are re-raised.

1. log_and_continue() - Log error and skip the current item (malformed records)
2. log_and_return_default() - Log error and return a default (unreadable collections)
3. log_and_raise() - Log error with context and re-raise (failed writes)
"""

import logging
from typing import Any, TypeVar

T = TypeVar("T")


def log_and_continue(
    logger: logging.Logger,
    error: Exception,
    context: dict[str, Any],
    error_type: str = "Operation",
) -> None:
    """
    Log an error with structured context and continue execution gracefully.

    Use this for per-record failures that should not stop a batch.

    Args:
        logger: Logger instance from logging.getLogger(__name__)
        error: The caught exception
        context: Structured data about what failed (domain, record id, ...)
        error_type: Human-readable description of the operation

    Example:
        for raw in records:
            try:
                projects.append(BusinessProject.from_json(raw))
            except MalformedRecordError as e:
                log_and_continue(logger, e, {"domain": "businessRequirements_projects"}, "Record parsing")
                continue
    """
    logger.warning(
        f"{error_type} failed: {error}",
        extra={
            "error_type": error_type,
            "exception_class": error.__class__.__name__,
            "context": context,
        },
    )


def log_and_return_default(
    logger: logging.Logger,
    error: Exception,
    context: dict[str, Any],
    default_value: T,
    error_type: str = "Operation",
) -> T:
    """
    Log an error and return a default value.

    Args:
        logger: Logger instance
        error: The caught exception
        context: Structured data about what failed
        default_value: Value to return on error ([], DashboardSnapshot.empty(), ...)
        error_type: Human-readable description

    Returns:
        default_value

    Example:
        try:
            records = await repository.read()
        except SourceError as e:
            return log_and_return_default(logger, e, {"domain": e.domain}, [], "Collection read")
    """
    logger.warning(
        f"{error_type} failed, returning default value: {error}",
        extra={
            "error_type": error_type,
            "exception_class": error.__class__.__name__,
            "context": context,
        },
    )
    return default_value


def log_and_raise(
    logger: logging.Logger,
    error: Exception,
    context: dict[str, Any],
    error_type: str = "Operation",
) -> None:
    """
    Log an error with context and re-raise it.

    Used where the caller must learn about the failure, e.g. a collection
    write that did not reach disk.

    Args:
        logger: Logger instance
        error: The caught exception
        context: Structured data about what failed
        error_type: Human-readable description

    Raises:
        The original exception after logging
    """
    logger.error(
        f"{error_type} failed critically: {error}",
        exc_info=True,
        extra={
            "error_type": error_type,
            "exception_class": error.__class__.__name__,
            "context": context,
        },
    )
    raise error
