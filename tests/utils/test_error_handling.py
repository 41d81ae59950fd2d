#!/usr/bin/env python3
"""
Tests for Error Handling Utility Module

Tests the three core utilities:
1. log_and_continue() - Continue execution after logging
2. log_and_return_default() - Return default value after logging
3. log_and_raise() - Log and re-raise exception
"""

import logging
from typing import Any
from unittest.mock import MagicMock

import pytest

from traceboard.errors import MalformedRecordError, SourceError
from traceboard.utils.error_handling import log_and_continue, log_and_raise, log_and_return_default


@pytest.fixture
def mock_logger():
    """Create a mock logger for testing log calls."""
    return MagicMock(spec=logging.Logger)


class TestLogAndContinue:
    """Test suite for log_and_continue() function."""

    def test_logs_at_warning_level(self, mock_logger):
        """Test that log_and_continue logs at WARNING level."""
        error = MalformedRecordError("budget must be a finite number")

        log_and_continue(mock_logger, error, {"domain": "businessRequirements_projects"}, "Record parsing")

        mock_logger.warning.assert_called_once()
        message = mock_logger.warning.call_args[0][0]
        assert "Record parsing failed" in message
        assert "budget must be a finite number" in message

    def test_includes_structured_context(self, mock_logger):
        """Test that structured context is included in log extra."""
        context = {"domain": "testCases", "index": 3, "record_id": "t9"}

        log_and_continue(mock_logger, MalformedRecordError("bad"), context, "Record parsing")

        extra = mock_logger.warning.call_args[1]["extra"]
        assert extra["error_type"] == "Record parsing"
        assert extra["exception_class"] == "MalformedRecordError"
        assert extra["context"] == context

    def test_default_error_type(self, mock_logger):
        """Test default error_type parameter is 'Operation'."""
        log_and_continue(mock_logger, ValueError("test error"), {})

        extra = mock_logger.warning.call_args[1]["extra"]
        assert extra["error_type"] == "Operation"

    def test_does_not_raise_exception(self, mock_logger):
        """Test that log_and_continue does NOT raise the exception."""
        log_and_continue(mock_logger, ValueError("test error"), {"item_id": 123}, "Test")
        mock_logger.warning.assert_called_once()


class TestLogAndReturnDefault:
    """Test suite for log_and_return_default() function."""

    def test_returns_default_value(self, mock_logger):
        """Test that it returns the specified default value object."""
        default: list = []

        result = log_and_return_default(mock_logger, SourceError("squads", "offline"), {}, default, "Collection read")

        assert result is default

    def test_returns_different_default_values(self, mock_logger):
        """Test with different default values (None, [], {}, 0)."""
        test_cases: list[Any] = [None, [], {}, 0, "default"]

        for default_value in test_cases:
            result = log_and_return_default(mock_logger, ValueError("error"), {}, default_value)
            assert result == default_value

    def test_includes_structured_context(self, mock_logger):
        """Test that structured context is logged."""
        context = {"domain": "squads"}

        log_and_return_default(mock_logger, SourceError("squads", "offline"), context, [], "Collection read")

        message = mock_logger.warning.call_args[0][0]
        extra = mock_logger.warning.call_args[1]["extra"]
        assert "Collection read failed, returning default value" in message
        assert extra["exception_class"] == "SourceError"
        assert extra["context"] == context


class TestLogAndRaise:
    """Test suite for log_and_raise() function."""

    def test_logs_at_error_level(self, mock_logger):
        """Test that log_and_raise logs at ERROR level with exc_info=True."""
        with pytest.raises(OSError):
            log_and_raise(mock_logger, OSError("disk full"), {"domain": "releases"}, "Collection write")

        mock_logger.error.assert_called_once()
        assert mock_logger.error.call_args[1]["exc_info"] is True

    def test_reraises_same_exception(self, mock_logger):
        """Test that log_and_raise RE-RAISES the exception object."""
        error = OSError("disk full")

        with pytest.raises(OSError) as exc_info:
            log_and_raise(mock_logger, error, {}, "Collection write")

        assert exc_info.value is error
