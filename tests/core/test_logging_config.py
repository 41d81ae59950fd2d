"""
Tests for logging configuration
"""

import json
import logging

import pytest

from traceboard.core.logging_config import (
    NOISY_LOGGERS,
    ContextFormatter,
    JSONFormatter,
    get_logger,
    log_with_context,
    setup_logging,
)


def _record(message="Snapshot built", **attributes):
    record = logging.LogRecord(
        name="traceboard.aggregation",
        level=logging.WARNING,
        pathname=__file__,
        lineno=10,
        msg=message,
        args=(),
        exc_info=None,
    )
    for key, value in attributes.items():
        setattr(record, key, value)
    return record


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


class TestJSONFormatter:
    """Tests for JSONFormatter"""

    def test_basic_fields(self):
        data = json.loads(JSONFormatter().format(_record()))
        assert data["level"] == "WARNING"
        assert data["logger"] == "traceboard.aggregation"
        assert data["message"] == "Snapshot built"
        assert data["timestamp"].endswith("Z")

    def test_extra_fields_merged(self):
        data = json.loads(JSONFormatter().format(_record(extra_fields={"coverage_percentage": 67})))
        assert data["coverage_percentage"] == 67

    def test_error_handling_context(self):
        record = _record(error_type="Record parsing", exception_class="MalformedRecordError", context={"domain": "squads"})
        data = json.loads(JSONFormatter().format(record))
        assert data["error_type"] == "Record parsing"
        assert data["context"] == {"domain": "squads"}


class TestContextFormatter:
    """Tests for ContextFormatter"""

    def test_formats_message(self):
        formatter = ContextFormatter(fmt="%(levelname)s | %(message)s")
        assert formatter.format(_record()).endswith("| Snapshot built")


class TestSetupLogging:
    """Tests for setup_logging()"""

    def test_console_handler_level(self, restore_root_logger):
        setup_logging(level="DEBUG")
        assert restore_root_logger.level == logging.DEBUG
        assert len(restore_root_logger.handlers) == 1

    def test_json_console(self, restore_root_logger):
        setup_logging(json_output=True)
        assert isinstance(restore_root_logger.handlers[0].formatter, JSONFormatter)

    def test_log_file(self, restore_root_logger, tmp_path):
        log_file = tmp_path / "logs" / "traceboard.log"
        setup_logging(log_file=log_file)
        assert log_file.parent.exists()
        assert len(restore_root_logger.handlers) == 2
        for handler in restore_root_logger.handlers[1:]:
            handler.close()

    def test_quietens_http_loggers(self, restore_root_logger):
        setup_logging(level="DEBUG")
        for name in NOISY_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING


class TestLogWithContext:
    """Tests for log_with_context()"""

    def test_passes_extra_fields(self, caplog):
        logger = get_logger("traceboard.test")
        with caplog.at_level(logging.INFO, logger="traceboard.test"):
            log_with_context(logger, "info", "Hierarchy validated", orphaned_scenarios=2)
        assert caplog.records[0].extra_fields == {"orphaned_scenarios": 2}
