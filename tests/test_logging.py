"""Tests for structured logging configuration."""

import json
import logging
import sys

import pytest

from geniesugar.logging_config import (
    JsonFormatter,
    StructuredLogger,
    TextFormatter,
    correlation_id_ctx,
    get_logger,
    setup_logging,
)


def _record(msg="Test message", level=logging.INFO, extra_fields=None, exc_info=None):
    record = logging.LogRecord(
        name="test.logger",
        level=level,
        pathname="test.py",
        lineno=10,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )
    if extra_fields:
        record.extra_fields = extra_fields
    return record


class TestJsonFormatter:
    """Tests for JSON log formatting."""

    def test_json_format_basic(self):
        formatter = JsonFormatter(service_name="test-service")

        parsed = json.loads(formatter.format(_record()))

        assert parsed["level"] == "INFO"
        assert parsed["service"] == "test-service"
        assert parsed["message"] == "Test message"
        assert parsed["logger"] == "test.logger"
        assert "timestamp" in parsed
        assert "correlation_id" not in parsed

    def test_json_format_with_correlation_id(self):
        formatter = JsonFormatter()
        token = correlation_id_ctx.set("test-correlation-123")
        try:
            parsed = json.loads(formatter.format(_record()))
            assert parsed["correlation_id"] == "test-correlation-123"
        finally:
            correlation_id_ctx.reset(token)

    def test_json_format_merges_extra_fields(self):
        formatter = JsonFormatter()

        parsed = json.loads(
            formatter.format(_record(extra_fields={"user_id": "abc", "attempted": 3}))
        )

        assert parsed["user_id"] == "abc"
        assert parsed["attempted"] == 3

    def test_json_format_error_includes_location(self):
        formatter = JsonFormatter()

        parsed = json.loads(formatter.format(_record(level=logging.ERROR)))

        assert parsed["location"]["line"] == 10

    def test_json_format_includes_exception(self):
        formatter = JsonFormatter()
        try:
            raise ValueError("boom")
        except ValueError:
            record = _record(level=logging.ERROR, exc_info=sys.exc_info())

        parsed = json.loads(formatter.format(record))

        assert "ValueError: boom" in parsed["exception"]


class TestTextFormatter:
    """Tests for human-readable formatting."""

    def test_text_format_layout(self):
        formatter = TextFormatter(service_name="test-service")

        output = formatter.format(_record())

        assert " - test-service - INFO - [-] - Test message" in output

    def test_text_format_appends_extra_fields(self):
        formatter = TextFormatter()

        output = formatter.format(_record(extra_fields={"user_id": "abc"}))

        assert output.endswith("Test message user_id=abc")


class TestSetupLogging:
    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_json_handler_installed(self):
        setup_logging(log_format="json", log_level="DEBUG")
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert isinstance(root.handlers[0].formatter, JsonFormatter)

    def test_text_handler_installed(self):
        setup_logging(log_format="text", log_level="WARNING")
        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert isinstance(root.handlers[0].formatter, TextFormatter)

    def test_unknown_level_falls_back_to_info(self):
        setup_logging(log_level="chatty")
        assert logging.getLogger().level == logging.INFO

    def test_noisy_loggers_quieted(self):
        setup_logging()
        assert logging.getLogger("httpx").level == logging.WARNING


class TestStructuredLogger:
    def test_get_logger_returns_structured_logger(self):
        logger = get_logger("geniesugar.test")
        assert isinstance(logger, StructuredLogger)
        assert logger.name == "geniesugar.test"

    def test_keyword_fields_attached_to_record(self, caplog):
        logger = get_logger("geniesugar.test")
        with caplog.at_level(logging.INFO, logger="geniesugar.test"):
            logger.info("Glucose alert dispatched", user_id="abc", attempted=2)

        record = caplog.records[-1]
        assert record.getMessage() == "Glucose alert dispatched"
        assert record.extra_fields == {"user_id": "abc", "attempted": 2}

    def test_exception_attaches_traceback(self, caplog):
        logger = get_logger("geniesugar.test")
        with caplog.at_level(logging.ERROR, logger="geniesugar.test"):
            try:
                raise RuntimeError("boom")
            except RuntimeError:
                logger.exception("Alert check failed", user_id="abc")

        record = caplog.records[-1]
        assert record.levelno == logging.ERROR
        assert record.exc_info is not None
