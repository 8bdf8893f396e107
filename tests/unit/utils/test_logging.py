"""Tests for logging utilities."""

from __future__ import annotations

import json
import logging
import sys

import pytest

from calface.core.utils.logging import StructuredJSONFormatter, get_logger, log_performance


class TestStructuredJSONFormatter:
    """Test JSON log formatting."""

    def test_basic_record(self):
        record = logging.LogRecord("calface.test", logging.INFO, __file__, 12, "hello %s", ("dial",), None)
        payload = json.loads(StructuredJSONFormatter().format(record))
        assert payload["level"] == "INFO"
        assert payload["message"] == "hello dial"
        assert payload["context"]["logger_name"] == "calface.test"
        assert payload["context"]["line"] == 12

    def test_extra_fields_in_context(self):
        record = logging.LogRecord("calface.test", logging.INFO, __file__, 1, "msg", (), None)
        record.generation = 4
        payload = json.loads(StructuredJSONFormatter().format(record))
        assert payload["context"]["generation"] == 4

    def test_exception_info(self):
        try:
            raise ValueError("bad band")
        except ValueError:
            record = logging.LogRecord(
                "calface.test", logging.ERROR, __file__, 1, "failed", (), sys.exc_info()
            )
        payload = json.loads(StructuredJSONFormatter().format(record))
        assert payload["context"]["error_type"] == "ValueError"
        assert payload["context"]["error_message"] == "bad band"
        assert "Traceback" in payload["context"]["stack_trace"]


class TestGetLogger:
    """Test logger construction."""

    def test_plain_logger(self):
        assert isinstance(get_logger("calface.test"), logging.Logger)

    def test_adapter_with_context(self):
        adapter = get_logger("calface.test", generation=3)
        assert isinstance(adapter, logging.LoggerAdapter)
        assert adapter.extra == {"generation": 3}


class TestLogPerformance:
    """Test the timing decorator."""

    def test_logs_duration_and_returns_value(self, caplog: pytest.LogCaptureFixture):
        @log_performance
        def double(x: int) -> int:
            return 2 * x

        with caplog.at_level(logging.DEBUG, logger=__name__):
            assert double(4) == 8

        assert "double took" in caplog.text
