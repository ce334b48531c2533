"""Tests for unified logging format.

Target format: 2026-01-06T14:05:52Z [source] LEVEL message
"""

from __future__ import annotations

import io
import logging
import re
import sys
from datetime import datetime

import pytest

from orgmatch.logging_config import TRACE, ISO8601Formatter, configure_logging, resolve_level


def make_record(level: int = logging.INFO, msg: str = "Test message", args: tuple = ()) -> logging.LogRecord:
    return logging.LogRecord(
        name="test",
        level=level,
        pathname="",
        lineno=0,
        msg=msg,
        args=args,
        exc_info=None,
    )


@pytest.fixture(autouse=True)
def restore_root_logger():
    """configure_logging replaces root handlers; put them back afterwards."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestISO8601Formatter:
    """Test the custom ISO8601 formatter produces correct output."""

    def test_format_matches_pattern(self):
        """Verify output matches: 2026-01-06T14:05:52Z [source] LEVEL message"""
        output = ISO8601Formatter(source="test").format(make_record())

        pattern = r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z \[test\] INFO Test message$"
        assert re.match(pattern, output), f"Output '{output}' doesn't match expected format"

    def test_timestamp_is_utc(self):
        """Verify timestamp is in UTC (ends with Z)."""
        output = ISO8601Formatter(source="coverage").format(make_record())
        timestamp_str = output.split(" ")[0]

        assert timestamp_str.endswith("Z"), f"Timestamp '{timestamp_str}' should end with Z"
        parsed = datetime.fromisoformat(timestamp_str.replace("Z", "+00:00"))
        assert parsed is not None

    def test_different_log_levels(self):
        """Verify all log levels, TRACE included, are formatted correctly."""
        formatter = ISO8601Formatter(source="test")

        for level, level_name in [
            (TRACE, "TRACE"),
            (logging.DEBUG, "DEBUG"),
            (logging.INFO, "INFO"),
            (logging.WARNING, "WARNING"),
            (logging.ERROR, "ERROR"),
        ]:
            output = formatter.format(make_record(level=level, msg="Message"))
            assert f"] {level_name} " in output, f"Level {level_name} not found in output"

    def test_default_source(self):
        assert "[orgmatch]" in ISO8601Formatter().format(make_record())

    def test_message_formatting_with_args(self):
        output = ISO8601Formatter(source="test").format(
            make_record(msg="Resolved %s to %s", args=("tom@vendor.io", "tbecker@techco.com"))
        )
        assert "Resolved tom@vendor.io to tbecker@techco.com" in output

    def test_exception_included(self):
        formatter = ISO8601Formatter(source="test")
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = make_record(level=logging.ERROR, msg="Failed")
            record.exc_info = sys.exc_info()
        output = formatter.format(record)
        assert "Failed\nTraceback" in output
        assert "RuntimeError: boom" in output


class TestResolveLevel:
    """Test LOG_LEVEL handling."""

    @pytest.mark.parametrize(
        "name,expected",
        [("TRACE", TRACE), ("debug", logging.DEBUG), ("INFO", logging.INFO), ("WARNING", logging.WARNING), ("", logging.INFO)],
    )
    def test_names(self, name, expected):
        assert resolve_level(name) == expected

    def test_env_var(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "TRACE")
        assert resolve_level() == TRACE

    def test_debug_flag(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        assert resolve_level(debug=True) == logging.DEBUG

    def test_explicit_trace_wins_over_debug_flag(self):
        assert resolve_level("TRACE", debug=True) == TRACE


class TestConfigureLogging:
    """Test the configure_logging function."""

    def test_configure_logging_returns_logger(self):
        logger = configure_logging(source="test")
        assert isinstance(logger, logging.Logger)

    def test_configure_logging_sets_level_from_debug_flag(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        logger = configure_logging(source="test", debug=True)
        assert logger.level == logging.DEBUG

    def test_configure_logging_default_level_is_info(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        logger = configure_logging(source="test", debug=False)
        assert logger.level == logging.INFO

    def test_single_handler(self):
        configure_logging(source="test")
        configure_logging(source="test")
        assert len(logging.getLogger().handlers) == 1


class TestIntegration:
    def test_end_to_end_log_output(self, monkeypatch):
        """Test complete logging flow produces expected output."""
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        configure_logging(source="integration_test", debug=False)
        logger = logging.getLogger("test")

        # Replace handler to capture output
        stream = io.StringIO()
        handler = logging.StreamHandler(stream)
        handler.setFormatter(ISO8601Formatter(source="integration_test"))
        root = logging.getLogger()
        root.handlers.clear()
        root.addHandler(handler)

        logger.info("Test integration message")
        logger.log(TRACE, "hidden at INFO")

        output = stream.getvalue()
        pattern = r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z \[integration_test\] INFO Test integration message\n$"
        assert re.match(pattern, output), f"Output '{output}' doesn't match expected format"
