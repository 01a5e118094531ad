"""Tests for the logger helpers.

Covers:
- JSONFormatter output structure
- configure_logging level / format switching
- log_trace emission
"""

import json
import logging

import pytest

from src.core.settings import settings_from_dict
from src.core.trace.trace_context import TraceContext
from src.observability.logger import JSONFormatter, configure_logging, get_logger, log_trace


def _settings(**observability: object):
    return settings_from_dict(
        {
            "splitter": {"type": "delimiter"},
            "archive": {},
            "observability": dict(observability),
        }
    )


@pytest.fixture()
def restore_root_logging():
    root = logging.getLogger()
    level = root.level
    formatters = [(h, h.formatter) for h in root.handlers]
    yield root
    root.setLevel(level)
    for handler, formatter in formatters:
        handler.setFormatter(formatter)


# ── JSONFormatter ────────────────────────────────────────────────────


class TestJSONFormatter:
    """Verify JSONFormatter produces valid JSON with required fields."""

    def _make_record(
        self, msg: str = "hello", level: int = logging.INFO, **extra: object
    ) -> logging.LogRecord:
        record = logging.LogRecord(
            name="test",
            level=level,
            pathname="test.py",
            lineno=1,
            msg=msg,
            args=(),
            exc_info=None,
        )
        for k, v in extra.items():
            setattr(record, k, v)
        return record

    def test_required_keys(self) -> None:
        obj = json.loads(JSONFormatter().format(self._make_record()))
        for key in ("timestamp", "level", "logger", "message"):
            assert key in obj, f"missing key: {key}"

    def test_message_and_level(self) -> None:
        obj = json.loads(JSONFormatter().format(self._make_record("hi", logging.WARNING)))
        assert obj["message"] == "hi"
        assert obj["level"] == "WARNING"

    def test_extra_fields_merged(self) -> None:
        record = self._make_record(delimiter="###", record_count=3)
        obj = json.loads(JSONFormatter().format(record))
        assert obj["delimiter"] == "###"
        assert obj["record_count"] == 3

    def test_non_serialisable_extra_converted(self) -> None:
        obj = json.loads(JSONFormatter().format(self._make_record(custom_obj=object())))
        assert isinstance(obj["custom_obj"], str)

    def test_single_line_output(self) -> None:
        line = JSONFormatter().format(self._make_record("no\nnewlines\nplease"))
        assert "\n" not in line

    def test_exception_included(self) -> None:
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            import sys

            record = logging.LogRecord("t", logging.ERROR, "t.py", 1, "failed", (), sys.exc_info())
        obj = json.loads(JSONFormatter().format(record))
        assert "RuntimeError: boom" in obj["exception"]


# ── configure_logging ────────────────────────────────────────────────


class TestConfigureLogging:
    def test_get_logger_returns_named_logger(self) -> None:
        assert get_logger("code-splitter.test").name == "code-splitter.test"

    def test_level_applied(self, restore_root_logging: logging.Logger) -> None:
        configure_logging(_settings(log_level="WARNING"))
        assert restore_root_logging.level == logging.WARNING

    def test_json_format_installs_json_formatter(self, restore_root_logging: logging.Logger) -> None:
        configure_logging(_settings(log_format="json"))
        assert restore_root_logging.handlers
        assert all(isinstance(h.formatter, JSONFormatter) for h in restore_root_logging.handlers)

    def test_text_format_is_default(self, restore_root_logging: logging.Logger) -> None:
        configure_logging(_settings())
        assert not any(isinstance(h.formatter, JSONFormatter) for h in restore_root_logging.handlers)


# ── log_trace ────────────────────────────────────────────────────────


class TestLogTrace:
    def test_emits_debug_record_with_trace(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = logging.getLogger("code-splitter.trace-test")
        trace = TraceContext(trace_type="package")
        trace.record_stage("package", {"bytes": 10}, elapsed_ms=1.0)

        with caplog.at_level(logging.DEBUG, logger="code-splitter.trace-test"):
            log_trace(logger, trace)

        assert trace.finished_at is not None
        record = caplog.records[-1]
        assert record.levelno == logging.DEBUG
        assert "package trace" in record.getMessage()
        assert record.trace["stages"][0]["stage"] == "package"
