"""Tests for logging configuration utilities."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

from scrollstory.core.utils.logging import (
    StructuredJSONFormatter,
    configure_logging,
    get_logger,
)


def _record(msg: str = "Test message") -> logging.LogRecord:
    record = logging.LogRecord(
        name="test.logger",
        level=logging.INFO,
        pathname="/path/to/file.py",
        lineno=42,
        msg=msg,
        args=(),
        exc_info=None,
    )
    record.funcName = "test_function"
    return record


class TestStructuredJSONFormatter:
    """Test suite for StructuredJSONFormatter."""

    def test_basic_log_format(self) -> None:
        data = json.loads(StructuredJSONFormatter().format(_record()))
        assert data["level"] == "INFO"
        assert data["message"] == "Test message"
        assert "timestamp" in data
        assert data["context"]["logger_name"] == "test.logger"
        assert data["context"]["function"] == "test_function"
        assert data["context"]["line"] == 42

    def test_extra_fields_in_context(self) -> None:
        record = _record()
        record.section_id = "intro"
        data = json.loads(StructuredJSONFormatter().format(record))
        assert data["context"]["section_id"] == "intro"

    def test_exception_info(self) -> None:
        try:
            raise ValueError("boom")
        except ValueError:
            record = logging.LogRecord(
                "t", logging.ERROR, __file__, 1, "failed", (), sys.exc_info()
            )
        data = json.loads(StructuredJSONFormatter().format(record))
        assert data["context"]["error_type"] == "ValueError"
        assert data["context"]["error_message"] == "boom"


class TestConfigureLogging:
    """Tests for configure_logging and get_logger."""

    def test_file_output(self, tmp_path: Path) -> None:
        log_file = tmp_path / "scroll.jsonl"
        configure_logging(level="debug", filename=str(log_file), structured=True)
        logging.getLogger("scrollstory.test").debug("hello")
        for handler in logging.getLogger().handlers:
            handler.flush()
        line = log_file.read_text().strip().splitlines()[-1]
        assert json.loads(line)["message"] == "hello"
        configure_logging(level="WARNING")

    def test_get_logger_plain(self) -> None:
        assert isinstance(get_logger("scrollstory.x"), logging.Logger)

    def test_get_logger_with_context(self) -> None:
        adapter = get_logger("scrollstory.x", section_id="intro")
        assert isinstance(adapter, logging.LoggerAdapter)
        assert adapter.extra == {"section_id": "intro"}
