import json
import logging
import re
from io import StringIO

import pytest

from lx_lsp_launcher.logging import (
    JsonFormatter,
    configure_logging,
    get_logger,
    log_with_data,
)

ANSI_ESCAPE = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")


def parse(output: str) -> dict:
    return json.loads(ANSI_ESCAPE.sub("", output.strip()))


def test_format_json_log():
    """Test JSON log formatting"""
    formatter = JsonFormatter()
    record = logging.LogRecord(
        "test", logging.INFO, "test.py", 10, "Test message", (), None
    )

    data = parse(formatter.format(record))

    assert data["level"] == "INFO"
    assert data["msg"] == "Test message"
    assert data["logger"] == "test"


def test_format_json_log_event_dict():
    """Dict messages are emitted as JSON objects"""
    formatter = JsonFormatter()
    record = logging.LogRecord(
        "test", logging.DEBUG, "test.py", 10, {"event": "binary_found", "path": "/x"}, (), None
    )

    data = parse(formatter.format(record))
    assert data["msg"] == {"event": "binary_found", "path": "/x"}


@pytest.mark.parametrize(
    "level,expected_color",
    [
        (logging.DEBUG, "\033[34m"),  # BLUE
        (logging.INFO, "\033[32m"),  # GREEN
        (logging.WARNING, "\033[33m"),  # YELLOW
        (logging.ERROR, "\033[31m\033[1m"),  # RED+BOLD
        (logging.CRITICAL, "\033[35m\033[1m"),  # MAGENTA+BOLD
    ],
)
def test_format_json_log_colors(level, expected_color):
    """Test log level color coding"""
    formatter = JsonFormatter()
    record = logging.LogRecord("test", level, "test.py", 10, "Test message", (), None)

    output = formatter.format(record)
    assert output.startswith(expected_color)
    assert output.endswith("\033[0m")


def test_log_with_data():
    """Test structured logging with data"""
    logger = logging.getLogger("test_log_with_data")
    logger.setLevel(logging.INFO)

    class TestHandler(logging.Handler):
        def __init__(self):
            super().__init__()
            self.records = []

        def emit(self, record):
            self.records.append(record)

    handler = TestHandler()
    logger.addHandler(handler)

    test_data = {"key": "value"}
    log_with_data(logger, logging.INFO, "Test message", test_data)
    log_with_data(logger, logging.INFO, "No data")

    assert len(handler.records) == 2
    assert handler.records[0].data == test_data
    assert not hasattr(handler.records[1], "data")


def test_log_with_data_json_structure():
    """Test structured logging produces valid JSON"""
    logger = logging.getLogger("test_log_with_data_json")
    logger.setLevel(logging.INFO)

    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)

    test_data = {"key": "value", "nested": {"foo": "bar"}}
    log_with_data(logger, logging.INFO, "Test message", test_data)

    data = parse(stream.getvalue())
    assert "ts" in data
    assert data["level"] == "INFO"
    assert data["msg"] == "Test message"
    assert data["data"] == test_data


def test_get_logger():
    """Test logger retrieval"""
    assert get_logger("test_module").name == "lx_lsp_launcher.test_module"
    assert get_logger("lx_lsp_launcher.resolver").name == "lx_lsp_launcher.resolver"


def test_configure_logging():
    """Test logging configuration"""
    configure_logging()
    configure_logging()
    logger = logging.getLogger("lx_lsp_launcher")

    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], logging.StreamHandler)
    assert not logger.propagate
