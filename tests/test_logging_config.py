"""
Unit-Tests für die Logging-Konfiguration (run_history.core.logging_config).
"""

import json
import logging

from run_history.core.logging_config import JsonFormatter, setup_logging


def test_json_formatter_fields():
    record = logging.LogRecord("run_history.test", logging.WARNING, __file__, 1, "Retry %d", (2,), None)
    data = json.loads(JsonFormatter().format(record))
    assert data["level"] == "WARNING"
    assert data["logger"] == "run_history.test"
    assert data["message"] == "Retry 2"
    assert "timestamp" in data
    assert "exception" not in data


def test_json_formatter_includes_exception():
    try:
        raise ValueError("kaputt")
    except ValueError:
        import sys
        record = logging.LogRecord("x", logging.ERROR, __file__, 1, "fehler", (), sys.exc_info())
    data = json.loads(JsonFormatter().format(record))
    assert "ValueError: kaputt" in data["exception"]


def test_setup_logging_sets_level_and_json():
    root = logging.getLogger()
    handler = logging.StreamHandler()
    root.addHandler(handler)
    original_level = root.level
    try:
        setup_logging("debug", log_json=True)
        assert root.level == logging.DEBUG
        assert isinstance(handler.formatter, JsonFormatter)
    finally:
        root.removeHandler(handler)
        root.setLevel(original_level)
