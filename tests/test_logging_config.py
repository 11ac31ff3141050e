# /tests/test_logging_config.py

import json
import logging
import sys

from app.core.logging_config import JSONFormatter


def _record(msg, exc_info=None, **extra):
    record = logging.LogRecord("app.test", logging.WARNING, __file__, 10, msg, None, exc_info)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_emits_single_line_json_with_extras():
    line = JSONFormatter().format(_record("Roster fan-out failed", report_id=12, class_id=3))

    payload = json.loads(line)
    assert "\n" not in line
    assert payload["level"] == "WARNING"
    assert payload["logger"] == "app.test"
    assert payload["msg"] == "Roster fan-out failed"
    assert payload["extra_context"] == {"report_id": 12, "class_id": 3}
    assert payload["error_type"] is None


def test_formatter_captures_exception_details():
    try:
        raise RuntimeError("store unavailable")
    except RuntimeError:
        record = _record("Database error", exc_info=sys.exc_info())

    payload = json.loads(JSONFormatter().format(record))
    assert payload["error_type"] == "RuntimeError"
    assert payload["error"] == "store unavailable"
    assert "Traceback" in payload["stack"]
