"""Tests for the structured JSON log formatter."""
import sys
import json
import logging
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

from logger import JSONFormatter


def make_record(msg="hello %s", args=("world",), exc_info=None, **extra):
    record = logging.LogRecord("docchat.test", logging.INFO, __file__, 10, msg, args, exc_info)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_format_basic_fields():
    data = json.loads(JSONFormatter().format(make_record()))

    assert data["level"] == "INFO"
    assert data["logger"] == "docchat.test"
    assert data["message"] == "hello world"
    assert data["timestamp"].endswith("Z")


def test_format_includes_extra_fields():
    record = make_record(error_code="API_ERROR", error_details={"model": "m"})

    data = json.loads(JSONFormatter().format(record))

    assert data["error_code"] == "API_ERROR"
    assert data["error_details"] == {"model": "m"}
    assert "args" not in data


def test_format_includes_exception():
    try:
        raise ValueError("bad")
    except ValueError:
        record = make_record(exc_info=sys.exc_info())

    data = json.loads(JSONFormatter().format(record))

    assert "ValueError: bad" in data["exception"]
