"""Tests for structured logging."""

import json
import logging

from newsboard.core.request_context import clear_request_context, set_request_id, set_user_context
from newsboard.logging_config import ContextFilter, JSONFormatter


def _record(msg: str = "hello", **extra) -> logging.LogRecord:
    record = logging.LogRecord("newsboard.test", logging.INFO, __file__, 10, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_request_context():
    """Test that request and user ids from the context reach the output."""
    set_request_id("req-1")
    set_user_context(7)
    try:
        record = _record()
        ContextFilter().filter(record)
        data = json.loads(JSONFormatter().format(record))
    finally:
        clear_request_context()

    assert data["message"] == "hello"
    assert data["severity"] == "INFO"
    assert data["logger"] == "newsboard.test"
    assert data["request_id"] == "req-1"
    assert data["user_id"] == 7


def test_json_formatter_omits_empty_context_and_keeps_extras():
    """Test that missing context is omitted and extra fields are passed through."""
    record = _record(post_id=42)
    ContextFilter().filter(record)
    data = json.loads(JSONFormatter().format(record))

    assert "request_id" not in data
    assert "user_id" not in data
    assert data["post_id"] == 42
