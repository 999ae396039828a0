"""Structured Logging — JSON lines with domain extras surfaced as strings."""

import json
import logging
import uuid

from campus_connect.infrastructure.observability import JSONFormatter


def _record(msg="hello", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "campus_connect.test", logging.INFO, __file__, 1, msg, None, None,
    )
    record.__dict__.update(extra)
    return record


def test_base_fields():
    line = json.loads(JSONFormatter().format(_record()))
    assert line["level"] == "INFO"
    assert line["logger"] == "campus_connect.test"
    assert line["message"] == "hello"
    assert "timestamp" in line


def test_extra_fields_are_stringified():
    post_id = uuid.uuid4()
    line = json.loads(JSONFormatter().format(
        _record(post_id=post_id, domain="college.edu", resolution="not_found"),
    ))
    assert line["post_id"] == str(post_id)
    assert line["domain"] == "college.edu"
    assert line["resolution"] == "not_found"


def test_absent_extras_are_omitted():
    line = json.loads(JSONFormatter().format(_record()))
    assert "user_id" not in line
    assert "error_code" not in line
