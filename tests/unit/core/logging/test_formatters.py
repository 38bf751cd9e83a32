"""
Tests for log formatters.

Tests JSONFormatter, TextFormatter, and get_formatter.
"""

import json
import logging
import sys

import pytest

from http_kit.core.logging.formatters import JSONFormatter, TextFormatter, get_formatter


def make_record(msg="Test message", **extra):
    record = logging.LogRecord(
        name="http_kit.core.client",
        level=logging.INFO,
        pathname="client.py",
        lineno=10,
        msg=msg,
        args=(),
        exc_info=None
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_basic_format(self):
        """JSONFormatter outputs valid JSON."""
        data = json.loads(JSONFormatter().format(make_record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "http_kit.core.client"
        assert data["message"] == "Test message"
        assert "timestamp" in data

    def test_format_with_extra_fields(self):
        """JSONFormatter includes extra fields."""
        record = make_record(
            "Request completed", client="billing", method="GET", status_code=200
        )

        data = json.loads(JSONFormatter().format(record))

        assert data["client"] == "billing"
        assert data["method"] == "GET"
        assert data["status_code"] == 200

    def test_non_serializable_extra(self):
        """Несериализуемые значения выводятся через str()."""
        record = make_record(directives=object())

        data = json.loads(JSONFormatter().format(record))

        assert data["directives"].startswith("<object object")

    def test_exception_info(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = make_record()
            record.exc_info = sys.exc_info()

        data = json.loads(JSONFormatter().format(record))

        assert "ValueError: boom" in data["exception"]


class TestTextFormatter:
    """Tests for TextFormatter."""

    def test_basic_format(self):
        output = TextFormatter().format(make_record())

        assert "[INFO]" in output
        assert "[http_kit.core.client]" in output
        assert output.endswith("Test message")

    def test_extra_fields_appended(self):
        output = TextFormatter().format(make_record(client="billing", attempt=2))

        assert output.endswith("Test message client=billing attempt=2")


class TestGetFormatter:

    @pytest.mark.parametrize("name,cls", [
        ("json", JSONFormatter),
        ("TEXT", TextFormatter),
    ])
    def test_known(self, name, cls):
        assert isinstance(get_formatter(name), cls)

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown format type"):
            get_formatter("xml")
