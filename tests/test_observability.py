"""Tests for observability utilities."""

import json
import logging

from tripmate.observability.correlation import (
    correlation_scope,
    get_correlation_id,
)
from tripmate.observability.logging import JsonFormatter, get_logger
from tripmate.observability.redaction import (
    redact_string,
    redact_value,
    safe_log_context,
)


class TestRedaction:
    """Tests for redaction helpers."""

    def test_redact_phone_number(self):
        result = redact_string("Call me at +880 1712-345678")
        assert "345678" not in result
        assert "[REDACTED]" in result

    def test_redact_email(self):
        result = redact_string("Email: alice@example.com")
        assert "alice@example.com" not in result
        assert "[REDACTED]" in result

    def test_redact_value_dict_only_keys(self):
        result = redact_value({"customer_email": "a@b.co", "travelers": 2})
        assert "a@b.co" not in result
        assert "customer_email" in result

    def test_redact_value_list_only_len(self):
        result = redact_value(["a", "b", "c"])
        assert "len=3" in result

    def test_scalars(self):
        assert redact_value(None) == "null"
        assert redact_value(True) == "true"
        assert redact_value(3) == "3"

    def test_safe_log_context(self):
        ctx = safe_log_context(customer_email="bob@example.com", travelers=4)
        assert ctx == {"customer_email": "[REDACTED]", "travelers": "4"}


class TestCorrelationScope:
    def test_generates_and_resets(self):
        assert get_correlation_id() == ""
        with correlation_scope() as cid:
            assert len(cid) == 36
            assert get_correlation_id() == cid
        assert get_correlation_id() == ""

    def test_keeps_given_id(self):
        with correlation_scope("req-42") as cid:
            assert cid == "req-42"
            assert get_correlation_id() == "req-42"


class TestJsonFormatter:
    def _record(self, **extra) -> logging.LogRecord:
        record = logging.LogRecord("tripmate.test", logging.INFO, __file__, 1, "package trashed", None, None)
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_basic_shape(self):
        payload = json.loads(JsonFormatter().format(self._record()))
        assert payload["level"] == "INFO"
        assert payload["logger"] == "tripmate.test"
        assert payload["message"] == "package trashed"
        assert "correlationId" not in payload

    def test_extra_fields_and_correlation(self):
        record = self._record(extra_fields={"collection": "packages", "count": 3})
        with correlation_scope("cid-1"):
            payload = json.loads(JsonFormatter().format(record))
        assert payload["collection"] == "packages"
        assert payload["count"] == 3
        assert payload["correlationId"] == "cid-1"

    def test_get_logger_configures_once(self):
        logger = get_logger("tripmate.test.once")
        get_logger("tripmate.test.once")
        assert len(logger.handlers) == 1
        assert logger.propagate is False
