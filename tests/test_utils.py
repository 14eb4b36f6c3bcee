"""Tests for the string, audit and logging helpers."""

import io
import json
import logging
import threading

import pytest

from orderdesk.logger import StructuredLogger
from orderdesk.utils import AuditEvent, log_audit_event, normalize_keys, to_snake_case


@pytest.mark.parametrize(
    "name, expected",
    [
        ("buyerName", "buyer_name"),
        ("orderNumber", "order_number"),
        ("ipAddress", "ip_address"),
        ("HTTPServer", "http_server"),
        ("already_snake", "already_snake"),
        ("id", "id"),
    ],
)
def test_to_snake_case(name, expected):
    assert to_snake_case(name) == expected


def test_normalize_keys_is_recursive():
    payload = [{"userId": "u", "meta": {"createdAt": "t"}, "tags": [{"tagName": "x"}]}]
    assert normalize_keys(payload) == [
        {"user_id": "u", "meta": {"created_at": "t"}, "tags": [{"tag_name": "x"}]}
    ]


def test_normalize_keys_leaves_values_alone():
    assert normalize_keys({"buyerName": "camelCase Value"}) == {"buyer_name": "camelCase Value"}
    assert normalize_keys("plainString") == "plainString"


def test_log_audit_event(logger, caplog):
    with caplog.at_level(logging.INFO):
        event = log_audit_event(
            logger,
            action="LOGOUT",
            entity_type="User",
            entity_id="u-1",
            user_id="u-1",
            details={"channel": "desktop"},
        )

    assert isinstance(event, AuditEvent)
    assert event.details == {"channel": "desktop"}

    messages = [r.getMessage() for r in caplog.records if r.getMessage().startswith("AUDIT: ")]
    assert len(messages) == 1
    logged = json.loads(messages[0][len("AUDIT: "):])
    assert logged["action"] == "LOGOUT"
    assert logged["user_id"] == "u-1"


def test_structured_logger_writes_json_lines(tmp_path):
    """Each entry is one JSON object carrying the thread and any extras."""
    stream = io.StringIO()
    log = StructuredLogger(
        name="orderdesk.tests.json",
        level="debug",
        stream=stream,
        log_file=str(tmp_path / "json.log"),
    )
    log.debug("Orders loaded", extra={"count": 28, "source": "fixtures"})

    entry = json.loads(stream.getvalue().splitlines()[-1])
    assert entry["level"] == "DEBUG"
    assert entry["logger_name"] == "orderdesk.tests.json"
    assert entry["thread"] == threading.current_thread().name
    assert entry["message"] == "Orders loaded"
    assert entry["extra"] == {"count": 28, "source": "fixtures"}

    file_entry = json.loads((tmp_path / "json.log").read_text(encoding="utf-8").splitlines()[-1])
    assert file_entry["message"] == "Orders loaded"


def test_structured_logger_level_from_name(tmp_path):
    log = StructuredLogger(
        name="orderdesk.tests.level",
        level="warning",
        stream=io.StringIO(),
        log_file=str(tmp_path / "level.log"),
    )
    assert log.logger.level == logging.WARNING
