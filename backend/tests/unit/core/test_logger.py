from __future__ import annotations

import json
import logging

from appupdate.core.logger import JSONFormatter, ensure_request_id


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("appupdate.test", logging.INFO, __file__, 1, "hello %s", ("x",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_emits_known_extras():
    payload = json.loads(JSONFormatter().format(_record(request_id="rid", account_id="acc", foo=1)))

    assert payload["message"] == "hello x"
    assert payload["level"] == "INFO"
    assert payload["request_id"] == "rid"
    assert payload["account_id"] == "acc"
    assert "foo" not in payload


def test_request_id_outside_request_is_random():
    assert ensure_request_id() != ensure_request_id()


def test_request_id_header_is_propagated(client):
    resp = client.get("/api/v1/ping", headers={"X-Request-ID": "abc-123"})

    assert resp.headers["X-Request-ID"] == "abc-123"


def test_request_id_is_generated_per_request(client):
    first = client.get("/api/v1/ping").headers["X-Request-ID"]
    second = client.get("/api/v1/ping").headers["X-Request-ID"]

    assert first and second and first != second
