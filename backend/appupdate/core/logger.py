"""JSON logging on stdout, correlated per request, plus one access line per response.

Every record carries ``request_id`` and, once the authorization pipeline has
resolved the caller, ``account_id``. Tokens and passwords are never passed to
the loggers.
"""

from __future__ import annotations

import json
import logging
import sys
import time
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from flask import Flask, Response, g, has_request_context, request

REQUEST_ID_HEADER = "X-Request-ID"
INBOUND_ID_HEADERS = (REQUEST_ID_HEADER, "X-Correlation-ID")
ACCESS_LOGGER = "appupdate.access"

# Attributes copied from ``extra=`` into the JSON document when present
STRUCTURED_FIELDS = ("account_id", "method", "path", "status", "endpoint", "elapsed_ms")


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        doc: dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(
                timespec="milliseconds"
            ),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
        }
        doc.update(
            {name: getattr(record, name) for name in STRUCTURED_FIELDS if hasattr(record, name)}
        )
        if record.exc_info:
            doc["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(doc, default=str)


class RequestContextFilter(logging.Filter):
    """Stamp ``request_id`` (and the authorized ``account_id``) on each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not has_request_context():
            record.request_id = None
            return True
        record.request_id = ensure_request_id()
        account = g.get("current_account")
        if account is not None and not hasattr(record, "account_id"):
            record.account_id = account.id
        return True


def ensure_request_id() -> str:
    """Return the id correlating this request, adopting an inbound header if any.

    Outside a request a throwaway id is returned on every call.
    """

    if not has_request_context():
        return uuid4().hex
    existing = g.get("request_id")
    if existing:
        return existing
    inbound = next((request.headers[h] for h in INBOUND_ID_HEADERS if request.headers.get(h)), None)
    g.request_id = inbound or uuid4().hex
    return g.request_id


def configure_logging(level: str | int = "INFO") -> None:
    """Route the root logger to stdout through :class:`JSONFormatter`."""

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())
    handler.addFilter(RequestContextFilter())
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level.upper() if isinstance(level, str) else level)


def init_app(app: Flask) -> None:
    """Seed a request id before each request and emit the access line after it."""

    access_log = logging.getLogger(ACCESS_LOGGER)

    @app.before_request
    def _start_request() -> None:
        # The app context (and ``g``) can outlive a single request under the test client
        g.pop("request_id", None)
        g.pop("current_account", None)
        ensure_request_id()
        g.request_started = time.perf_counter()

    @app.after_request
    def _finish_request(response: Response) -> Response:
        response.headers.setdefault(REQUEST_ID_HEADER, ensure_request_id())
        started = g.get("request_started")
        access_log.info(
            "request.completed",
            extra={
                "method": request.method,
                "path": request.path,
                "status": response.status_code,
                "elapsed_ms": round((time.perf_counter() - started) * 1000, 2) if started else None,
            },
        )
        return response


__all__ = ["configure_logging", "init_app", "ensure_request_id", "JSONFormatter"]
