"""Shared API helpers for request parsing and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Response, current_app, g, jsonify, request

from appupdate.core.errors import envelope
from appupdate.core.logger import ensure_request_id
from appupdate.core.security import get_security
from appupdate.repositories.base import Pagination
from appupdate.schemas.common import PaginationQuerySchema
from appupdate.services._shared.base import ServiceContext
from appupdate.services.auth.authorization import AuthorizedAccount

F = TypeVar("F", bound=Callable[..., Any])

BEARER_PREFIX = "bearer "


def parse_pagination(default_limit: int = 20, max_limit: int = 200) -> Pagination:
    """Parse pagination parameters from ``request.args`` using Marshmallow."""

    schema = PaginationQuerySchema(default_limit=default_limit, max_limit=max_limit)
    data = schema.load(request.args)
    return Pagination(page=data["page"], limit=data["limit"], sort=data["sort"])


def json_body() -> dict[str, Any]:
    """Return the parsed JSON object body, ``{}`` when absent or not an object.

    Malformed JSON raises Werkzeug's ``BadRequest`` which renders as a 400 envelope.
    """

    if not request.data:
        return {}
    payload = request.get_json(force=True)
    return payload if isinstance(payload, dict) else {}


def bearer_token() -> str | None:
    """Extract the token from ``Authorization: Bearer <token>``.

    Any other scheme counts as no token at all.
    """

    header = request.headers.get("Authorization", "")
    if header[: len(BEARER_PREFIX)].lower() != BEARER_PREFIX:
        return None
    token = header[len(BEARER_PREFIX) :].strip()
    return token or None


def current_account() -> AuthorizedAccount:
    """Return the account resolved by :func:`require_auth` for this request."""

    return g.current_account


def service_context() -> ServiceContext:
    account = getattr(g, "current_account", None)
    return ServiceContext(
        actor_id=account.id if account is not None else None,
        request_id=ensure_request_id(),
    )


def require_auth(func: F) -> F:
    """Run the authorization pipeline before the view; any rejection aborts the request."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        g.current_account = get_security().pipeline.authorize(bearer_token())
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def json_response(payload: Any, *, status: int = 200, msg: str = "ok") -> Response:
    """Wrap ``payload`` in the response envelope."""

    response = jsonify(envelope(payload, code=status, msg=msg))
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request.endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
