"""Centralized JSON error handling rendering the ``{data, code, msg}`` envelope."""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, jsonify, request
from marshmallow import ValidationError
from sqlalchemy.exc import IntegrityError
from werkzeug.exceptions import BadRequest as WerkzeugBadRequest
from werkzeug.exceptions import HTTPException

from appupdate.core.logger import ensure_request_id
from appupdate.services._shared.errors import (
    ForbiddenError,
    InternalServiceError,
    NotFoundError,
    ServiceError,
    UnauthorizedError,
)

log = logging.getLogger(__name__)

INTERNAL_MESSAGE = "Internal server error, please retry later"


def _http_status_to_message(status_code: int) -> str:
    """Map common HTTP status codes to short, stable client messages."""
    mapping = {
        400: "bad request",
        401: "unauthorized",
        403: "forbidden",
        404: "not found",
        405: "method not allowed",
        413: "payload too large",
        415: "unsupported media type",
        422: "unprocessable entity",
        429: "too many requests",
        500: "internal server error",
        503: "service unavailable",
    }
    return mapping.get(status_code, "error")


def envelope(data: Any, *, code: int = HTTPStatus.OK, msg: str = "ok") -> dict[str, Any]:
    """
    Build the uniform response body.

    :param data: Payload (``None`` on errors).
    :param code: HTTP status mirrored in the body.
    :param msg: Human-readable message.
    :returns: ``{"data": ..., "code": ..., "msg": ...}``
    :rtype: dict
    """
    return {"data": data, "code": int(code), "msg": msg}


def _envelope_response(status: int, message: str) -> tuple[Response, int]:
    """Return a JSON error response whose body mirrors ``status``."""
    return jsonify(envelope(None, code=status, msg=message)), status


class APIError(Exception):
    """
    Represent a JSON-serializable API error.

    Parameters
    ----------
    message : str
        Human-readable description presented to clients.
    status_code : int, optional
        HTTP status code to return. Defaults to ``400``.

    Attributes
    ----------
    message : str
        Error summary stored for serialization.
    status_code : int
        HTTP status code returned to the client.
    """

    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = int(status_code)

    def to_envelope(self) -> dict[str, Any]:
        """Serialize error metadata into the response envelope."""
        return envelope(None, code=self.status_code, msg=self.message)


# Domain conveniences
class BadRequest(APIError):
    """400 for malformed input and rejected credentials."""

    def __init__(self, message: str = "Bad request") -> None:
        super().__init__(message, status_code=HTTPStatus.BAD_REQUEST)


class NotFound(APIError):
    """404 when resources are missing."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, status_code=HTTPStatus.NOT_FOUND)


class Unauthorized(APIError):
    """401 when authentication fails."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message, status_code=HTTPStatus.UNAUTHORIZED)


class Forbidden(APIError):
    """403 when a presented credential is refused."""

    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(message, status_code=HTTPStatus.FORBIDDEN)


class Internal(APIError):
    """500 with a generic message; details stay in the logs."""

    def __init__(self, message: str = INTERNAL_MESSAGE) -> None:
        super().__init__(message, status_code=HTTPStatus.INTERNAL_SERVER_ERROR)


def from_service_error(exc: ServiceError) -> APIError:
    """
    Map domain/service-level errors to API-level (HTTP) errors.

    :param exc: Exception raised within the service layer.
    :type exc: ServiceError
    :returns: Translated exception ready to be rendered.
    :rtype: APIError
    """
    if isinstance(exc, InternalServiceError):
        return Internal()
    if isinstance(exc, UnauthorizedError):
        return Unauthorized(str(exc))
    if isinstance(exc, ForbiddenError):
        return Forbidden(str(exc))
    if isinstance(exc, NotFoundError):
        return NotFound(str(exc))
    # Any other ServiceError subclass -> 400 Bad Request
    return BadRequest(str(exc))


def _flatten_messages(messages: Any, prefix: str = "") -> list[str]:
    """Flatten marshmallow's nested error mapping into ``field: message`` strings."""
    if isinstance(messages, dict):
        out: list[str] = []
        for key, value in messages.items():
            path = f"{prefix}.{key}" if prefix else str(key)
            out.extend(_flatten_messages(value, path))
        return out
    if isinstance(messages, list | tuple):
        return [f"{prefix}: {m}" if prefix else str(m) for m in messages]
    return [f"{prefix}: {messages}" if prefix else str(messages)]


def init_app(app: Flask) -> None:
    """
    Attach JSON error handlers to the Flask app.

    Notes
    -----
    - Guarantees the ``{data: null, code, msg}`` envelope for all handled errors.
    - Emits 5xx with ``exc_info`` for traceability; 4xx as warnings.
    """

    def _emit(status: int, kind: str, message: str, *, exc_info: bool = False) -> None:
        level = log.error if status >= 500 else log.warning
        level(
            "%s: status=%s msg=%s request_id=%s",
            kind,
            status,
            message,
            ensure_request_id(),
            exc_info=exc_info,
        )

    @app.errorhandler(APIError)
    def handle_api_error(err: APIError):
        _emit(err.status_code, "APIError", err.message)
        return jsonify(err.to_envelope()), err.status_code

    @app.errorhandler(ServiceError)
    def handle_service_error(err: ServiceError):
        api_err = from_service_error(err)
        # Internal errors keep their real cause in the log only
        _emit(
            api_err.status_code,
            type(err).__name__,
            str(err) or api_err.message,
            exc_info=api_err.status_code >= 500,
        )
        return jsonify(api_err.to_envelope()), api_err.status_code

    @app.errorhandler(ValidationError)
    def handle_validation_error(err: ValidationError):
        messages = _flatten_messages(err.messages)
        message = "; ".join(messages) or "invalid request body"
        _emit(HTTPStatus.BAD_REQUEST, "ValidationError", message)
        return _envelope_response(HTTPStatus.BAD_REQUEST, message)

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        # Do not leak raw DB error to clients
        _emit(HTTPStatus.BAD_REQUEST, "IntegrityError", str(err.orig), exc_info=True)
        return _envelope_response(HTTPStatus.BAD_REQUEST, "Resource conflict")

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        message = _http_status_to_message(status)
        if isinstance(err, WerkzeugBadRequest):
            message = "invalid json body"
        if status == HTTPStatus.NOT_FOUND and request:
            message = f"Route '{request.path}' not found"
        _emit(status, "HTTPException", message)
        return _envelope_response(status, message)

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        # Unexpected server-side error; never leak internal details
        _emit(HTTPStatus.INTERNAL_SERVER_ERROR, "Unhandled exception", repr(err), exc_info=True)
        return _envelope_response(HTTPStatus.INTERNAL_SERVER_ERROR, INTERNAL_MESSAGE)
