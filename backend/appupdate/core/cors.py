"""CORS policy for the JSON API."""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS

from appupdate.core.logger import REQUEST_ID_HEADER


def init_app(app: Flask) -> None:
    """Allow browser clients listed in ``CORS_ORIGINS`` to call ``/api/*``.

    A blank value or ``"*"`` allows any origin without credentials. The
    ``Authorization`` header is accepted and ``X-Request-ID`` exposed so
    front-ends can correlate failures with server logs.
    """
    origins = [o.strip() for o in app.config.get("CORS_ORIGINS", "").split(",") if o.strip()]
    wildcard = not origins or origins == ["*"]

    CORS(
        app,
        resources={r"/api/*": {"origins": "*" if wildcard else origins}},
        supports_credentials=not wildcard,
        allow_headers=["Authorization", "Content-Type", REQUEST_ID_HEADER],
        expose_headers=[REQUEST_ID_HEADER],
        max_age=app.config.get("CORS_MAX_AGE", 600),
    )
