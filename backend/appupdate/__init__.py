"""Expose the application factory at package level.

``from appupdate import create_app`` is what the WSGI server and tests use.
"""

from __future__ import annotations

from .factory import create_app

__all__ = ["create_app"]
