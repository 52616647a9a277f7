"""HTTP surface: versioned blueprints mounted under ``API_BASE_PREFIX``."""

from __future__ import annotations

from collections.abc import Iterable

from flask import Blueprint, Flask


def _join_prefix(*segments: str) -> str:
    """Join URL segments into ``/a/b`` form, skipping empty ones."""

    parts = [s.strip("/") for s in segments if s and s.strip("/")]
    return "/" + "/".join(parts)


def mount_version(app: Flask, version: str, registry: Iterable[tuple[Blueprint, str]]) -> None:
    """Register every ``(blueprint, relative_prefix)`` pair under ``<base>/<version>``.

    An empty relative prefix mounts the blueprint at the version root, which
    is where ``/health`` and ``/ping`` live.
    """

    base = app.config.get("API_BASE_PREFIX", "/api")
    for bp, rel_prefix in registry:
        app.register_blueprint(bp, url_prefix=_join_prefix(base, version, rel_prefix))


def init_app(app: Flask) -> None:
    from appupdate.api.v1 import API_VERSION, REGISTRY

    mount_version(app, API_VERSION, REGISTRY)


__all__ = ["init_app", "mount_version"]
