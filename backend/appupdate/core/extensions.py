"""Process-wide extension objects bound to the app in :func:`init_app`."""

from __future__ import annotations

import redis  # type: ignore[import-untyped]
from flask import Flask
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy import MetaData

# Deterministic constraint names keep Alembic autogenerate diffs stable
NAMING_CONVENTION = {
    "pk": "pk_%(table_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
}

db: SQLAlchemy = SQLAlchemy(
    metadata=MetaData(naming_convention=NAMING_CONVENTION),
    session_options={"autoflush": False},
)
migrate = Migrate(render_as_batch=True)


def _connect_redis(url: str) -> redis.Redis:
    client = redis.Redis.from_url(url)
    try:
        client.ping()
    except RedisError as exc:
        raise RuntimeError(f"REDIS_URL is set but Redis at {url!r} is unreachable") from exc
    return client


def init_app(app: Flask) -> None:
    """Bind SQLAlchemy and Flask-Migrate; connect Redis when ``REDIS_URL`` is set.

    The Redis client, when any, is stored as ``app.extensions["redis_client"]``
    and picked up by the captcha wiring in :mod:`appupdate.core.security`.

    :raises RuntimeError: If ``REDIS_URL`` is configured but does not answer ``PING``.
    """
    db.init_app(app)

    # Register the mapped tables on ``db.metadata`` for migrations
    from appupdate import models  # noqa: F401

    migrate.init_app(app, db)

    redis_url = app.config.get("REDIS_URL")
    if redis_url:
        app.extensions["redis_client"] = _connect_redis(redis_url)
    else:
        app.extensions.pop("redis_client", None)
