"""Pytest fixtures building one isolated application per test.

Each test gets a fresh app with an in-memory SQLite database and its own
random pair of signing secrets, so no state leaks between cases.
"""

from __future__ import annotations

import os
import secrets

import pytest
from appupdate.core.config import TestingConfig
from appupdate.core.extensions import db as _db
from appupdate.core.security import get_security
from appupdate.factory import create_app


class TestConfig(TestingConfig):
    """Testing configuration for creating the Flask app.

    Notes
    -----
    - Uses an in-memory SQLite database for speed.
    - Never talks to Redis; captcha answers stay in process memory.
    - Signing secrets are injected per test by the ``app`` fixture.
    """

    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    LOG_LEVEL = "WARNING"
    USE_PROXYFIX = False


def make_config(**overrides):
    """Return a :class:`TestConfig` subclass with fresh secrets and ``overrides``."""
    attrs = {
        "JWT_SECRET_KEY": secrets.token_urlsafe(32),
        "JWT_REFRESH_SECRET_KEY": secrets.token_urlsafe(32),
    }
    attrs.update(overrides)
    return type("PerTestConfig", (TestConfig,), attrs)


@pytest.fixture()
def app_overrides():
    """Config overrides applied by the ``app`` fixture; override per module."""
    return {}


@pytest.fixture()
def app(app_overrides):
    """Create the application and its schema inside a pushed app context.

    Yields
    ------
    flask.Flask
        Application instance with :class:`TestConfig` applied.
    """
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    app = create_app(make_config(**app_overrides))
    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture()
def db(app):
    return _db


@pytest.fixture()
def session(db):
    """Expose the Flask-scoped session and wire Factory Boy to it."""
    from tests.factories import SQLAlchemySession

    SQLAlchemySession.set(db.session)
    yield db.session
    SQLAlchemySession.set(None)


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def security(app):
    """Authentication components wired for the current app."""
    return get_security()


@pytest.fixture()
def solve_captcha(security):
    """Return a callable issuing a captcha and returning ``(id, answer)``."""

    def _solve() -> tuple[str, str]:
        issued = security.captcha.issue()
        return issued.captcha_id, issued.answer

    return _solve


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk
