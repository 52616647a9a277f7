"""Wire the authentication components into ``app.extensions``."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any

from flask import Flask, current_app

from appupdate.infra.captcha.image_renderer import PillowCaptchaRenderer
from appupdate.infra.jwt.pyjwt_token_codec import PyJWTTokenCodec, TokenConfig
from appupdate.infra.redis.redis_captcha_cache import RedisCaptchaCache
from appupdate.infra.security.werkzeug_password_hasher import WerkzeugPasswordHasher
from appupdate.infra.sqlalchemy.session_binding_store import SQLAlchemySessionBindingStore
from appupdate.services._shared.ports import CaptchaCache, InMemoryCaptchaCache
from appupdate.services.auth.authorization import AuthorizationPipeline
from appupdate.services.auth.service import AuthService
from appupdate.services.captcha.service import CaptchaService

log = logging.getLogger(__name__)

EXTENSION_KEY = "appupdate.security"


def token_config_from(config: Any) -> TokenConfig:
    """Build a :class:`TokenConfig` from a Flask config mapping.

    :raises RuntimeError: When either signing secret is missing.
    """
    access_secret = config.get("JWT_SECRET_KEY")
    refresh_secret = config.get("JWT_REFRESH_SECRET_KEY")
    if not access_secret or not refresh_secret:
        raise RuntimeError(
            "JWT_SECRET_KEY and JWT_REFRESH_SECRET_KEY must both be set before starting the app."
        )
    if access_secret == refresh_secret:
        log.warning("access and refresh tokens share one signing secret")
    return TokenConfig(
        access_secret=access_secret,
        refresh_secret=refresh_secret,
        access_expires=timedelta(seconds=int(config.get("ACCESS_TOKEN_EXPIRES_SECONDS", 86400))),
        refresh_expires=timedelta(seconds=int(config.get("REFRESH_TOKEN_EXPIRES_SECONDS", 604800))),
        algorithm=config.get("JWT_ALGORITHM", "HS256"),
    )


def _captcha_cache(app: Flask) -> CaptchaCache:
    ttl = int(app.config.get("CAPTCHA_TTL_SECONDS", 600))
    client = app.extensions.get("redis_client")
    if client is not None:
        return RedisCaptchaCache(r=client, ttl_seconds=ttl)
    return InMemoryCaptchaCache(
        ttl_seconds=ttl,
        max_entries=int(app.config.get("CAPTCHA_MAX_ENTRIES", 10_000)),
    )


class SecurityComponents:
    """Per-app container for the authentication collaborators."""

    def __init__(self, app: Flask) -> None:
        self.token_config = token_config_from(app.config)
        self.codec = PyJWTTokenCodec(config=self.token_config)
        self.hasher = WerkzeugPasswordHasher(
            method=app.config.get("PASSWORD_HASH_METHOD", "scrypt")
        )
        self.bindings = SQLAlchemySessionBindingStore()
        renderer = PillowCaptchaRenderer(
            width=int(app.config.get("CAPTCHA_WIDTH", 130)),
            height=int(app.config.get("CAPTCHA_HEIGHT", 40)),
        )
        self.captcha = CaptchaService(
            cache=_captcha_cache(app),
            render=renderer.render,
            length=int(app.config.get("CAPTCHA_LENGTH", 4)),
        )
        self.auth = AuthService(
            captcha=self.captcha,
            hasher=self.hasher,
            codec=self.codec,
            bindings=self.bindings,
        )
        self.pipeline = AuthorizationPipeline(codec=self.codec, bindings=self.bindings)


def init_app(app: Flask) -> None:
    """Build the components once; must run after :func:`extensions.init_app`."""
    app.extensions[EXTENSION_KEY] = SecurityComponents(app)


def get_security() -> SecurityComponents:
    """Return the components of the current app."""
    return current_app.extensions[EXTENSION_KEY]


__all__ = ["init_app", "get_security", "token_config_from", "SecurityComponents"]
