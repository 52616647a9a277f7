"""
appupdate.services._shared.ports
================================

Collection of *ports* (hexagonal interfaces) the service layer depends on.

Modules
-------
- :mod:`captcha_cache`:
    :class:`~.CaptchaCache`: atomic take-once storage for captcha answers,
    plus the process-local :class:`~.InMemoryCaptchaCache`.
- :mod:`token_codec`:
    :class:`~.TokenCodec`: signing/decoding of access and refresh tokens.
- :mod:`session_binding_store`:
    :class:`~.SessionBindingStore`: the currently bound token pair per account.
- :mod:`password_hasher`:
    :class:`~.PasswordHasher`: one-way password hashing.

Concrete adapters (Redis, SQLAlchemy, PyJWT, Werkzeug) live under
``appupdate.infra``.
"""

from __future__ import annotations

from .captcha_cache import CaptchaCache, InMemoryCaptchaCache
from .password_hasher import PasswordHasher
from .session_binding_store import (
    InMemorySessionBindingStore,
    SessionBindingStore,
    TokenSlot,
)
from .token_codec import TokenClaims, TokenCodec, TokenKind, TokenPair

__all__ = [
    "CaptchaCache",
    "InMemoryCaptchaCache",
    "PasswordHasher",
    "SessionBindingStore",
    "InMemorySessionBindingStore",
    "TokenSlot",
    "TokenCodec",
    "TokenClaims",
    "TokenKind",
    "TokenPair",
]
