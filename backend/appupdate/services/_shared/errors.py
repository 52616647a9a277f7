"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and should never import or depend
on Flask or HTTP directly. They serve as stable contracts between
repositories, adapters, and application services.

The translation to the HTTP envelope is handled by
``appupdate/core/errors.py`` via :func:`~appupdate.core.errors.from_service_error`.
"""

from __future__ import annotations

from dataclasses import dataclass

# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - A bare ``ServiceError`` is rendered as a ``400 Bad Request`` with its
      message shown to the client, so messages must be safe for end users.
    """

    pass


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


class CaptchaExpiredOrMissingError(ServiceError):
    """Raised when a captcha id is unknown, already consumed, or expired."""

    def __init__(self, message: str = "Captcha has expired or does not exist") -> None:
        super().__init__(message)


class CaptchaMismatchError(ServiceError):
    """Raised when the submitted captcha code does not match the stored answer."""

    def __init__(self, message: str = "Captcha code is incorrect") -> None:
        super().__init__(message)


class UnauthorizedError(ServiceError):
    """Raised when the caller is not (or no longer) authenticated."""


class ForbiddenError(ServiceError):
    """Raised when a presented credential is rejected outright (bad signature, expired)."""


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., "Account").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    entity: str
    key: str | int

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.entity} not found: {self.key}"


class AccountNotFoundError(NotFoundError):
    """Raised by the binding store when no account row matched an update."""

    def __init__(self, key: str | int) -> None:
        super().__init__("Account", key)


class InternalServiceError(ServiceError):
    """
    Raised for failures not attributable to caller input.

    The message is replaced by a generic text before reaching the client.
    """


class PersistenceError(InternalServiceError):
    """Raised when the persistence backend fails below the repository layer."""


# --------------------------------------------------------------------------- #
# Token decoding errors (always classified by the caller)
# --------------------------------------------------------------------------- #


class TokenError(Exception):
    """Base class for token decoding failures."""


class InvalidTokenError(TokenError):
    """Signature, structure or token-kind verification failed."""


class TokenExpiredError(TokenError):
    """The token is well-formed and correctly signed but its ``exp`` has passed."""
