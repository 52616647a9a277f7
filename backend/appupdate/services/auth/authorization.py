# appupdate/services/auth/authorization.py
"""
Per-request access-token authorization.

Stages, each with an early exit:

1. no token                      -> ``UnauthorizedError``
2. bad signature / structure     -> ``ForbiddenError("invalid token")``
3. past ``exp``                  -> ``ForbiddenError("token expired")``
4. no account for (username, id) -> ``UnauthorizedError("user not found")``
5. token not the bound one       -> ``UnauthorizedError("token superseded")``

Only a token that passes all five yields an :class:`AuthorizedAccount`.
"""

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Callable
from dataclasses import dataclass

from appupdate.services._shared.base import BaseService
from appupdate.services._shared.errors import (
    ForbiddenError,
    InvalidTokenError,
    TokenExpiredError,
    UnauthorizedError,
)
from appupdate.services._shared.ports import SessionBindingStore, TokenCodec, TokenSlot

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AuthorizedAccount:
    """Identity resolved from a bound access token."""

    id: str
    username: str


class AuthorizationPipeline(BaseService):
    """
    Validate a presented access token against the codec and the binding store.

    :param codec: Token decoder.
    :param bindings: Source of truth for which token is live.
    :param clock: Unix-seconds time source, injectable for tests.
    """

    def __init__(
        self,
        *,
        codec: TokenCodec,
        bindings: SessionBindingStore,
        clock: Callable[[], float] | None = None,
    ) -> None:
        super().__init__()
        self.codec = codec
        self.bindings = bindings
        self._clock = clock

    def authorize(self, token: str | None) -> AuthorizedAccount:
        """
        Run the pipeline for one request.

        :param token: Raw bearer token, ``None`` when the header was absent.
        :returns: The authorized account.
        :raises UnauthorizedError: Missing token, unknown account, superseded token.
        :raises ForbiddenError: Invalid or expired token.
        """
        if not token:
            raise UnauthorizedError("Missing bearer token")

        try:
            claims = self.codec.decode_access(token)
        except TokenExpiredError as exc:
            raise ForbiddenError("token expired") from exc
        except InvalidTokenError as exc:
            raise ForbiddenError("invalid token") from exc

        # The codec already rejects expired tokens; this guards codecs with leeway.
        now = self._clock() if self._clock is not None else time.time()
        if claims.exp <= int(now):
            raise ForbiddenError("token expired")

        try:
            account_key = uuid.UUID(claims.account_id)
        except ValueError as exc:
            raise ForbiddenError("invalid token") from exc

        with self.ro_uow() as uow:
            account = uow.accounts.get_by_username_and_id(claims.username, account_key)
            resolved = (
                AuthorizedAccount(id=str(account.id), username=account.username)
                if account is not None
                else None
            )
        if resolved is None:
            raise UnauthorizedError("user not found")

        if not self.bindings.is_bound(resolved.id, token, TokenSlot.ACCESS):
            log.info("superseded access token presented", extra={"account_id": resolved.id})
            raise UnauthorizedError("token superseded")

        return resolved
