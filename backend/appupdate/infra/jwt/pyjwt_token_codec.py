# appupdate/infra/jwt/pyjwt_token_codec.py
from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from appupdate.services._shared.errors import InvalidTokenError, TokenExpiredError
from appupdate.services._shared.ports import TokenClaims, TokenCodec, TokenKind

_REQUIRED_CLAIMS = ("account_id", "username", "token_kind", "iat", "exp", "jti")


@dataclass(frozen=True, slots=True)
class TokenConfig:
    """
    Immutable token settings, built once from the Flask config.

    :param access_secret: HMAC secret for access tokens.
    :param refresh_secret: HMAC secret for refresh tokens.
    :param access_expires: Access token lifetime.
    :param refresh_expires: Refresh token lifetime.
    :param algorithm: PyJWT algorithm name.
    """

    access_secret: str
    refresh_secret: str
    access_expires: timedelta = timedelta(days=1)
    refresh_expires: timedelta = timedelta(days=7)
    algorithm: str = "HS256"

    def __post_init__(self) -> None:
        if not self.access_secret or not self.refresh_secret:
            raise RuntimeError("Both access and refresh signing secrets must be configured.")


@dataclass(slots=True)
class PyJWTTokenCodec(TokenCodec):
    """
    Adapter signing tokens with PyJWT, one secret per token kind.

    Decoding checks the signature with the kind-specific secret, requires
    ``exp``/``iat``, validates the claim structure and asserts ``token_kind``.
    """

    config: TokenConfig

    # -------------------- helpers --------------------

    def _secret(self, kind: TokenKind) -> str:
        return self.config.access_secret if kind is TokenKind.ACCESS else self.config.refresh_secret

    def _lifetime(self, kind: TokenKind) -> timedelta:
        return self.config.access_expires if kind is TokenKind.ACCESS else self.config.refresh_expires

    def _issue(self, kind: TokenKind, account_id: str, username: str) -> str:
        now = datetime.now(UTC)
        iat = int(now.timestamp())
        payload: dict[str, Any] = {
            "account_id": str(account_id),
            "username": username,
            "token_kind": kind.value,
            "iat": iat,
            "exp": iat + int(self._lifetime(kind).total_seconds()),
            "jti": uuid.uuid4().hex,
        }
        token = jwt.encode(payload, self._secret(kind), algorithm=self.config.algorithm)
        # PyJWT 2.x returns str; older type stubs may declare bytes
        return str(token)

    def _decode(self, kind: TokenKind, token: str) -> TokenClaims:
        try:
            payload = jwt.decode(
                token,
                self._secret(kind),
                algorithms=[self.config.algorithm],
                options={"require": ["exp", "iat"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise TokenExpiredError("token expired") from exc
        except jwt.InvalidTokenError as exc:
            raise InvalidTokenError("invalid token") from exc

        claims = self._claims_from_payload(payload)
        if claims.token_kind is not kind:
            raise InvalidTokenError(f"expected a {kind.value} token")
        return claims

    @staticmethod
    def _claims_from_payload(payload: dict[str, Any]) -> TokenClaims:
        missing = [name for name in _REQUIRED_CLAIMS if name not in payload]
        if missing:
            raise InvalidTokenError(f"missing claims: {', '.join(missing)}")
        try:
            kind = TokenKind(payload["token_kind"])
        except ValueError as exc:
            raise InvalidTokenError("unknown token kind") from exc
        account_id, username = payload["account_id"], payload["username"]
        if not isinstance(account_id, str) or not isinstance(username, str):
            raise InvalidTokenError("malformed identity claims")
        return TokenClaims(
            account_id=account_id,
            username=username,
            token_kind=kind,
            iat=int(payload["iat"]),
            exp=int(payload["exp"]),
            jti=str(payload["jti"]),
        )

    # -------------------- API ------------------------

    def issue_access(self, account_id: str, username: str) -> str:
        return self._issue(TokenKind.ACCESS, account_id, username)

    def issue_refresh(self, account_id: str, username: str) -> str:
        return self._issue(TokenKind.REFRESH, account_id, username)

    def decode_access(self, token: str) -> TokenClaims:
        return self._decode(TokenKind.ACCESS, token)

    def decode_refresh(self, token: str) -> TokenClaims:
        return self._decode(TokenKind.REFRESH, token)
