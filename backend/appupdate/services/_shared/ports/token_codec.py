from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol


class TokenKind(str, Enum):
    """Token kinds; the value is what travels in the ``token_kind`` claim."""

    ACCESS = "Access"
    REFRESH = "Refresh"


@dataclass(frozen=True, slots=True)
class TokenClaims:
    """
    Decoded token payload.

    :ivar account_id: Account identifier (UUID string).
    :ivar username: Username at issuance time.
    :ivar token_kind: Access or refresh.
    :ivar iat: Issued-at, Unix seconds.
    :ivar exp: Expiry, Unix seconds.
    :ivar jti: Random token identifier.
    """

    account_id: str
    username: str
    token_kind: TokenKind
    iat: int
    exp: int
    jti: str


@dataclass(frozen=True, slots=True)
class TokenPair:
    access_token: str
    refresh_token: str


class TokenCodec(Protocol):
    """
    Port for signing and verifying the two token kinds.

    Each kind has its own secret, so a token of one kind never verifies as the
    other. Decoding raises
    :class:`~appupdate.services._shared.errors.InvalidTokenError` or
    :class:`~appupdate.services._shared.errors.TokenExpiredError`.
    """

    def issue_access(self, account_id: str, username: str) -> str: ...

    def issue_refresh(self, account_id: str, username: str) -> str: ...

    def decode_access(self, token: str) -> TokenClaims: ...

    def decode_refresh(self, token: str) -> TokenClaims: ...
