"""Tests for :class:`PyJWTTokenCodec`."""

from __future__ import annotations

import uuid
from datetime import timedelta

import jwt
import pytest
from appupdate.infra.jwt.pyjwt_token_codec import PyJWTTokenCodec, TokenConfig
from appupdate.services._shared.errors import InvalidTokenError, TokenExpiredError
from appupdate.services._shared.ports import TokenKind
from freezegun import freeze_time

ACCOUNT_ID = str(uuid.uuid4())


@pytest.fixture()
def config() -> TokenConfig:
    return TokenConfig(access_secret="access-secret", refresh_secret="refresh-secret")


@pytest.fixture()
def codec(config) -> PyJWTTokenCodec:
    return PyJWTTokenCodec(config=config)


def test_access_token_round_trips_claims(codec):
    claims = codec.decode_access(codec.issue_access(ACCOUNT_ID, "alice"))

    assert claims.account_id == ACCOUNT_ID
    assert claims.username == "alice"
    assert claims.token_kind is TokenKind.ACCESS
    assert claims.exp - claims.iat == 86400


def test_refresh_token_lifetime(codec):
    claims = codec.decode_refresh(codec.issue_refresh(ACCOUNT_ID, "alice"))

    assert claims.token_kind is TokenKind.REFRESH
    assert claims.exp - claims.iat == 7 * 86400


def test_tokens_issued_in_same_second_differ(codec):
    with freeze_time("2026-01-01 12:00:00"):
        first = codec.issue_access(ACCOUNT_ID, "alice")
        second = codec.issue_access(ACCOUNT_ID, "alice")

    assert first != second


def test_kinds_do_not_cross_verify(codec):
    access = codec.issue_access(ACCOUNT_ID, "alice")
    refresh = codec.issue_refresh(ACCOUNT_ID, "alice")

    with pytest.raises(InvalidTokenError):
        codec.decode_refresh(access)
    with pytest.raises(InvalidTokenError):
        codec.decode_access(refresh)


def test_token_kind_is_checked_even_with_shared_secret():
    codec = PyJWTTokenCodec(config=TokenConfig(access_secret="same", refresh_secret="same"))

    with pytest.raises(InvalidTokenError):
        codec.decode_refresh(codec.issue_access(ACCOUNT_ID, "alice"))


def test_tampered_payload_is_invalid(codec):
    header, _, signature = codec.issue_access(ACCOUNT_ID, "alice").split(".")
    _, foreign_payload, _ = codec.issue_access(str(uuid.uuid4()), "mallory").split(".")

    with pytest.raises(InvalidTokenError):
        codec.decode_access(f"{header}.{foreign_payload}.{signature}")


def test_garbage_is_invalid(codec):
    with pytest.raises(InvalidTokenError):
        codec.decode_access("not-a-token")


def test_token_signed_with_other_secret_is_invalid(codec):
    foreign = PyJWTTokenCodec(
        config=TokenConfig(access_secret="other", refresh_secret="other-refresh")
    )

    with pytest.raises(InvalidTokenError):
        codec.decode_access(foreign.issue_access(ACCOUNT_ID, "alice"))


def test_missing_claims_are_invalid(codec, config):
    token = jwt.encode(
        {"account_id": ACCOUNT_ID, "token_kind": "Access", "iat": 0, "exp": 2**40},
        config.access_secret,
        algorithm="HS256",
    )

    with pytest.raises(InvalidTokenError):
        codec.decode_access(token)


def test_expired_token_raises_expired(codec):
    with freeze_time("2026-01-01 00:00:00"):
        token = codec.issue_access(ACCOUNT_ID, "alice")
    with freeze_time("2026-01-02 00:00:01"):
        with pytest.raises(TokenExpiredError):
            codec.decode_access(token)


def test_negative_lifetime_is_immediately_expired():
    codec = PyJWTTokenCodec(
        config=TokenConfig(
            access_secret="a", refresh_secret="r", refresh_expires=timedelta(seconds=-5)
        )
    )

    with pytest.raises(TokenExpiredError):
        codec.decode_refresh(codec.issue_refresh(ACCOUNT_ID, "alice"))


@pytest.mark.parametrize("access, refresh", [("", "r"), ("a", ""), (None, None)])
def test_config_requires_both_secrets(access, refresh):
    with pytest.raises(RuntimeError):
        TokenConfig(access_secret=access, refresh_secret=refresh)
