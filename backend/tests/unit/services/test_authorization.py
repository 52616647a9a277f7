"""Tests for :class:`AuthorizationPipeline` outcomes."""

from __future__ import annotations

import uuid

import pytest
from appupdate.services._shared.errors import ForbiddenError, UnauthorizedError
from appupdate.services.auth.authorization import AuthorizationPipeline, AuthorizedAccount
from freezegun import freeze_time

from tests.factories.account import AccountFactory


@pytest.fixture()
def pipeline(security) -> AuthorizationPipeline:
    return security.pipeline


@pytest.fixture()
def bound(security, session):
    """Persist an account and bind a fresh pair; return ``(id, access, refresh)``."""
    account = AccountFactory(username="erin")
    account_id = str(account.id)
    access = security.codec.issue_access(account_id, "erin")
    refresh = security.codec.issue_refresh(account_id, "erin")
    security.bindings.bind(account_id, access, refresh)
    return account_id, access, refresh


def test_bound_token_is_authorized(pipeline, bound):
    account_id, access, _ = bound

    assert pipeline.authorize(access) == AuthorizedAccount(id=account_id, username="erin")


@pytest.mark.parametrize("token", [None, ""])
def test_missing_token_is_unauthorized(pipeline, token):
    with pytest.raises(UnauthorizedError):
        pipeline.authorize(token)


def test_garbage_token_is_forbidden(pipeline, session):
    with pytest.raises(ForbiddenError, match="invalid token"):
        pipeline.authorize("abc.def.ghi")


def test_refresh_token_is_not_an_access_token(pipeline, bound):
    _, _, refresh = bound

    with pytest.raises(ForbiddenError, match="invalid token"):
        pipeline.authorize(refresh)


def test_expired_token_is_forbidden(security, session):
    account_id = str(AccountFactory(username="frank").id)
    with freeze_time("2026-03-01 08:00:00"):
        access = security.codec.issue_access(account_id, "frank")
        security.bindings.bind(account_id, access, "r")
    with freeze_time("2026-03-03 08:00:00"):
        with pytest.raises(ForbiddenError, match="token expired"):
            security.pipeline.authorize(access)


def test_injected_clock_is_honoured(security, bound):
    _, access, _ = bound
    far_future = AuthorizationPipeline(
        codec=security.codec, bindings=security.bindings, clock=lambda: 10.0**12
    )

    with pytest.raises(ForbiddenError, match="token expired"):
        far_future.authorize(access)


def test_unknown_account_is_unauthorized(pipeline, security, session):
    token = security.codec.issue_access(str(uuid.uuid4()), "ghost")

    with pytest.raises(UnauthorizedError, match="user not found"):
        pipeline.authorize(token)


def test_username_must_match_account(pipeline, security, bound):
    account_id, _, _ = bound
    token = security.codec.issue_access(account_id, "not-erin")

    with pytest.raises(UnauthorizedError, match="user not found"):
        pipeline.authorize(token)


def test_non_uuid_account_claim_is_forbidden(pipeline, security, session):
    token = security.codec.issue_access("42", "erin")

    with pytest.raises(ForbiddenError, match="invalid token"):
        pipeline.authorize(token)


def test_superseded_token_is_unauthorized(pipeline, security, bound):
    account_id, old_access, _ = bound
    security.bindings.bind(
        account_id,
        security.codec.issue_access(account_id, "erin"),
        security.codec.issue_refresh(account_id, "erin"),
    )

    with pytest.raises(UnauthorizedError, match="token superseded"):
        pipeline.authorize(old_access)


def test_cleared_binding_revokes_token(pipeline, security, bound):
    account_id, access, _ = bound
    security.bindings.clear(account_id)

    with pytest.raises(UnauthorizedError, match="token superseded"):
        pipeline.authorize(access)
