"""``flask accounts`` administration commands."""

from __future__ import annotations

import uuid

import pytest
from appupdate.models import Account
from appupdate.services._shared.ports import TokenSlot

from tests.factories.account import AccountFactory


@pytest.fixture()
def runner(app):
    return app.test_cli_runner()


@pytest.fixture()
def bound_account(security, session):
    account = AccountFactory(username="mallory")
    account_id = str(account.id)
    access = security.codec.issue_access(account_id, "mallory")
    security.bindings.bind(account_id, access, "refresh")
    return account_id, access


def _reload(session, account_id: str) -> Account:
    session.rollback()
    return session.get(Account, uuid.UUID(account_id))


def test_deactivate_soft_deletes_and_revokes(runner, session, security, bound_account):
    account_id, access = bound_account

    result = runner.invoke(args=["accounts", "deactivate", "mallory"])

    assert result.exit_code == 0, result.output
    assert "deactivated" in result.output
    assert _reload(session, account_id).is_deleted is True
    assert not security.bindings.is_bound(account_id, access, TokenSlot.ACCESS)


def test_reactivate_clears_flag(runner, session):
    account_id = str(AccountFactory(username="nina", is_deleted=True).id)

    result = runner.invoke(args=["accounts", "reactivate", "nina"])

    assert result.exit_code == 0, result.output
    assert _reload(session, account_id).is_deleted is False


def test_revoke_keeps_account_active(runner, session, security, bound_account):
    account_id, access = bound_account

    result = runner.invoke(args=["accounts", "revoke", "mallory"])

    assert result.exit_code == 0, result.output
    account = _reload(session, account_id)
    assert account.is_deleted is False
    assert (account.access_token, account.refresh_token) == ("", "")


def test_unknown_account_fails(runner, session):
    result = runner.invoke(args=["accounts", "deactivate", "ghost"])

    assert result.exit_code != 0
    assert "No account named 'ghost'" in result.output
