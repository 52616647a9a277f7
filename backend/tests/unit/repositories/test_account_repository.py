from __future__ import annotations

import uuid

import pytest
from appupdate.repositories import AccountRepository
from appupdate.repositories.base import Pagination

from tests.factories.account import AccountFactory


@pytest.fixture()
def repo(session) -> AccountRepository:
    return AccountRepository(session=session)


def test_get_by_username_trims_and_includes_deleted(repo):
    account = AccountFactory(username="henry", is_deleted=True)

    assert repo.get_by_username("  henry ") is account
    assert repo.get_by_username("nobody") is None


def test_exists_by_username(repo):
    AccountFactory(username="ivy")

    assert repo.exists_by_username("ivy")
    assert not repo.exists_by_username("ivan")


def test_username_lookups_match_only_that_username(repo):
    AccountFactory(username="jade")
    AccountFactory(username="jude", is_deleted=True)

    assert repo.exists_by_username(" jude ")
    assert not repo.exists_by_username("jad")
    assert repo.get_by_username("jude ").username == "jude"
    assert repo.get_by_username("jud") is None


def test_get_by_username_and_id_requires_both(repo):
    account = AccountFactory(username="jack")

    assert repo.get_by_username_and_id("jack", account.id) is account
    assert repo.get_by_username_and_id("jack", uuid.uuid4()) is None
    assert repo.get_by_username_and_id("jill", account.id) is None


def test_exists_and_find_one_use_whitelisted_filters(repo):
    AccountFactory(username="kim", is_deleted=True)

    assert repo.exists(username="kim", is_deleted=True)
    assert not repo.exists(username="kim", is_deleted=False)
    assert repo.find_one(username="kim").username == "kim"
    # Non-whitelisted keys are ignored rather than turned into WHERE clauses
    assert repo.exists(password_hash="x")


def test_update_rejects_token_columns(repo):
    account = AccountFactory()

    repo.update(account, full_name="Renamed")
    assert account.full_name == "Renamed"
    with pytest.raises(ValueError):
        repo.update(account, access_token="forged")


def test_paginate_sorted_by_username(repo):
    for name in ("zed", "amy", "mia"):
        AccountFactory(username=name)

    page = repo.paginate(Pagination(page=1, limit=2, sort=["username"]))

    assert page.total == 3
    assert [a.username for a in page.items] == ["amy", "mia"]


def test_paginate_ignores_unknown_sort_field(repo):
    AccountFactory()

    page = repo.paginate(Pagination(page=1, limit=2, sort=["password_hash"]))

    assert page.total == 1
