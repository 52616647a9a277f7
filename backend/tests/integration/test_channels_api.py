"""Owner-scoped channel CRUD through ``/api/v1/channels``."""

from __future__ import annotations

import pytest

from tests.factories.account import AccountFactory, AppChannelFactory
from tests.helpers.utils import bearer

BASE = "/api/v1/channels"


@pytest.fixture()
def auth_headers(security, session):
    """Bind a token pair for a fresh account and return its bearer header."""
    account = AccountFactory(username="owner")
    account_id = str(account.id)
    access = security.codec.issue_access(account_id, "owner")
    security.bindings.bind(account_id, access, security.codec.issue_refresh(account_id, "owner"))
    return bearer(access)


def test_requires_authentication(client):
    assert client.get(BASE).status_code == 401
    assert client.post(BASE, json={"channel_name": "x"}).status_code == 401


def test_create_list_rename_delete(client, auth_headers):
    created = client.post(BASE, json={"channel_name": "stable"}, headers=auth_headers)
    channel = created.get_json()["data"]
    assert created.status_code == 200
    assert channel["channel_name"] == "stable"
    assert {"id", "owner_id", "create_time", "update_time"} <= set(channel)

    listed = client.get(BASE, headers=auth_headers).get_json()["data"]
    assert listed["total"] == 1
    assert [c["id"] for c in listed["items"]] == [channel["id"]]

    renamed = client.patch(
        f"{BASE}/{channel['id']}", json={"channel_name": "lts"}, headers=auth_headers
    )
    assert renamed.get_json()["data"]["channel_name"] == "lts"

    deleted = client.delete(f"{BASE}/{channel['id']}", headers=auth_headers)
    assert deleted.get_json() == {"data": None, "code": 200, "msg": "deleted"}
    assert client.get(BASE, headers=auth_headers).get_json()["data"]["total"] == 0

    purged = client.delete(f"{BASE}/{channel['id']}/permanent", headers=auth_headers)
    assert purged.status_code == 200


def test_duplicate_name_is_400(client, auth_headers):
    client.post(BASE, json={"channel_name": "beta"}, headers=auth_headers)

    resp = client.post(BASE, json={"channel_name": "beta"}, headers=auth_headers)

    assert resp.status_code == 400


def test_blank_name_is_400(client, auth_headers):
    resp = client.post(BASE, json={"channel_name": ""}, headers=auth_headers)

    assert resp.status_code == 400
    assert resp.get_json()["data"] is None


def test_foreign_channel_is_404(client, auth_headers):
    foreign = AppChannelFactory()

    resp = client.patch(f"{BASE}/{foreign.id}", json={"channel_name": "mine"}, headers=auth_headers)

    assert resp.status_code == 404


def test_pagination_query(client, auth_headers):
    for name in ("a", "b", "c"):
        client.post(BASE, json={"channel_name": name}, headers=auth_headers)

    resp = client.get(f"{BASE}?page=2&limit=2&sort=channel_name", headers=auth_headers)
    page = resp.get_json()["data"]

    assert page["total"] == 3
    assert page["page"] == 2
    assert page["total_pages"] == 2
    assert [c["channel_name"] for c in page["items"]] == ["c"]


def test_invalid_pagination_is_400(client, auth_headers):
    resp = client.get(f"{BASE}?limit=0", headers=auth_headers)

    assert resp.status_code == 400
