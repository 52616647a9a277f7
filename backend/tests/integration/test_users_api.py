"""End-to-end flows through ``/api/v1/users``."""

from __future__ import annotations

import base64
import uuid

import pytest

from tests.factories.account import DEFAULT_PASSWORD, AccountFactory
from tests.helpers.utils import bearer

BASE = "/api/v1/users"


@pytest.fixture()
def register(client, solve_captcha):
    def _register(username="alice", password="s3cret!", confirm=None):
        captcha_id, answer = solve_captcha()
        return client.post(
            f"{BASE}/register",
            json={
                "username": username,
                "password": password,
                "confirm_password": password if confirm is None else confirm,
                "captcha_id": captcha_id,
                "captcha_code": answer,
            },
        )

    return _register


@pytest.fixture()
def login(client, solve_captcha):
    def _login(username="alice", password="s3cret!"):
        captcha_id, answer = solve_captcha()
        return client.post(
            f"{BASE}/login",
            json={
                "username": username,
                "password": password,
                "captcha_id": captcha_id,
                "captcha_code": answer,
            },
        )

    return _login


def test_captcha_returns_id_and_png(client):
    resp = client.post(f"{BASE}/captcha")

    body = resp.get_json()
    assert resp.status_code == 200
    assert body["code"] == 200
    assert uuid.UUID(body["data"]["captcha_id"])
    assert base64.b64decode(body["data"]["captcha_image"]).startswith(b"\x89PNG")


def test_register_login_me_flow(client, register, login):
    reg = register()
    assert reg.status_code == 200
    assert reg.get_json() == {
        "data": {"username": "alice", "create_info": "User 'alice' created successfully!"},
        "code": 200,
        "msg": "ok",
    }

    resp = login()
    data = resp.get_json()["data"]
    assert resp.status_code == 200
    assert data["login_info"] == "User 'alice' logged in successfully!"

    me = client.post(f"{BASE}/me", headers=bearer(data["access_token"]))
    profile = me.get_json()["data"]
    assert me.status_code == 200
    assert profile["username"] == "alice"
    assert profile["full_name"] == "alice"
    assert profile["is_delete"] is False
    assert "create_time" in profile
    assert "password_hash" not in profile
    assert "access_token" not in profile


def test_register_trims_username(register, faker):
    name = faker.user_name()

    resp = register(username=f"  {name}  ")

    assert resp.status_code == 200
    assert resp.get_json()["data"]["username"] == name


def test_duplicate_registration_is_400(register):
    register()

    resp = register()

    assert resp.status_code == 400
    assert resp.get_json() == {
        "data": None,
        "code": 400,
        "msg": "Username 'alice' already exists",
    }


def test_register_password_mismatch(register):
    resp = register(confirm="other")

    assert resp.status_code == 400
    assert resp.get_json()["msg"] == "Passwords do not match"


def test_register_missing_fields_is_400(client):
    resp = client.post(f"{BASE}/register", json={"username": "bob"})

    body = resp.get_json()
    assert resp.status_code == 400
    assert body["data"] is None
    assert "password" in body["msg"]


def test_malformed_json_is_400(client):
    resp = client.post(
        f"{BASE}/login", data="{not json", headers={"Content-Type": "application/json"}
    )

    assert resp.status_code == 400
    assert resp.get_json()["msg"] == "invalid json body"


def test_wrong_captcha_is_400(client, solve_captcha, session):
    AccountFactory(username="bob")
    captcha_id, _ = solve_captcha()

    resp = client.post(
        f"{BASE}/login",
        json={
            "username": "bob",
            "password": DEFAULT_PASSWORD,
            "captcha_id": captcha_id,
            "captcha_code": "####",
        },
    )

    assert resp.status_code == 400
    assert resp.get_json()["msg"] == "Captcha code is incorrect"


def test_wrong_password_is_400(register, login):
    register()

    resp = login(password="wrong")

    assert resp.status_code == 400
    assert resp.get_json()["msg"] == "Incorrect username or password"


def test_deleted_account_cannot_login(login, session):
    AccountFactory(username="gone", is_deleted=True)

    resp = login(username="gone", password=DEFAULT_PASSWORD)

    assert resp.status_code == 400
    assert resp.get_json()["msg"] == "Account has been deleted"


def test_new_login_supersedes_old_access_token(client, register, login):
    register()
    old = login().get_json()["data"]["access_token"]
    new = login().get_json()["data"]["access_token"]

    stale = client.post(f"{BASE}/me", headers=bearer(old))
    fresh = client.post(f"{BASE}/me", headers=bearer(new))

    assert stale.status_code == 401
    assert stale.get_json()["msg"] == "token superseded"
    assert fresh.status_code == 200


def test_refresh_rotates_tokens(client, register, login, security):
    register()
    pair = login().get_json()["data"]
    account_id = security.codec.decode_access(pair["access_token"]).account_id

    resp = client.post(
        f"{BASE}/refresh_token",
        json={"account_id": account_id, "refresh_token": pair["refresh_token"]},
    )
    rotated = resp.get_json()["data"]

    assert resp.status_code == 200
    assert set(rotated) == {"access_token", "refresh_token"}
    assert client.post(f"{BASE}/me", headers=bearer(rotated["access_token"])).status_code == 200
    assert client.post(f"{BASE}/me", headers=bearer(pair["access_token"])).status_code == 401

    replay = client.post(
        f"{BASE}/refresh_token",
        json={"account_id": account_id, "refresh_token": pair["refresh_token"]},
    )
    assert replay.status_code == 401


def test_refresh_with_garbage_account_id_is_401(client):
    resp = client.post(
        f"{BASE}/refresh_token", json={"account_id": "nope", "refresh_token": "x"}
    )

    assert resp.status_code == 401
    assert resp.get_json()["data"] is None


class TestMeAuthorization:
    def test_missing_header_is_401(self, client):
        resp = client.post(f"{BASE}/me")

        assert resp.status_code == 401
        assert resp.get_json() == {"data": None, "code": 401, "msg": "Missing bearer token"}

    def test_other_scheme_is_treated_as_missing(self, client):
        resp = client.post(f"{BASE}/me", headers={"Authorization": "Basic abc"})

        assert resp.status_code == 401

    def test_tampered_token_is_403(self, client, register, login):
        register()
        token = login().get_json()["data"]["access_token"]
        tampered = token[:-4] + ("AAAA" if not token.endswith("AAAA") else "BBBB")

        resp = client.post(f"{BASE}/me", headers=bearer(tampered))

        assert resp.status_code == 403
        assert resp.get_json()["msg"] == "invalid token"

    def test_lowercase_scheme_is_accepted(self, client, register, login):
        register()
        token = login().get_json()["data"]["access_token"]

        resp = client.post(f"{BASE}/me", headers={"Authorization": f"bearer {token}"})

        assert resp.status_code == 200


def test_unknown_route_uses_envelope(client):
    resp = client.get("/api/v1/nowhere")

    assert resp.status_code == 404
    assert resp.get_json() == {
        "data": None,
        "code": 404,
        "msg": "Route '/api/v1/nowhere' not found",
    }


def test_wrong_method_uses_envelope(client):
    resp = client.get(f"{BASE}/login")

    assert resp.status_code == 405
    assert resp.get_json()["msg"] == "method not allowed"
