"""
Tests for /auth/* and the session cookie
========================================
Covers:
- Register: success sets the cookie and /auth/me reports the user
- Register: missing fields and duplicate usernames → 400
- Login: correct password starts a session, wrong password → 400
- Logout: clears the session
- Session cookie: expired and tampered tokens are anonymous
- Password hashing: hash is not the password, verify round trip, bad hash
- Session tokens: signed with the configured secret and lifetime, claims checked

Run: pytest tests/test_auth.py -v
"""

from __future__ import annotations

import jwt
import pytest

from app.auth.security import (
    InvalidSessionPayload,
    hash_password,
    issue_session_token,
    read_session_token,
    verify_password,
)
from app.config import Settings, get_settings
from conftest import ALICE, login_as


def _register(client, username="carol", password="s3cret-pass"):
    return client.post("/auth/register", json={"username": username, "password": password})


class TestRegister:

    def test_register_starts_session(self, client, user_store):
        resp = _register(client)

        assert resp.status_code == 200
        assert resp.json() == {"success": True}
        assert get_settings().session_cookie_name in resp.cookies

        me = client.get("/auth/me").json()
        assert me["user"]["username"] == "carol"
        assert me["user"]["role"] == "user"
        assert me["user"]["id"] == user_store.rows[0]["id"]

    def test_password_is_hashed(self, client, user_store):
        _register(client, password="plain-text")

        stored = user_store.rows[0]
        assert stored["password_hash"] != "plain-text"
        assert verify_password("plain-text", stored["password_hash"])

    @pytest.mark.parametrize("body", [{}, {"username": "carol"}, {"password": "x"}, {"username": "  ", "password": "x"}])
    def test_missing_fields(self, client, body: dict):
        resp = client.post("/auth/register", json=body)

        assert resp.status_code == 400
        assert resp.json()["error"] == "Missing fields: username, password"

    def test_duplicate_username(self, client):
        _register(client)
        resp = _register(client)

        assert resp.status_code == 400
        assert resp.json() == {"error": "User already exists", "code": "user_exists"}

    def test_registered_user_can_create_exercise(self, client):
        _register(client)
        resp = client.post("/api/items", json={"title": "Burpee", "description": "Full body"})

        assert resp.status_code == 201
        assert resp.json()["createdBy"] == "carol"


class TestLogin:

    def test_login_success(self, client):
        _register(client)
        client.cookies.clear()

        resp = client.post("/auth/login", json={"username": "carol", "password": "s3cret-pass"})

        assert resp.status_code == 200
        assert client.get("/auth/me").json()["user"]["username"] == "carol"

    def test_wrong_password(self, client):
        _register(client)
        client.cookies.clear()

        resp = client.post("/auth/login", json={"username": "carol", "password": "nope"})

        assert resp.status_code == 400
        assert resp.json()["error"] == "Invalid credentials"
        assert client.get("/auth/me").json() == {"user": None}

    def test_unknown_user(self, client):
        resp = client.post("/auth/login", json={"username": "ghost", "password": "x"})

        assert resp.status_code == 400
        assert resp.json()["error"] == "Invalid credentials"

    def test_missing_fields(self, client):
        resp = client.post("/auth/login", json={"username": "carol"})

        assert resp.status_code == 400


class TestLogoutAndMe:

    def test_me_anonymous(self, client):
        assert client.get("/auth/me").json() == {"user": None}

    def test_logout_clears_session(self, client):
        _register(client)
        resp = client.post("/auth/logout")

        assert resp.status_code == 200
        assert resp.json() == {"success": True}
        assert client.get("/auth/me").json() == {"user": None}

    def test_expired_cookie_is_anonymous(self, client):
        settings = get_settings()
        token = jwt.encode(
            {"sub": ALICE.id, "username": "alice", "role": "user", "exp": 1},
            settings.session_secret,
            algorithm="HS256",
        )
        client.cookies.set(settings.session_cookie_name, token)

        assert client.get("/auth/me").json() == {"user": None}

    def test_wrong_secret_is_anonymous(self, client):
        settings = get_settings()
        token = issue_session_token(ALICE, Settings(session_secret="someone-else"))
        client.cookies.set(settings.session_cookie_name, token)

        assert client.get("/auth/me").json() == {"user": None}

    def test_unknown_role_is_anonymous(self, client):
        settings = get_settings()
        token = jwt.encode(
            {"sub": ALICE.id, "username": "alice", "role": "superuser"},
            settings.session_secret,
            algorithm="HS256",
        )
        client.cookies.set(settings.session_cookie_name, token)

        assert client.get("/auth/me").json() == {"user": None}

    def test_valid_cookie(self, client):
        login_as(client, ALICE)

        assert client.get("/auth/me").json() == {
            "user": {"id": ALICE.id, "username": "alice", "role": "user"},
        }


class TestSecurity:

    def test_hash_and_verify(self):
        hashed = hash_password("hunter2")

        assert hashed != "hunter2"
        assert verify_password("hunter2", hashed)
        assert not verify_password("hunter3", hashed)

    def test_blank_password_rejected(self):
        with pytest.raises(ValueError):
            hash_password("")

    def test_verify_with_garbage_hash(self):
        assert verify_password("hunter2", "not-a-hash") is False
        assert verify_password("hunter2", "") is False

    def test_token_round_trip(self):
        settings = Settings(session_secret="k", session_max_age_seconds=60)
        token = issue_session_token(ALICE, settings)

        assert read_session_token(token, settings) == ALICE

    def test_token_uses_configured_lifetime(self):
        settings = Settings(session_secret="k", session_max_age_seconds=120)
        claims = jwt.decode(issue_session_token(ALICE, settings), "k", algorithms=["HS256"])

        assert claims["exp"] - claims["iat"] == 120
        assert claims["sub"] == ALICE.id
        assert claims["role"] == "user"

    def test_token_from_other_secret_rejected(self):
        token = issue_session_token(ALICE, Settings(session_secret="one"))

        with pytest.raises(jwt.InvalidTokenError):
            read_session_token(token, Settings(session_secret="two"))

    @pytest.mark.parametrize(
        "claims",
        [
            {"username": "alice", "role": "user"},
            {"sub": "u-1", "role": "user"},
            {"sub": "u-1", "username": "alice", "role": "superuser"},
        ],
    )
    def test_unusable_claims_rejected(self, claims):
        token = jwt.encode(claims, "k", algorithm="HS256")

        with pytest.raises(InvalidSessionPayload):
            read_session_token(token, Settings(session_secret="k"))

    def test_blank_secret_refused(self):
        with pytest.raises(ValueError):
            issue_session_token(ALICE, Settings(session_secret=""))
