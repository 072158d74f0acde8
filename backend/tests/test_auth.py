"""Tests for registration, login and bearer token validation."""
from datetime import datetime, timedelta, timezone
from typing import Optional, get_type_hints

import jwt
import pytest

from event_planner.config import Settings, settings
from event_planner.errors import AuthError
from event_planner.security import create_access_token, decode_access_token, hash_password, verify_password
from tests.conftest import auth_headers, register_user


class TestRegister:

    def test_register_returns_token(self, client):
        resp = client.post("/auth/register", json={"email": "bob@example.com", "password": "pw"})
        assert resp.status_code == 201
        assert resp.json()["token"]

    def test_duplicate_email_rejected(self, client):
        register_user(client, email="dup@example.com")
        resp = client.post("/auth/register", json={"email": "dup@example.com", "password": "other"})
        assert resp.status_code == 400
        assert resp.json() == {"error": "email is already registered"}

    def test_empty_password_rejected(self, client):
        resp = client.post("/auth/register", json={"email": "x@example.com", "password": ""})
        assert resp.status_code == 400
        assert "password" in resp.json()["error"]

    def test_missing_email_rejected(self, client):
        resp = client.post("/auth/register", json={"password": "pw"})
        assert resp.status_code == 400

    def test_password_is_stored_hashed(self, client, db):
        register_user(client, email="hash@example.com", password="plain-text")
        from event_planner.models.user import User
        user = db.query(User).filter(User.email == "hash@example.com").one()
        assert user.password_hash != "plain-text"
        assert verify_password("plain-text", user.password_hash)


class TestLogin:

    def test_login_token_resolves_to_same_user(self, client):
        user = register_user(client, email="carol@example.com", password="hunter2")
        resp = client.post("/auth/login", json={"email": "carol@example.com", "password": "hunter2"})
        assert resp.status_code == 200
        token = resp.json()["token"]
        assert decode_access_token(token) == user["id"]

        me = client.get("/auth/me", headers=auth_headers(token))
        assert me.json()["data"]["email"] == "carol@example.com"

    def test_wrong_password_and_unknown_email_look_identical(self, client):
        register_user(client, email="dave@example.com", password="right")
        wrong_pw = client.post("/auth/login", json={"email": "dave@example.com", "password": "wrong"})
        unknown = client.post("/auth/login", json={"email": "nobody@example.com", "password": "right"})
        assert wrong_pw.status_code == unknown.status_code == 401
        assert wrong_pw.json() == unknown.json() == {"error": "invalid email or password"}


class TestTokens:

    def test_missing_header_is_401(self, client):
        resp = client.get("/auth/me")
        assert resp.status_code == 401
        assert resp.json()["error"] == "missing authorization header"

    def test_garbage_token_is_401(self, client):
        resp = client.get("/auth/me", headers=auth_headers("not-a-jwt"))
        assert resp.status_code == 401

    def test_expired_token_is_401(self, client):
        user = register_user(client)
        stale = create_access_token(user["id"], now=datetime.now(timezone.utc) - timedelta(days=8))
        resp = client.get("/auth/me", headers=auth_headers(stale))
        assert resp.status_code == 401
        assert resp.json()["error"] == "token has expired"

    def test_token_signed_with_other_secret_is_401(self, client):
        user = register_user(client)
        forged = jwt.encode(
            {"user_id": user["id"], "exp": datetime.now(timezone.utc) + timedelta(days=1)},
            "some-other-secret-that-is-long-enough-too",
            algorithm="HS256",
        )
        resp = client.get("/auth/me", headers=auth_headers(forged))
        assert resp.status_code == 401

    def test_token_for_deleted_user_is_401(self, client):
        orphan = create_access_token(9999)
        resp = client.get("/auth/me", headers=auth_headers(orphan))
        assert resp.status_code == 401

    def test_token_expires_after_configured_days(self):
        issued = datetime(2030, 1, 1, tzinfo=timezone.utc)
        token = create_access_token(7, now=issued)
        claims = jwt.decode(token, options={"verify_signature": False})
        assert claims["exp"] - claims["iat"] == settings.JWT_EXPIRY_DAYS * 86400

    def test_issue_time_defaults_to_now(self):
        assert get_type_hints(create_access_token)["now"] == Optional[datetime]
        before = int(datetime.now(timezone.utc).timestamp())
        claims = jwt.decode(create_access_token(5), options={"verify_signature": False})
        assert claims["iat"] >= before - 1

    def test_other_hmac_algorithms_accepted(self):
        token = jwt.encode(
            {"user_id": 3, "exp": datetime.now(timezone.utc) + timedelta(hours=1)},
            settings.JWT_SECRET,
            algorithm="HS512",
        )
        assert decode_access_token(token) == 3

    def test_missing_user_id_claim_rejected(self):
        token = jwt.encode(
            {"exp": datetime.now(timezone.utc) + timedelta(hours=1)},
            settings.JWT_SECRET,
            algorithm="HS256",
        )
        with pytest.raises(AuthError):
            decode_access_token(token)


class TestCredentialStore:

    def test_hash_is_salted(self):
        assert hash_password("same") != hash_password("same")

    def test_verify_rejects_wrong_and_malformed(self):
        hashed = hash_password("correct")
        assert verify_password("correct", hashed)
        assert not verify_password("incorrect", hashed)
        assert not verify_password("correct", "not-a-bcrypt-hash")
        assert not verify_password("", hashed)


class TestSettings:

    def test_production_requires_jwt_secret(self):
        with pytest.raises(ValueError):
            Settings(ENVIRONMENT="production", JWT_SECRET="")

    def test_development_generates_ephemeral_secret(self):
        s = Settings(ENVIRONMENT="development", JWT_SECRET="")
        assert len(s.JWT_SECRET) >= 32

    def test_non_hmac_algorithm_rejected(self):
        with pytest.raises(ValueError):
            Settings(JWT_ALGORITHM="RS256", JWT_SECRET="x" * 40)
