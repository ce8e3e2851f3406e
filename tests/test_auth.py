"""Tests for registration and login."""

import time

import pytest

from catalog_api.app.core.security import decode_access_token

USER = {"name": "John Doe", "email": "johndoe@example.com", "pass": "password123"}


def register(client, **overrides):
    return client.post("/auth/register", json={**USER, **overrides})


class TestRegister:
    def test_registers_new_user(self, client):
        response = register(client)

        assert response.status_code == 201
        assert response.json() == {"message": "User registered successfully"}

    def test_rejects_duplicate_email(self, client):
        assert register(client).status_code == 201

        response = register(client, name="Someone Else")

        assert response.status_code == 400
        assert response.json() == {"error": "Email already registered"}

    def test_stores_only_a_password_hash(self, client, db):
        register(client)

        row = db.execute("SELECT name, pass FROM users WHERE email = ?", (USER["email"],)).fetchone()
        assert row["name"] == "John Doe"
        assert row["pass"] != USER["pass"]
        assert row["pass"].startswith("pbkdf2_sha256$1000$")

    @pytest.mark.parametrize("field", ["name", "email", "pass"])
    def test_rejects_missing_field(self, client, field):
        body = {k: v for k, v in USER.items() if k != field}

        response = client.post("/auth/register", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "Name, email and password are required."}

    def test_rejects_password_with_lone_surrogate(self, client):
        body = '{"name": "John Doe", "email": "johndoe@example.com", "pass": "pass\\ud800word"}'

        response = client.post("/auth/register", content=body, headers={"content-type": "application/json"})

        assert response.status_code == 400
        assert response.json() == {"error": "Name, email and password are required."}

    def test_rejects_non_string_password(self, client):
        response = register(client, **{"pass": 12345})

        assert response.status_code == 400


class TestLogin:
    def test_returns_token_for_valid_credentials(self, client, db, settings):
        register(client)
        user_id = db.execute("SELECT id FROM users WHERE email = ?", (USER["email"],)).fetchone()["id"]

        response = client.post("/auth/login", json={"email": USER["email"], "pass": USER["pass"]})

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Login Success."
        claims = decode_access_token(body["token"], settings.secret_key)
        assert claims is not None
        assert claims["id"] == user_id

    def test_token_expires_after_one_hour(self, client, settings):
        register(client)
        token = client.post("/auth/login", json={"email": USER["email"], "pass": USER["pass"]}).json()["token"]

        claims = decode_access_token(token, settings.secret_key)

        assert 3590 <= claims["exp"] - time.time() <= 3600

    def test_rejects_wrong_password(self, client):
        register(client)

        response = client.post("/auth/login", json={"email": USER["email"], "pass": "wrongPassword"})

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid credentials"}

    def test_rejects_unknown_email(self, client):
        response = client.post("/auth/login", json={"email": "nobody@example.com", "pass": "password123"})

        assert response.status_code == 400
        assert response.json() == {"error": "User not found"}

    def test_login_without_body_gets_field_message(self, client):
        response = client.post("/auth/login")

        assert response.status_code == 400
        assert response.json() == {"error": "Email and password are required."}

    def test_rejects_missing_password(self, client):
        response = client.post("/auth/login", json={"email": USER["email"]})

        assert response.status_code == 400
        assert response.json() == {"error": "Email and password are required."}
