"""Tests for /auth endpoints and the auth-required mode."""

import pytest
from fastapi.testclient import TestClient

from sartrack.web.api import create_app

CREDENTIALS = {"email": "handler@example.com", "password": "correct horse"}


@pytest.fixture
def secured_client(app_config):
    """Client for an app with auth.required enabled."""
    app_config.auth.required = True
    return TestClient(create_app(app_config))


def _login(client) -> str:
    client.post("/auth/register", json=CREDENTIALS)
    return client.post("/auth/login", json=CREDENTIALS).json()["access_token"]


class TestAuthEndpoints:
    """Tests for register, login, logout and me."""

    def test_register(self, client):
        response = client.post("/auth/register", json=CREDENTIALS)
        assert response.status_code == 201
        data = response.json()
        assert data["email"] == "handler@example.com"
        assert "password_hash" not in data

    def test_register_short_password(self, client):
        response = client.post("/auth/register", json={"email": "a@example.com", "password": "x"})
        assert response.status_code == 400

    def test_register_duplicate(self, client):
        client.post("/auth/register", json=CREDENTIALS)
        assert client.post("/auth/register", json=CREDENTIALS).status_code == 409

    def test_login_sets_cookie(self, client):
        client.post("/auth/register", json=CREDENTIALS)
        response = client.post("/auth/login", json=CREDENTIALS)
        assert response.status_code == 200
        data = response.json()
        assert data["token_type"] == "bearer"
        assert data["access_token"]
        set_cookie = response.headers["set-cookie"]
        assert set_cookie.startswith("auth=")
        assert "httponly" in set_cookie.lower()

    def test_login_wrong_password(self, client):
        client.post("/auth/register", json=CREDENTIALS)
        response = client.post(
            "/auth/login", json={"email": CREDENTIALS["email"], "password": "wrong password"}
        )
        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    def test_me_with_bearer(self, client):
        token = _login(client)
        response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 200
        assert response.json()["email"] == CREDENTIALS["email"]

    def test_me_without_token(self, client):
        client.cookies.clear()
        assert client.get("/auth/me").status_code == 401

    def test_logout_clears_cookie(self, client):
        _login(client)
        response = client.post("/auth/logout")
        assert response.status_code == 204
        assert "auth=" in response.headers["set-cookie"]


class TestAuthRequired:
    """Tests for routes guarded by auth.required."""

    def test_open_mode_needs_no_token(self, client):
        assert client.get("/skills").status_code == 200

    def test_missing_token_is_401(self, secured_client):
        response = secured_client.get("/skills")
        assert response.status_code == 401
        assert response.json() == {"error": "not authenticated"}

    def test_invalid_token_is_401(self, secured_client):
        response = secured_client.get("/sessions", headers={"Authorization": "Bearer nonsense"})
        assert response.status_code == 401

    def test_valid_bearer_token(self, secured_client):
        token = _login(secured_client)
        secured_client.cookies.clear()
        response = secured_client.get("/skills", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 200

    def test_cookie_fallback(self, secured_client):
        _login(secured_client)
        assert secured_client.post("/sessions", json={}).status_code == 201

    def test_health_stays_public(self, secured_client):
        assert secured_client.get("/health").status_code == 200
