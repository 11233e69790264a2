"""Tests for authentication API endpoints."""

from __future__ import annotations

import typing as t

from fastapi.testclient import TestClient

from labdesk.model import Actor, ActorStatus
from labdesk.storage import DataStore
from labdesk.storage import user as user_storage

from .conftest import AuthHeaders, DemoPassword, Now, StudentEmail, TeacherEmail


class TestLogin:
    """Tests for POST /api/auth/login."""

    def test_login_success_returns_token(self, client: TestClient) -> None:
        """Sign in with the demo credential."""
        response = client.post("/api/auth/login", json={"email": TeacherEmail, "password": DemoPassword})

        assert response.status_code == 200
        data = response.json()

        assert data["actor"]["email"] == TeacherEmail
        assert data["actor"]["name"] == "Teacher1"
        assert data["actor"]["role"] == "teacher"
        assert "password_hash" not in data["actor"]

        assert data["token"]["token_type"] == "bearer"
        assert data["token"]["access_token"]
        assert "expires_at" in data["token"]

    def test_login_token_is_usable(self, client: TestClient) -> None:
        """The returned token authenticates later requests."""
        response = client.post("/api/auth/login", json={"email": StudentEmail.upper(), "password": DemoPassword})
        token = response.json()["token"]["access_token"]

        me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert me.status_code == 200
        assert me.json()["email"] == StudentEmail

    def test_login_records_activity(self, client: TestClient, store: DataStore) -> None:
        client.post("/api/auth/login", json={"email": StudentEmail, "password": DemoPassword})

        actor = user_storage.get(email=StudentEmail, store=store)
        assert actor is not None
        assert actor.last_activity == Now

    def test_login_wrong_password_returns_401(self, client: TestClient) -> None:
        response = client.post("/api/auth/login", json={"email": TeacherEmail, "password": "nope"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid email or password"

    def test_login_unknown_email_returns_401(self, client: TestClient) -> None:
        response = client.post("/api/auth/login", json={"email": "nobody@gmail.edu", "password": DemoPassword})

        assert response.status_code == 401

    def test_login_inactive_actor_returns_401(self, client: TestClient) -> None:
        response = client.post(
            "/api/auth/login", json={"email": "michael.brown@gmail.edu", "password": DemoPassword}
        )

        assert response.status_code == 401

    def test_login_error_is_localized(self, client: TestClient) -> None:
        response = client.post(
            "/api/auth/login", params={"locale": "ru"}, json={"email": TeacherEmail, "password": "nope"}
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Неверный email или пароль"

    def test_login_missing_fields_returns_422(self, client: TestClient) -> None:
        response = client.post("/api/auth/login", json={"email": TeacherEmail})

        assert response.status_code == 422


class TestGetCurrentActor:
    """Tests for GET /api/auth/me."""

    def test_me(self, client: TestClient, auth_headers: AuthHeaders) -> None:
        response = client.get("/api/auth/me", headers=auth_headers(StudentEmail))

        assert response.status_code == 200
        data = response.json()
        assert data["role"] == "student"
        assert data["group"] == "bis-1-23"

    def test_me_without_token_returns_401(self, client: TestClient) -> None:
        response = client.get("/api/auth/me")

        assert response.status_code == 401

    def test_me_with_garbage_token_returns_401(self, client: TestClient) -> None:
        response = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-token"})

        assert response.status_code == 401

    def test_deactivated_actor_is_signed_out(
        self,
        client: TestClient,
        store: DataStore,
        actor: t.Callable[[str], Actor],
        auth_headers: AuthHeaders,
    ) -> None:
        """Status is read on every request, so a token outlives its actor's access."""
        headers = auth_headers(StudentEmail)
        user_storage.update(actor(StudentEmail).actor_id, status=ActorStatus.Inactive, store=store)

        response = client.get("/api/auth/me", headers=headers)

        assert response.status_code == 401


class TestLogout:
    """Tests for POST /api/auth/logout."""

    def test_logout(self, client: TestClient, auth_headers: AuthHeaders) -> None:
        response = client.post("/api/auth/logout", headers=auth_headers(TeacherEmail))

        assert response.status_code == 200
        assert response.json()["message"] == "Signed out"

    def test_logout_requires_sign_in(self, client: TestClient) -> None:
        response = client.post("/api/auth/logout")

        assert response.status_code == 401
