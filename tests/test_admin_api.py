"""Tests for administration and profile API endpoints."""

from __future__ import annotations

import typing as t

from fastapi.testclient import TestClient

from labdesk.model import Actor
from labdesk.storage import DataStore
from labdesk.storage import user as user_storage

from .conftest import AdminEmail, AuthHeaders, DemoPassword, OtherTeacherEmail, StudentEmail, TeacherEmail

ActorLookup = t.Callable[[str], Actor]


class TestUsers:
    """Tests for /api/admin/users."""

    def test_list(self, client: TestClient, auth_headers: AuthHeaders) -> None:
        response = client.get("/api/admin/users", headers=auth_headers(AdminEmail))

        assert response.status_code == 200
        assert response.json()["total"] == 9

    def test_list_by_role(self, client: TestClient, auth_headers: AuthHeaders) -> None:
        response = client.get("/api/admin/users", params={"role": "teacher"}, headers=auth_headers(AdminEmail))

        assert sorted(u["email"] for u in response.json()["users"]) == [TeacherEmail, OtherTeacherEmail]

    def test_teacher_forbidden(self, client: TestClient, auth_headers: AuthHeaders) -> None:
        response = client.get("/api/admin/users", headers=auth_headers(TeacherEmail))

        assert response.status_code == 403

    def test_create(self, client: TestClient, auth_headers: AuthHeaders, store: DataStore) -> None:
        response = client.post(
            "/api/admin/users",
            json={"name": "Aida K", "email": "aida.k@gmail.edu", "role": "student", "group": "CS-302"},
            headers=auth_headers(AdminEmail),
        )

        assert response.status_code == 201
        assert response.json()["group"] == "CS-302"
        assert user_storage.get(email="aida.k@gmail.edu", store=store) is not None

    def test_create_duplicate_email_returns_409(self, client: TestClient, auth_headers: AuthHeaders) -> None:
        response = client.post(
            "/api/admin/users",
            json={"name": "Copy", "email": StudentEmail, "role": "student"},
            headers=auth_headers(AdminEmail),
        )

        assert response.status_code == 409
        assert response.json()["detail"] == "Email already exists"

    def test_create_unknown_group_returns_422(self, client: TestClient, auth_headers: AuthHeaders) -> None:
        """Russian has no string for this failure, so the English one is used."""
        response = client.post(
            "/api/admin/users",
            params={"locale": "ru"},
            json={"name": "Aida", "email": "aida.k@gmail.edu", "group": "CS-999"},
            headers=auth_headers(AdminEmail),
        )

        assert response.status_code == 422
        assert response.json()["detail"] == "Group CS-999 does not exist"

    def test_delete_student(
        self, client: TestClient, auth_headers: AuthHeaders, actor: ActorLookup, store: DataStore
    ) -> None:
        student_id = actor(StudentEmail).actor_id

        response = client.delete(f"/api/admin/users/{student_id}", headers=auth_headers(AdminEmail))

        assert response.status_code == 200
        assert response.json()["email"] == StudentEmail
        assert student_id not in store.actors

    def test_delete_teacher_in_use_returns_409(
        self, client: TestClient, auth_headers: AuthHeaders, actor: ActorLookup
    ) -> None:
        response = client.delete(f"/api/admin/users/{actor(TeacherEmail).actor_id}", headers=auth_headers(AdminEmail))

        assert response.status_code == 409

    def test_delete_self_returns_422(self, client: TestClient, auth_headers: AuthHeaders, actor: ActorLookup) -> None:
        response = client.delete(f"/api/admin/users/{actor(AdminEmail).actor_id}", headers=auth_headers(AdminEmail))

        assert response.status_code == 422
        assert response.json()["detail"] == "You cannot delete your own account"


class TestGroups:
    """Tests for /api/admin/groups."""

    def test_list(self, client: TestClient, auth_headers: AuthHeaders) -> None:
        response = client.get("/api/admin/groups", headers=auth_headers(AdminEmail))

        data = response.json()
        assert data["total"] == 3
        assert {g["name"]: g["student_count"] for g in data["groups"]} == {"CS-301": 2, "CS-302": 2, "bis-1-23": 2}

    def test_create(self, client: TestClient, auth_headers: AuthHeaders, actor: ActorLookup) -> None:
        response = client.post(
            "/api/admin/groups",
            json={"name": "CS-401", "teacher_id": str(actor(OtherTeacherEmail).actor_id), "description": "Compilers"},
            headers=auth_headers(AdminEmail),
        )

        assert response.status_code == 201
        assert response.json()["name"] == "CS-401"

    def test_create_duplicate_returns_409(
        self, client: TestClient, auth_headers: AuthHeaders, actor: ActorLookup
    ) -> None:
        response = client.post(
            "/api/admin/groups",
            json={"name": "CS-301", "teacher_id": str(actor(TeacherEmail).actor_id)},
            headers=auth_headers(AdminEmail),
        )

        assert response.status_code == 409

    def test_create_without_teacher_returns_422(self, client: TestClient, auth_headers: AuthHeaders) -> None:
        response = client.post("/api/admin/groups", json={"name": "CS-401"}, headers=auth_headers(AdminEmail))

        assert response.status_code == 422
        assert response.json()["detail"] == "Group name and teacher are required"


class TestProfile:
    """Tests for /api/profile."""

    def test_get(self, client: TestClient, auth_headers: AuthHeaders) -> None:
        response = client.get("/api/profile", headers=auth_headers(StudentEmail))

        assert response.status_code == 200
        assert response.json()["name"] == "Baitur Ibrakhimov"

    def test_update(self, client: TestClient, auth_headers: AuthHeaders) -> None:
        response = client.patch(
            "/api/profile",
            json={"name": "Baitur I.", "email": "baitur@gmail.edu"},
            headers=auth_headers(StudentEmail),
        )

        assert response.status_code == 200
        assert response.json()["email"] == "baitur@gmail.edu"

    def test_update_taken_email_returns_409(self, client: TestClient, auth_headers: AuthHeaders) -> None:
        response = client.patch(
            "/api/profile", json={"name": "Baitur", "email": TeacherEmail}, headers=auth_headers(StudentEmail)
        )

        assert response.status_code == 409

    def test_change_password(self, client: TestClient, auth_headers: AuthHeaders) -> None:
        response = client.post(
            "/api/profile/password",
            json={"current": DemoPassword, "new": "hunter22", "confirm": "hunter22"},
            headers=auth_headers(StudentEmail),
        )

        assert response.status_code == 200
        old = client.post("/api/auth/login", json={"email": StudentEmail, "password": DemoPassword})
        new = client.post("/api/auth/login", json={"email": StudentEmail, "password": "hunter22"})
        assert old.status_code == 401
        assert new.status_code == 200

    def test_change_password_mismatch_returns_422(self, client: TestClient, auth_headers: AuthHeaders) -> None:
        response = client.post(
            "/api/profile/password",
            json={"current": DemoPassword, "new": "hunter22", "confirm": "hunter2"},
            headers=auth_headers(StudentEmail),
        )

        assert response.status_code == 422
        assert response.json()["detail"] == "New passwords do not match"
