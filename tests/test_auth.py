"""Tests for labdesk.auth: authorization checks, the session service and session stores."""

from __future__ import annotations

import datetime
import json
import typing as t
from pathlib import Path

import pydantic as p
import pytest

from labdesk.auth import authorize, CorruptSession, FileSessionStore, InvalidCredentials, is_authorized, JWTManager, \
    LocalAuthProvider, MemorySessionStore, SessionService, SessionStore, Unauthorized
from labdesk.auth.store import CurrentSessionKey
from labdesk.model import Actor, ActorID, ActorStatus, Role
from labdesk.storage import DataStore
from labdesk.storage import user as user_storage

from .conftest import AdminEmail, DemoPassword, Now, StudentEmail, TeacherEmail


def make_actor(role: Role) -> Actor:
    return Actor(
        actor_id=ActorID(),
        name=f"Some {role.value}",
        email=f"{role.value}@example.com",
        role=role,
        create_time=Now,
    )


@pytest.fixture
def provider(store: DataStore) -> LocalAuthProvider:
    return LocalAuthProvider(store, DemoPassword, lambda: Now)


@pytest.fixture
def service(provider: LocalAuthProvider) -> t.Generator[SessionService]:
    svc = SessionService(MemorySessionStore(), provider, lambda: Now)
    svc.start()
    yield svc
    svc.stop()


class TestIsAuthorized(object):
    """Tests for is_authorized() and authorize()."""

    def test_no_actor_is_never_authorized(self) -> None:
        assert not is_authorized(None, [Role.Admin])
        assert not is_authorized(None, [])

    @pytest.mark.parametrize("role", list(Role))
    def test_empty_roles_allow_any_actor(self, role: Role) -> None:
        assert is_authorized(make_actor(role), [])

    def test_role_membership(self) -> None:
        teacher = make_actor(Role.Teacher)

        assert is_authorized(teacher, [Role.Teacher, Role.Admin])
        assert not is_authorized(teacher, [Role.Admin])
        assert not is_authorized(make_actor(Role.Student), [Role.Teacher, Role.Admin])

    def test_authorize_returns_actor(self) -> None:
        admin = make_actor(Role.Admin)

        assert authorize(admin, [Role.Admin]) is admin

    def test_authorize_raises_unauthorized(self) -> None:
        student = make_actor(Role.Student)

        with pytest.raises(Unauthorized) as exc_info:
            authorize(student, [Role.Admin])

        assert exc_info.value.actor is student
        assert exc_info.value.allowed_roles == frozenset([Role.Admin])

    def test_authorize_without_actor(self) -> None:
        with pytest.raises(Unauthorized, match="not signed in"):
            authorize(None, [])


class TestLocalAuthProvider(object):
    """Tests for LocalAuthProvider.authenticate()."""

    def test_demo_password(self, provider: LocalAuthProvider) -> None:
        result = provider.authenticate(TeacherEmail, p.Secret[str](DemoPassword))

        assert result.success
        assert result.actor is not None
        assert result.actor.role is Role.Teacher

    def test_email_is_case_insensitive(self, provider: LocalAuthProvider) -> None:
        result = provider.authenticate(TeacherEmail.upper(), p.Secret[str](DemoPassword))

        assert result.success

    def test_records_last_activity(self, provider: LocalAuthProvider, store: DataStore) -> None:
        provider.authenticate(StudentEmail, p.Secret[str](DemoPassword))

        student = user_storage.get(email=StudentEmail, store=store)
        assert student is not None
        assert student.last_activity == Now

    def test_wrong_password(self, provider: LocalAuthProvider) -> None:
        result = provider.authenticate(TeacherEmail, p.Secret[str]("wrong"))

        assert not result.success
        assert result.actor is None

    def test_unknown_email(self, provider: LocalAuthProvider) -> None:
        assert not provider.authenticate("nobody@gmail.edu", p.Secret[str](DemoPassword)).success

    def test_inactive_actor(self, provider: LocalAuthProvider) -> None:
        result = provider.authenticate("michael.brown@gmail.edu", p.Secret[str](DemoPassword))

        assert not result.success
        assert result.error == "Account is inactive"

    def test_personal_password_replaces_demo_password(self, provider: LocalAuthProvider, store: DataStore) -> None:
        teacher = user_storage.get(email=TeacherEmail, store=store)
        assert teacher is not None
        user_storage.update(teacher.actor_id, password=p.Secret[str]("s3cret-pass"), store=store)

        assert provider.authenticate(TeacherEmail, p.Secret[str]("s3cret-pass")).success
        assert not provider.authenticate(TeacherEmail, p.Secret[str](DemoPassword)).success


class TestSessionService(object):
    """Tests for SessionService."""

    def test_starts_signed_out(self, service: SessionService) -> None:
        assert service.current_actor() is None

    def test_authenticate_sets_current_actor(self, service: SessionService) -> None:
        actor = service.authenticate(AdminEmail, DemoPassword)

        current = service.current_actor()
        assert current is not None
        assert current.actor_id == actor.actor_id
        assert current.role is Role.Admin

    def test_bad_credentials_raise_and_keep_session(self, service: SessionService) -> None:
        service.authenticate(AdminEmail, DemoPassword)

        with pytest.raises(InvalidCredentials):
            service.authenticate(TeacherEmail, "nope")

        current = service.current_actor()
        assert current is not None
        assert current.email == AdminEmail

    def test_logout(self, service: SessionService) -> None:
        service.authenticate(StudentEmail, DemoPassword)

        service.logout()

        assert service.current_actor() is None

    def test_require(self, service: SessionService) -> None:
        with pytest.raises(Unauthorized):
            service.require()

        service.authenticate(StudentEmail, DemoPassword)

        assert service.require().email == StudentEmail
        with pytest.raises(Unauthorized):
            service.require([Role.Teacher, Role.Admin])

    def test_must_be_started(self, provider: LocalAuthProvider) -> None:
        svc = SessionService(MemorySessionStore(), provider, lambda: Now)

        with pytest.raises(RuntimeError):
            svc.current_actor()

    def test_session_survives_a_new_service(self, provider: LocalAuthProvider, tmp_path: Path) -> None:
        """A file store carries the session over to the next process."""
        path = tmp_path / "session.json"
        first = SessionService(FileSessionStore(path), provider, lambda: Now)
        first.start()
        first.authenticate(TeacherEmail, DemoPassword)
        first.stop()

        second = SessionService(FileSessionStore(path), provider, lambda: Now)
        second.start()
        current = second.current_actor()

        assert current is not None
        assert current.email == TeacherEmail

    def test_corrupt_record_is_discarded(self, provider: LocalAuthProvider, tmp_path: Path) -> None:
        path = tmp_path / "session.json"
        path.write_text("{not json", encoding="utf8")
        svc = SessionService(FileSessionStore(path), provider, lambda: Now)
        svc.start()

        assert svc.current_actor() is None
        assert json.loads(path.read_text(encoding="utf8")) == {}

    def test_invalid_record_is_discarded(self, provider: LocalAuthProvider) -> None:
        store = MemorySessionStore()
        store.set(CurrentSessionKey, {"actor": {"name": "half a record"}})
        svc = SessionService(store, provider, lambda: Now)
        svc.start()

        assert svc.current_actor() is None
        assert store.get(CurrentSessionKey) is None


class TestSessionStores(object):
    """Tests for MemorySessionStore and FileSessionStore."""

    @pytest.fixture(params=["memory", "file"])
    def session_store(self, request: pytest.FixtureRequest, tmp_path: Path) -> SessionStore:
        if request.param == "memory":
            return MemorySessionStore()
        return FileSessionStore(tmp_path / "state" / "session.json")

    def test_set_get_remove(self, session_store: SessionStore) -> None:
        session_store.set("k", {"a": 1, "b": ["x"]})

        assert session_store.get("k") == {"a": 1, "b": ["x"]}

        session_store.remove("k")
        assert session_store.get("k") is None

    def test_remove_absent_key(self, session_store: SessionStore) -> None:
        session_store.remove("missing")

        assert session_store.get("missing") is None

    def test_stored_record_is_a_copy(self, session_store: SessionStore) -> None:
        record = {"a": 1}
        session_store.set("k", record)
        record["a"] = 2

        assert session_store.get("k") == {"a": 1}

    def test_corrupt_file_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "session.json"
        path.write_text("[1, 2", encoding="utf8")

        with pytest.raises(CorruptSession):
            FileSessionStore(path).get(CurrentSessionKey)

    def test_non_object_file_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "session.json"
        path.write_text("[1, 2]", encoding="utf8")

        with pytest.raises(CorruptSession):
            FileSessionStore(path).get(CurrentSessionKey)

    def test_set_replaces_corrupt_file(self, tmp_path: Path) -> None:
        path = tmp_path / "session.json"
        path.write_text("garbage", encoding="utf8")
        fs = FileSessionStore(path)

        fs.set("k", {"v": True})

        assert fs.get("k") == {"v": True}


class TestJWTManager(object):
    """Tests for JWTManager."""

    def test_round_trip(self) -> None:
        manager = JWTManager("a-test-secret-that-is-long-enough-for-hs256", access_token_expire_minutes=5)
        actor_id = ActorID()

        data = manager.decode_token(manager.create_access_token(actor_id, Role.Teacher))

        assert data is not None
        assert data.actor_id == actor_id
        assert data.role is Role.Teacher
        assert data.expires_at - data.issued_at == datetime.timedelta(minutes=5)

    def test_expired_token(self) -> None:
        manager = JWTManager("a-test-secret-that-is-long-enough-for-hs256")
        token = manager.create_access_token(ActorID(), Role.Student, expires_delta=datetime.timedelta(seconds=-1))

        assert manager.decode_token(token) is None

    def test_wrong_secret(self) -> None:
        token = JWTManager("one-secret-that-is-long-enough-for-hs256").create_access_token(ActorID(), Role.Admin)

        assert JWTManager("another-secret-that-is-long-enough-for-hs256").decode_token(token) is None

    def test_garbage(self) -> None:
        assert JWTManager("a-test-secret-that-is-long-enough-for-hs256").decode_token("not.a.token") is None


def test_inactive_status_in_fixture(store: DataStore) -> None:
    michael = user_storage.get(email="michael.brown@gmail.edu", store=store)

    assert michael is not None
    assert michael.status is ActorStatus.Inactive
