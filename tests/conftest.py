"""Pytest fixtures for labdesk tests.

The container is booted once per session in the test environment (memory
session store, no operation delay). Every test gets a freshly seeded demo
store and a fixed clock, so the seeded deadlines fall at known distances:

    Creating Tables in PostgreSQL       9 days overdue
    SELECT Queries and JOINs            2 days overdue
    Database Transactions               passed yesterday evening
    Database Indexing and Optimization  3 days left
    REST API with Actix Web             15 days left (max grade 50)

Usage:
    def test_dashboard(client: TestClient, auth_headers: AuthHeaders):
        response = client.get("/api/dashboard", headers=auth_headers("teacher1@gmail.edu"))
        assert response.status_code == 200
"""

from __future__ import annotations

import datetime
import os
import typing as t
from pathlib import Path

import pydantic as p
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

import labdesk
from labdesk.auth import JWTManager
from labdesk.core import LabdeskContainer
from labdesk.model import Actor, DeploymentEnvironment
from labdesk.storage import DataStore
from labdesk.storage import fixture as fixture_storage
from labdesk.storage import user as user_storage

# a Tuesday morning, UTC
Now = datetime.datetime(2026, 3, 10, 10, 0, tzinfo=datetime.UTC)

AdminEmail = "admin.university@gmail.edu"
TeacherEmail = "teacher1@gmail.edu"
OtherTeacherEmail = "teacher2@gmail.com"
StudentEmail = "baitur.ibrakhimov@gmail.edu"
DemoPassword = "password"

AuthHeaders = t.Callable[[str], dict[str, str]]


@pytest.fixture(scope="session")
def container() -> t.Generator[LabdeskContainer]:
    """Boot the DI container for the test session."""
    ct = LabdeskContainer()
    root = Path(os.path.dirname(labdesk.__file__)).parent

    LabdeskContainer.boot(
        ct,
        debug=True,
        env=DeploymentEnvironment.Test,
        config_root=p.FileUrl(f"file://{root}/config"),
        override=(),
    )

    yield ct

    ct.shutdown_resources()


@pytest.fixture
def now(container: LabdeskContainer) -> t.Generator[datetime.datetime]:
    """Freeze the container clock at `Now`."""
    container.utcnow.override(lambda: Now)
    yield Now
    container.utcnow.reset_override()


@pytest.fixture
def store(container: LabdeskContainer, now: datetime.datetime) -> t.Generator[DataStore]:
    """A demo store seeded at `now`, used by everything that injects the store."""
    ds = fixture_storage.load("demo", now=now, store=DataStore())
    container.storage.store.override(ds)
    yield ds
    container.storage.store.reset_override()


@pytest.fixture
def actor(store: DataStore) -> t.Callable[[str], Actor]:
    """Look up a seeded actor by email."""

    def get(email: str) -> Actor:
        found = user_storage.get(email=email, store=store)
        assert found is not None, email
        return found

    return get


@pytest.fixture(scope="session")
def app(container: LabdeskContainer) -> FastAPI:
    from labdesk.web.labdesk.main import _create_app  # pyright: ignore[reportPrivateUsage]

    return _create_app()


@pytest.fixture
def client(app: FastAPI, store: DataStore) -> t.Generator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(container: LabdeskContainer, actor: t.Callable[[str], Actor]) -> AuthHeaders:
    """Bearer headers for a seeded actor, minted without going through login."""
    jwt_manager: JWTManager = container.auth.jwt_manager()

    def headers(email: str) -> dict[str, str]:
        a = actor(email)
        return {"Authorization": f"Bearer {jwt_manager.create_access_token(a.actor_id, a.role)}"}

    return headers
