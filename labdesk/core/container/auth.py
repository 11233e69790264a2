"""Authentication container for dependency injection."""

from __future__ import annotations

import datetime
import typing as t

from dependency_injector.containers import DeclarativeContainer
from dependency_injector.providers import Configuration, Dependency, Factory, Provider, Resource, Singleton

from labdesk.auth.jwt import JWTManager
from labdesk.auth.local import LocalAuthProvider
from labdesk.auth.session import provide_session_service, SessionService
from labdesk.auth.store import SessionStore
from labdesk.storage import DataStore


class AuthContainer(DeclarativeContainer):
    """Container for authentication services."""

    config: Configuration = Configuration()
    secrets: Configuration = Configuration()
    store: Provider[DataStore] = Dependency()
    session_store: Provider[SessionStore] = Dependency()
    utcnow: Provider[t.Callable[[], datetime.datetime]] = Dependency()

    jwt_manager: Provider[JWTManager] = Singleton(
        JWTManager,
        secret_key=secrets.jwt,
        algorithm=config.jwt_algorithm,
        access_token_expire_minutes=config.access_token_expire_minutes,
    )

    provider: Provider[LocalAuthProvider] = Factory(
        LocalAuthProvider,
        store=store,
        demo_password=secrets.demo_password,
        utcnow=utcnow,
    )

    # one session per process, started on first use and stopped by
    # shutdown_resources()
    session: Provider[SessionService] = Resource(
        provide_session_service,
        store=session_store,
        provider=provider,
        utcnow=utcnow,
    )
