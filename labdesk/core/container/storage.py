from __future__ import annotations

import datetime
import typing as t
from pathlib import Path

from dependency_injector.containers import DeclarativeContainer
from dependency_injector.providers import Configuration, Dependency, Provider, Singleton

from labdesk.auth.store import FileSessionStore, MemorySessionStore, SessionStore
from labdesk.storage import DataStore
from labdesk.storage.fixture import provide_store

from ..provider import LoggingProvider


def provide_session_store(
    backend: t.Literal["memory", "file"],
    path: Path | None,
    state_path: t.Callable[[], Path],
    logging: LoggingProvider,
) -> SessionStore:
    logger = logging.get_logger()
    match backend:
        case "memory":
            store: SessionStore = MemorySessionStore()
        case "file":
            # the state directory is only created when it is needed
            store = FileSessionStore(Path(path) if path else state_path() / "session.json")
        case _:
            raise ValueError(f"unknown session backend: {backend!r}")
    logger.debug("session store ready", extra={"backend": backend})
    return store


class StorageContainer(DeclarativeContainer):
    config: Configuration = Configuration()
    logging: Provider[LoggingProvider] = Dependency()
    utcnow: Provider[t.Callable[[], datetime.datetime]] = Dependency()
    state_path: Provider[Path] = Dependency()

    store: Provider[DataStore] = Singleton(provide_store, seed=config.seed, utcnow=utcnow)
    session_store: Provider[SessionStore] = Singleton(
        provide_session_store,
        backend=config.session.backend,
        path=config.session.path,
        state_path=state_path.provider,
        logging=logging,
    )
