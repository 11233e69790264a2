"""The current-actor session and role-based capability checks."""

from __future__ import annotations

import datetime
import logging
import typing as t

import pydantic as p

from labdesk.model import Actor, Role

from .errors import CorruptSession, InvalidCredentials, Unauthorized
from .provider import AuthProvider
from .store import CurrentSessionKey, SessionStore

logger = logging.getLogger(__name__)


def is_authorized(actor: Actor | None, allowed_roles: t.Collection[Role]) -> bool:
    """True iff there is an actor and its role is allowed.

    An empty `allowed_roles` means any signed-in actor.
    """
    if actor is None:
        return False
    return not allowed_roles or actor.role in allowed_roles


def authorize(actor: Actor | None, allowed_roles: t.Collection[Role]) -> Actor:
    """Return the actor if `is_authorized`, raise Unauthorized otherwise"""
    if actor is None or not is_authorized(actor, allowed_roles):
        raise Unauthorized(actor, allowed_roles)
    return actor


class SessionRecord(p.BaseModel):
    actor: Actor
    started_at: p.AwareDatetime


class SessionService(object):
    """
    Owns the one current actor of a process.

    The actor is kept in a `SessionStore` so that it survives as long as the
    store does: the life of the process for the memory store, across
    processes for the file store. The service must be started before use
    and stopped at teardown; the container does both.
    """

    def __init__(
        self,
        store: SessionStore,
        provider: AuthProvider,
        utcnow: t.Callable[[], datetime.datetime],
    ) -> None:
        self._store = store
        self._provider = provider
        self._utcnow = utcnow
        self._started = False

    @property
    def started(self) -> bool:
        return self._started

    def start(self) -> None:
        if self._started:
            return
        self._started = True
        actor = self.current_actor()
        logger.debug(
            "session service started",
            extra={
                "store": type(self._store).__name__,
                "actor": actor.email if actor else None,
            },
        )

    def stop(self) -> None:
        if not self._started:
            return
        self._started = False
        logger.debug("session service stopped")

    def _check_started(self) -> None:
        if not self._started:
            raise RuntimeError("session service is not started")

    def authenticate(self, email: str, password: str | p.Secret[str]) -> Actor:
        """Sign in; the actor becomes current.

        Raises:
            InvalidCredentials: unknown email, inactive actor, or wrong password
        """
        self._check_started()
        secret = password if isinstance(password, p.Secret) else p.Secret[str](password)
        result = self._provider.authenticate(email, secret)
        if not result.success or result.actor is None:
            logger.info("sign-in refused", extra={"email": email, "reason": result.error})
            raise InvalidCredentials(email)

        self._write(result.actor)
        logger.info(
            "signed in",
            extra={
                "actor_id": str(result.actor.actor_id),
                "email": result.actor.email,
                "role": result.actor.role.value,
            },
        )
        return result.actor

    def current_actor(self) -> Actor | None:
        """The signed-in actor, or None.

        A record that cannot be read back is logged and discarded.
        """
        self._check_started()
        try:
            raw = self._store.get(CurrentSessionKey)
        except CorruptSession as e:
            logger.warning("discarding unreadable session", extra={"error": str(e)})
            self._store.remove(CurrentSessionKey)
            return None
        if raw is None:
            return None

        try:
            record = SessionRecord.model_validate(raw)
        except p.ValidationError as e:
            logger.warning("discarding invalid session record", extra={"errors": e.error_count()})
            self._store.remove(CurrentSessionKey)
            return None
        return record.actor

    def require(self, allowed_roles: t.Collection[Role] = ()) -> Actor:
        """The current actor, if it holds one of `allowed_roles`.

        Raises:
            Unauthorized: nobody is signed in, or the role is not allowed
        """
        return authorize(self.current_actor(), allowed_roles)

    def logout(self) -> None:
        self._check_started()
        actor = self.current_actor()
        self._store.remove(CurrentSessionKey)
        if actor is not None:
            logger.info("signed out", extra={"actor_id": str(actor.actor_id), "email": actor.email})

    def _write(self, actor: Actor) -> None:
        record = SessionRecord(actor=actor, started_at=self._utcnow())
        self._store.set(CurrentSessionKey, record.model_dump(mode="json"))


def provide_session_service(
    store: SessionStore,
    provider: AuthProvider,
    utcnow: t.Callable[[], datetime.datetime],
) -> t.Generator[SessionService]:
    service = SessionService(store, provider, utcnow)
    service.start()
    yield service
    service.stop()
