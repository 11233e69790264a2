"""Local authentication against the in-memory actor table."""

from __future__ import annotations

import datetime
import hmac
import typing as t

import pydantic as p

from labdesk.model import Actor
from labdesk.storage import DataStore
from labdesk.storage import user as user_storage

from .provider import AuthProvider, AuthResult


class LocalAuthProvider(AuthProvider):
    """Check passwords against actors in the data store.

    An actor who has set a personal password is checked with bcrypt against
    its hash. Every other actor shares the single demo credential. This is a
    stand-in for real authentication, not a security boundary.
    """

    def __init__(
        self,
        store: DataStore,
        demo_password: p.Secret[str] | str,
        utcnow: t.Callable[[], datetime.datetime],
    ) -> None:
        self._store = store
        self._demo_password = demo_password if isinstance(demo_password, p.Secret) else p.Secret[str](demo_password)
        self._utcnow = utcnow

    def authenticate(self, email: str, password: p.Secret[str]) -> AuthResult:
        """Authenticate with email/password."""
        actor = user_storage.get(email=email.strip(), store=self._store)
        if actor is None:
            return AuthResult(success=False, error="Invalid email or password")
        if not actor.is_active:
            return AuthResult(success=False, error="Account is inactive")
        if not self.verify_password(actor, password):
            return AuthResult(success=False, error="Invalid email or password")
        actor = user_storage.update(actor.actor_id, last_activity=self._utcnow(), store=self._store)
        return AuthResult(success=True, actor=actor)

    def verify_password(self, actor: Actor, password: p.Secret[str]) -> bool:
        """Verify an actor's password."""
        if actor.password_hash is not None:
            return user_storage.check_password(actor, password)
        return hmac.compare_digest(
            password.get_secret_value().encode("utf-8"),
            self._demo_password.get_secret_value().encode("utf-8"),
        )
