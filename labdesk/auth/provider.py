"""Auth provider protocol for pluggable credential checks."""

from __future__ import annotations

import typing as t
from abc import abstractmethod

import pydantic as p

from labdesk.model import Actor


class AuthResult(t.NamedTuple):
    """Result of an authentication attempt."""

    success: bool
    actor: Actor | None = None
    error: str | None = None


class AuthProvider(t.Protocol):
    """Protocol for authentication providers.

    The session service asks a provider whether an email and password
    identify an actor; how the password is checked is up to the provider.
    """

    @abstractmethod
    def authenticate(self, email: str, password: p.Secret[str]) -> AuthResult:
        """Authenticate an actor with email and password.

        Returns:
            AuthResult with success=True and the actor if valid,
            or success=False and error message if invalid.
        """
        ...

    @abstractmethod
    def verify_password(self, actor: Actor, password: p.Secret[str]) -> bool:
        """Check a password for a known actor."""
        ...
