from __future__ import annotations

import typing as t

if t.TYPE_CHECKING:
    from labdesk.model import Actor, Role


class AuthError(Exception):
    """Base class for session and authorization failures"""


class InvalidCredentials(AuthError):
    def __init__(self, email: str):
        # one message for unknown email, inactive actor and bad password
        super().__init__("invalid email or password")
        self.email = email


class Unauthorized(AuthError):
    def __init__(self, actor: Actor | None, allowed_roles: t.Collection[Role]):
        if actor is None:
            msg = "not signed in"
        else:
            roles = ", ".join(sorted(r.value for r in allowed_roles))
            msg = f"role {actor.role.value!r} may not do this; requires one of: {roles}"
        super().__init__(msg)
        self.actor = actor
        self.allowed_roles = frozenset(allowed_roles)


class CorruptSession(AuthError):
    """A persisted session record that cannot be read back"""
