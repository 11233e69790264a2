"""Authentication dependencies for FastAPI routes."""

from __future__ import annotations

import typing as t

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from labdesk.core import di
from labdesk.model import Actor, Role
from labdesk.storage import DataStore
from labdesk.storage import user as user_storage

from .jwt import JWTManager
from .session import is_authorized

# Security scheme for JWT bearer tokens
bearer_scheme = HTTPBearer(auto_error=False)


@di.inject
def get_current_actor(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    jwt_manager: JWTManager = Depends(di.Provide["auth.jwt_manager"]),
    store: DataStore = Depends(di.Provide["storage.store"]),
) -> Actor:
    """Dependency to get the signed-in actor.

    The token only names the actor; role and status are read from the store
    on every request, so changes apply without signing in again.

    Raises:
        HTTPException 401: If no token is provided, the token is invalid, or
            the actor no longer exists or is inactive
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token_data = jwt_manager.decode_token(credentials.credentials)
    if token_data is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    actor = user_storage.get(actor_id=token_data.actor_id, store=store)
    if actor is None or not actor.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Actor not found",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return actor


def require_role(*allowed_roles: Role) -> t.Callable[..., Actor]:
    """Dependency factory to require specific roles; no roles means any actor.

    Usage:
        @router.get("/reports")
        def reports(actor: Actor = Depends(require_role(Role.Teacher, Role.Admin))):
            ...
    """

    def check_role(actor: Actor = Depends(get_current_actor)) -> Actor:
        if not is_authorized(actor, allowed_roles):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Role '{actor.role.value}' not authorized for this resource",
            )
        return actor

    return check_role


# Convenience dependencies
require_any = require_role()
require_staff = require_role(Role.Teacher, Role.Admin)
require_admin = require_role(Role.Admin)
require_student = require_role(Role.Student)
