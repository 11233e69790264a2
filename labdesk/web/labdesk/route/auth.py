"""Authentication routes."""

from __future__ import annotations

import datetime
import logging

import pydantic as p
from fastapi import APIRouter, Depends, HTTPException, status

from labdesk.auth import AuthProvider, JWTManager
from labdesk.auth.middleware import require_any
from labdesk.core import di
from labdesk.locale import Catalog
from labdesk.model import Actor, Locale

from ..dependencies import get_catalog, get_locale
from ..view.auth import ActorResponse, LoginRequest, LoginResponse, MessageResponse, TokenResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", operation_id="login")
@di.inject
def login(
    request: LoginRequest,
    catalog: Catalog = Depends(get_catalog),
    locale: Locale = Depends(get_locale),
    provider: AuthProvider = Depends(di.Provide["auth.provider"]),
    jwt_manager: JWTManager = Depends(di.Provide["auth.jwt_manager"]),
) -> LoginResponse:
    """Authenticate an actor and return an access token."""
    result = provider.authenticate(request.email, p.Secret[str](request.password))
    if not result.success or result.actor is None:
        logger.info("sign-in refused", extra={"email": request.email, "reason": result.error})
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=catalog.get("auth.invalid_credentials", locale),
            headers={"WWW-Authenticate": "Bearer"},
        )

    actor = result.actor
    expires_delta = datetime.timedelta(minutes=jwt_manager.access_token_expire_minutes)
    expires_at = datetime.datetime.now(datetime.UTC) + expires_delta
    access_token = jwt_manager.create_access_token(actor.actor_id, actor.role, expires_delta=expires_delta)
    logger.info("signed in", extra={"actor_id": str(actor.actor_id), "role": actor.role.value})

    return LoginResponse(
        actor=ActorResponse.model_validate(actor, from_attributes=True),
        token=TokenResponse(
            access_token=access_token,
            expires_at=expires_at,
        ),
    )


@router.post("/logout", operation_id="logout")
def logout(
    actor: Actor = Depends(require_any),
    catalog: Catalog = Depends(get_catalog),
    locale: Locale = Depends(get_locale),
) -> MessageResponse:
    """Sign out the current actor.

    Tokens are not revoked; the client discards its token.
    """
    logger.info("signed out", extra={"actor_id": str(actor.actor_id)})
    return MessageResponse(message=catalog.get("auth.signed_out", locale))


@router.get("/me", operation_id="get_current_actor")
def get_me(
    actor: Actor = Depends(require_any),
) -> ActorResponse:
    """Get the current authenticated actor."""
    return ActorResponse.model_validate(actor, from_attributes=True)
