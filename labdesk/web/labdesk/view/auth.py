"""View models for authentication endpoints."""

from __future__ import annotations

import datetime

from pydantic import EmailStr

from labdesk.model import ActorID, ActorStatus, BaseModel, Role


class LoginRequest(BaseModel):
    """Request body for login."""

    email: str
    password: str


class TokenResponse(BaseModel):
    """Response containing access token."""

    access_token: str
    token_type: str = "bearer"
    expires_at: datetime.datetime


class ActorResponse(BaseModel):
    """Response containing actor information."""

    actor_id: ActorID
    email: EmailStr
    name: str
    role: Role
    group: str | None = None
    status: ActorStatus
    last_activity: datetime.datetime | None = None


class LoginResponse(BaseModel):
    """Response for successful login."""

    actor: ActorResponse
    token: TokenResponse


class MessageResponse(BaseModel):
    message: str
