"""View models for one's own profile."""

from __future__ import annotations

from labdesk.model import BaseModel


class ProfileUpdateRequest(BaseModel):
    name: str
    email: str


class PasswordChangeRequest(BaseModel):
    """Request to change one's password."""

    current: str
    new: str
    confirm: str
