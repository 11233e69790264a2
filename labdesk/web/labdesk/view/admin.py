"""View models for user and group administration."""

from __future__ import annotations

from labdesk.model import ActorID, BaseModel, Group, Role

from .auth import ActorResponse


class UserCreateRequest(BaseModel):
    """Request to create a user."""

    name: str
    email: str
    role: Role = Role.Student
    group: str | None = None


class UserListResponse(BaseModel):
    users: list[ActorResponse]
    total: int


class GroupCreateRequest(BaseModel):
    """Request to create a group."""

    name: str
    teacher_id: ActorID | None = None
    description: str = ""


class GroupListResponse(BaseModel):
    groups: list[Group]
    total: int
