"""User and group administration routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from labdesk.auth.middleware import require_admin
from labdesk.locale import Catalog
from labdesk.model import Actor, ActorID, ActorStatus, Group, Locale, Role
from labdesk.operation import admin as admin_ops
from labdesk.storage import group as group_storage
from labdesk.storage import user as user_storage

from ..dependencies import get_catalog, get_locale
from ..errors import Handled, http_error
from ..view.admin import GroupCreateRequest, GroupListResponse, UserCreateRequest, UserListResponse
from ..view.auth import ActorResponse

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/users", operation_id="list_users")
def list_users(
    role: Role | None = Query(default=None),
    group: str | None = Query(default=None),
    status_: ActorStatus | None = Query(default=None, alias="status"),
    search: str | None = Query(default=None),
    actor: Actor = Depends(require_admin),
) -> UserListResponse:
    """List users, optionally filtered."""
    users = user_storage.find(role=role, group=group, status=status_, search=search)
    return UserListResponse(
        users=[ActorResponse.model_validate(u, from_attributes=True) for u in users],
        total=len(users),
    )


@router.post("/users", operation_id="create_user", status_code=status.HTTP_201_CREATED)
async def create_user(
    request: UserCreateRequest,
    actor: Actor = Depends(require_admin),
    catalog: Catalog = Depends(get_catalog),
    locale: Locale = Depends(get_locale),
) -> ActorResponse:
    """Create a user; the email must be unused."""
    try:
        created = await admin_ops.create_user(
            actor, name=request.name, email=request.email, role=request.role, group=request.group
        )
    except Handled as ex:
        raise http_error(ex, catalog, locale) from ex
    return ActorResponse.model_validate(created, from_attributes=True)


@router.delete("/users/{actor_id}", operation_id="delete_user")
async def delete_user(
    actor_id: ActorID,
    actor: Actor = Depends(require_admin),
    catalog: Catalog = Depends(get_catalog),
    locale: Locale = Depends(get_locale),
) -> ActorResponse:
    """Delete a user along with their submissions; returns the deleted user."""
    try:
        deleted = await admin_ops.delete_user(actor, actor_id)
    except Handled as ex:
        raise http_error(ex, catalog, locale) from ex
    return ActorResponse.model_validate(deleted, from_attributes=True)


@router.get("/groups", operation_id="list_groups")
def list_groups(
    actor: Actor = Depends(require_admin),
) -> GroupListResponse:
    """List groups with their student counts."""
    groups = group_storage.find()
    return GroupListResponse(groups=list(groups), total=len(groups))


@router.post("/groups", operation_id="create_group", status_code=status.HTTP_201_CREATED)
async def create_group(
    request: GroupCreateRequest,
    actor: Actor = Depends(require_admin),
    catalog: Catalog = Depends(get_catalog),
    locale: Locale = Depends(get_locale),
) -> Group:
    """Create a group taught by an existing teacher."""
    try:
        return await admin_ops.create_group(
            actor, name=request.name, teacher_id=request.teacher_id, description=request.description
        )
    except Handled as ex:
        raise http_error(ex, catalog, locale) from ex
