"""User and group administration."""

from __future__ import annotations

import logging

import pydantic as p

from labdesk.auth import authorize
from labdesk.core import di
from labdesk.core.provider import TimestampProvider
from labdesk.model import Actor, ActorID, Group, Role
from labdesk.storage import DataStore, EntityNotFound
from labdesk.storage import group as group_storage
from labdesk.storage import user as user_storage

from .errors import ValidationFailed
from .runner import CancellationToken, OperationRunner

logger = logging.getLogger(__name__)

EmailAdapter: p.TypeAdapter[str] = p.TypeAdapter(p.EmailStr)


def check_email(email: str) -> str:
    try:
        return EmailAdapter.validate_python(email.strip())
    except p.ValidationError:
        raise ValidationFailed("validation.email_invalid", email=email) from None


async def create_user(
    actor: Actor | None,
    *,
    name: str,
    email: str,
    role: Role,
    group: str | None = None,
    cancel: CancellationToken | None = None,
    runner: OperationRunner = di.Provide["operation.runner"],
    store: DataStore = di.Provide["storage.store"],
    utcnow: TimestampProvider = di.Provide["utcnow"],
) -> Actor:
    """Create an actor; the email must not be taken (DuplicateEntity)."""
    admin = authorize(actor, (Role.Admin,))
    if not (name and name.strip() and email and email.strip()):
        raise ValidationFailed("validation.name_email_required")
    name = name.strip()
    email = check_email(email)
    group = group.strip() if group and group.strip() else None

    def apply() -> Actor:
        with store.begin():
            if group is not None and group_storage.get(name=group, store=store) is None:
                raise ValidationFailed("validation.group_unknown", group=group)
            return user_storage.create(
                name=name,
                email=email,
                role=role,
                group=group,
                create_time=utcnow(),
                store=store,
            )

    created = await runner.run(f"actor:new:{email.casefold()}", apply, cancel)
    logger.info(
        "user created",
        extra={
            "actor_id": str(created.actor_id),
            "email": created.email,
            "role": created.role.value,
            "admin_id": str(admin.actor_id),
        },
    )
    return created


async def delete_user(
    actor: Actor | None,
    actor_id: ActorID,
    *,
    cancel: CancellationToken | None = None,
    runner: OperationRunner = di.Provide["operation.runner"],
    store: DataStore = di.Provide["storage.store"],
) -> Actor:
    """Delete an actor; admins cannot delete themselves."""
    admin = authorize(actor, (Role.Admin,))
    if actor_id == admin.actor_id:
        raise ValidationFailed("validation.self_delete")

    def apply() -> Actor:
        return user_storage.delete(actor_id, store=store)

    deleted = await runner.run(f"actor:{actor_id}", apply, cancel)
    logger.info(
        "user deleted",
        extra={
            "actor_id": str(actor_id),
            "email": deleted.email,
            "admin_id": str(admin.actor_id),
        },
    )
    return deleted


async def create_group(
    actor: Actor | None,
    *,
    name: str,
    teacher_id: ActorID | None,
    description: str = "",
    cancel: CancellationToken | None = None,
    runner: OperationRunner = di.Provide["operation.runner"],
    store: DataStore = di.Provide["storage.store"],
    utcnow: TimestampProvider = di.Provide["utcnow"],
) -> Group:
    """Create a group taught by an existing teacher; names are unique (DuplicateEntity)."""
    admin = authorize(actor, (Role.Admin,))
    if not (name and name.strip()) or teacher_id is None:
        raise ValidationFailed("validation.group_teacher_required")
    name = name.strip()

    def apply() -> Group:
        with store.begin():
            teacher = user_storage.get(actor_id=teacher_id, store=store)
            if teacher is None:
                raise EntityNotFound("actor", teacher_id)
            if teacher.role is not Role.Teacher:
                raise ValidationFailed("validation.teacher_role", name=teacher.name)
            return group_storage.create(
                name=name,
                teacher_id=teacher_id,
                description=description.strip(),
                create_time=utcnow(),
                store=store,
            )

    created = await runner.run(f"group:new:{name}", apply, cancel)
    logger.info(
        "group created",
        extra={
            "group_id": str(created.group_id),
            "name": created.name,
            "teacher_id": str(teacher_id),
            "admin_id": str(admin.actor_id),
        },
    )
    return created
