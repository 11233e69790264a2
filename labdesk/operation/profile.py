"""Changes an actor makes to their own profile."""

from __future__ import annotations

import logging

import pydantic as p

from labdesk.auth import authorize, AuthProvider
from labdesk.core import di
from labdesk.model import Actor
from labdesk.storage import DataStore, EntityNotFound
from labdesk.storage import user as user_storage

from .admin import check_email
from .errors import ValidationFailed
from .runner import CancellationToken, OperationRunner

logger = logging.getLogger(__name__)

MinPasswordLength = 6


async def update_profile(
    actor: Actor | None,
    *,
    name: str,
    email: str,
    cancel: CancellationToken | None = None,
    runner: OperationRunner = di.Provide["operation.runner"],
    store: DataStore = di.Provide["storage.store"],
) -> Actor:
    """Change one's own name and email; both are required."""
    me = authorize(actor, ())
    if not (name and name.strip()):
        raise ValidationFailed("validation.name_required")
    if not (email and email.strip()):
        raise ValidationFailed("validation.email_required")
    name = name.strip()
    email = check_email(email)

    def apply() -> Actor:
        return user_storage.update(me.actor_id, name=name, email=email, store=store)

    updated = await runner.run(f"actor:{me.actor_id}", apply, cancel)
    logger.info("profile updated", extra={"actor_id": str(me.actor_id), "email": updated.email})
    return updated


async def change_password(
    actor: Actor | None,
    *,
    current: str,
    new: str,
    confirm: str,
    cancel: CancellationToken | None = None,
    runner: OperationRunner = di.Provide["operation.runner"],
    store: DataStore = di.Provide["storage.store"],
    provider: AuthProvider = di.Provide["auth.provider"],
) -> Actor:
    """Set a personal password, checked against the current one."""
    me = authorize(actor, ())
    if not (current and new and confirm):
        raise ValidationFailed("validation.password_fields_required")
    if new != confirm:
        raise ValidationFailed("validation.password_mismatch")
    if len(new) < MinPasswordLength:
        raise ValidationFailed("validation.password_too_short", min=MinPasswordLength)

    def apply() -> Actor:
        with store.begin():
            stored = user_storage.get(actor_id=me.actor_id, store=store)
            if stored is None:
                raise EntityNotFound("actor", me.actor_id)
            if not provider.verify_password(stored, p.Secret[str](current)):
                raise ValidationFailed("validation.password_incorrect")
            return user_storage.update(me.actor_id, password=p.Secret[str](new), store=store)

    updated = await runner.run(f"actor:{me.actor_id}", apply, cancel)
    logger.info("password changed", extra={"actor_id": str(me.actor_id)})
    return updated
