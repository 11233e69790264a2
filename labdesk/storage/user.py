from __future__ import annotations

import datetime
import typing as t

import bcrypt
import pydantic as p

from labdesk.core import di
from labdesk.lib import NotSet
from labdesk.model import Actor, ActorID, ActorStatus, Role

from .errors import DuplicateEntity, EntityInUse, EntityNotFound
from .store import DataStore, replace


def hash_password(password: p.Secret[str]) -> str:
    return bcrypt.hashpw(password.get_secret_value().encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def check_password(actor: Actor, password: p.Secret[str]) -> bool:
    """Compare against the actor's own password hash; False when the actor has none"""
    if actor.password_hash is None:
        return False
    return bcrypt.checkpw(password.get_secret_value().encode("utf-8"), actor.password_hash.encode("utf-8"))


def get(
    *,
    actor_id: ActorID | None = None,
    email: str | None = None,
    store: DataStore = di.Provide["storage.store"],
) -> Actor | None:
    """Get an actor by ID or email.

    Exactly one of actor_id or email must be provided. Emails compare
    case-insensitively.
    """
    if actor_id is None and email is None:
        raise ValueError("Either actor_id or email must be provided")
    if actor_id is not None and email is not None:
        raise ValueError("Only one of actor_id or email should be provided")

    with store.begin():
        if actor_id is not None:
            return store.actors.get(actor_id)
        key = t.cast(str, email).casefold()
        return next((a for a in store.actors.values() if a.email.casefold() == key), None)


def find(
    *,
    role: Role | None = None,
    group: str | None = None,
    status: ActorStatus | None = None,
    search: str | None = None,
    store: DataStore = di.Provide["storage.store"],
) -> tuple[Actor, ...]:
    """Find actors matching criteria, ordered by name.

    `search` matches a case-insensitive substring of the name or email.
    """
    needle = search.strip().casefold() if search else None
    with store.begin():
        rows = list(store.actors.values())
    if role is not None:
        rows = [a for a in rows if a.role is role]
    if group is not None:
        rows = [a for a in rows if a.group == group]
    if status is not None:
        rows = [a for a in rows if a.status is status]
    if needle:
        rows = [a for a in rows if needle in a.name.casefold() or needle in a.email.casefold()]
    return tuple(sorted(rows, key=lambda a: (a.name.casefold(), a.email)))


def create(
    *,
    name: str,
    email: str,
    role: Role,
    group: str | None = None,
    status: ActorStatus = ActorStatus.Active,
    password: p.Secret[str] | None = None,
    actor_id: ActorID | None = None,
    create_time: datetime.datetime | None = None,
    store: DataStore = di.Provide["storage.store"],
) -> Actor:
    """Create an actor.

    Password, when given, is hashed with bcrypt; actors without one sign in
    with the shared demo credential.

    Raises:
        DuplicateEntity: if the email is taken
    """
    with store.begin():
        if get(email=email, store=store) is not None:
            raise DuplicateEntity("actor", "email", email)
        actor = Actor(
            actor_id=actor_id or ActorID(),
            name=name,
            email=email,
            role=role,
            group=group,
            status=status,
            password_hash=hash_password(password) if password is not None else None,
            create_time=create_time or datetime.datetime.now(datetime.UTC),
        )
        if actor.actor_id in store.actors:
            raise DuplicateEntity("actor", "actor_id", actor.actor_id)
        store.actors[actor.actor_id] = actor
        return actor


def update(
    actor_id: ActorID,
    *,
    name: str | NotSet = NotSet(),
    email: str | NotSet = NotSet(),
    group: str | None | NotSet = NotSet(),
    status: ActorStatus | NotSet = NotSet(),
    password: p.Secret[str] | NotSet = NotSet(),
    last_activity: datetime.datetime | None | NotSet = NotSet(),
    store: DataStore = di.Provide["storage.store"],
) -> Actor:
    """Update an actor.

    Uses NotSet sentinel for parameters where None is a valid update value.

    Raises:
        EntityNotFound: if actor_id does not correspond to an actor
        DuplicateEntity: if the new email belongs to another actor
    """
    values: dict[str, t.Any] = {}
    if not isinstance(name, NotSet):
        values["name"] = name
    if not isinstance(email, NotSet):
        values["email"] = email
    if not isinstance(group, NotSet):
        values["group"] = group
    if not isinstance(status, NotSet):
        values["status"] = status
    if not isinstance(password, NotSet):
        values["password_hash"] = hash_password(password)
    if not isinstance(last_activity, NotSet):
        values["last_activity"] = last_activity

    with store.begin():
        actor = store.actors.get(actor_id)
        if actor is None:
            raise EntityNotFound("actor", actor_id)
        if "email" in values:
            other = get(email=values["email"], store=store)
            if other is not None and other.actor_id != actor_id:
                raise DuplicateEntity("actor", "email", values["email"])
        updated = replace(actor, **values)
        store.actors[actor_id] = updated
        return updated


def delete(
    actor_id: ActorID,
    *,
    store: DataStore = di.Provide["storage.store"],
) -> Actor:
    """Delete an actor along with their submissions.

    Raises:
        EntityNotFound: if actor_id does not correspond to an actor
        EntityInUse: if the actor teaches a group or authored an assignment
    """
    with store.begin():
        actor = store.actors.get(actor_id)
        if actor is None:
            raise EntityNotFound("actor", actor_id)
        if taught := [g.name for g in store.groups.values() if g.teacher_id == actor_id]:
            raise EntityInUse("actor", actor_id, f"teaches {', '.join(sorted(taught))}")
        if any(a.created_by == actor_id for a in store.assignments.values()):
            raise EntityInUse("actor", actor_id, "authored assignments")
        for sid in [s.submission_id for s in store.submissions.values() if s.student_id == actor_id]:
            del store.submissions[sid]
        del store.actors[actor_id]
        return actor
