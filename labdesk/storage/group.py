from __future__ import annotations

import datetime

from labdesk.core import di
from labdesk.model import ActorID, Group, GroupID, Role

from .errors import DuplicateEntity, EntityNotFound, StorageError
from .store import DataStore, replace, Tables


def _counted(group: Group, store: DataStore | Tables) -> Group:
    # student_count is derived from membership, never stored
    n = sum(1 for a in store.actors.values() if a.role is Role.Student and a.group == group.name)
    return replace(group, student_count=n)


def get(
    *,
    group_id: GroupID | None = None,
    name: str | None = None,
    store: DataStore = di.Provide["storage.store"],
) -> Group | None:
    """Get a group by ID or name."""
    if (group_id is None) == (name is None):
        raise ValueError("Exactly one of group_id or name must be provided")

    with store.begin():
        if group_id is not None:
            group = store.groups.get(group_id)
        else:
            group = next((g for g in store.groups.values() if g.name == name), None)
        return _counted(group, store) if group is not None else None


def find(
    *,
    teacher_id: ActorID | None = None,
    store: DataStore = di.Provide["storage.store"],
) -> tuple[Group, ...]:
    """Find groups, optionally only those taught by `teacher_id`, ordered by name."""
    with store.begin():
        rows = [g for g in store.groups.values() if teacher_id is None or g.teacher_id == teacher_id]
        return tuple(_counted(g, store) for g in sorted(rows, key=lambda g: g.name))


def create(
    *,
    name: str,
    teacher_id: ActorID,
    description: str = "",
    group_id: GroupID | None = None,
    create_time: datetime.datetime | None = None,
    store: DataStore = di.Provide["storage.store"],
) -> Group:
    """Create a group.

    Raises:
        DuplicateEntity: if the name is taken
        EntityNotFound: if the teacher does not exist
        StorageError: if the teacher is not a teacher
    """
    with store.begin():
        if any(g.name == name for g in store.groups.values()):
            raise DuplicateEntity("group", "name", name)
        teacher = store.actors.get(teacher_id)
        if teacher is None:
            raise EntityNotFound("actor", teacher_id)
        if teacher.role is not Role.Teacher:
            raise StorageError(f"actor {teacher_id} is not a teacher")
        group = Group(
            group_id=group_id or GroupID(),
            name=name,
            description=description,
            teacher_id=teacher_id,
            create_time=create_time or datetime.datetime.now(datetime.UTC),
        )
        store.groups[group.group_id] = group
        return _counted(group, store)


def from_tables(tables: Tables) -> tuple[Group, ...]:
    """Every group of a snapshot, counted against that snapshot's actors and ordered by name."""
    return tuple(_counted(g, tables) for g in sorted(tables.groups.values(), key=lambda g: g.name))
