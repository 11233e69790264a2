from __future__ import annotations

import datetime
import typing as t

from labdesk.core import di
from labdesk.lib import NotSet
from labdesk.metrics import validate_grade
from labdesk.model import ActorID, Assignment, AssignmentID

from .errors import EntityNotFound
from .store import DataStore, replace


def get(
    assignment_id: AssignmentID,
    *,
    store: DataStore = di.Provide["storage.store"],
) -> Assignment | None:
    """Get an assignment by ID."""
    with store.begin():
        return store.assignments.get(assignment_id)


def find(
    *,
    search: str | None = None,
    created_by: ActorID | None = None,
    store: DataStore = di.Provide["storage.store"],
) -> tuple[Assignment, ...]:
    """Find assignments ordered by deadline.

    `search` matches a case-insensitive substring of the title or description.
    """
    needle = search.strip().casefold() if search else None
    with store.begin():
        rows = list(store.assignments.values())
    if created_by is not None:
        rows = [a for a in rows if a.created_by == created_by]
    if needle:
        rows = [a for a in rows if needle in a.title.casefold() or needle in a.description.casefold()]
    return tuple(sorted(rows, key=lambda a: (a.deadline, a.title)))


def create(
    *,
    title: str,
    description: str,
    deadline: datetime.datetime,
    created_by: ActorID,
    max_grade: int = 100,
    materials: str | None = None,
    assignment_id: AssignmentID | None = None,
    create_time: datetime.datetime | None = None,
    store: DataStore = di.Provide["storage.store"],
) -> Assignment:
    """Create an assignment.

    Raises:
        EntityNotFound: if created_by does not correspond to an actor
    """
    with store.begin():
        if created_by not in store.actors:
            raise EntityNotFound("actor", created_by)
        assignment = Assignment(
            assignment_id=assignment_id or AssignmentID(),
            title=title,
            description=description,
            deadline=deadline,
            max_grade=max_grade,
            materials=materials,
            created_by=created_by,
            create_time=create_time or datetime.datetime.now(datetime.UTC),
        )
        store.assignments[assignment.assignment_id] = assignment
        return assignment


def update(
    assignment_id: AssignmentID,
    *,
    title: str | NotSet = NotSet(),
    description: str | NotSet = NotSet(),
    deadline: datetime.datetime | NotSet = NotSet(),
    max_grade: int | NotSet = NotSet(),
    materials: str | None | NotSet = NotSet(),
    store: DataStore = di.Provide["storage.store"],
) -> Assignment:
    """Update an assignment and stamp update_time.

    Raises:
        EntityNotFound: if assignment_id does not correspond to an assignment
        InvalidGrade: if max_grade would fall below a grade already recorded
    """
    values: dict[str, t.Any] = {}
    if not isinstance(title, NotSet):
        values["title"] = title
    if not isinstance(description, NotSet):
        values["description"] = description
    if not isinstance(deadline, NotSet):
        values["deadline"] = deadline
    if not isinstance(max_grade, NotSet):
        values["max_grade"] = max_grade
    if not isinstance(materials, NotSet):
        values["materials"] = materials

    with store.begin():
        assignment = store.assignments.get(assignment_id)
        if assignment is None:
            raise EntityNotFound("assignment", assignment_id)
        if "max_grade" in values:
            grades = [
                s.grade for s in store.submissions.values() if s.assignment_id == assignment_id and s.grade is not None
            ]
            validate_grade(max(grades, default=0), values["max_grade"])
        updated = replace(assignment, update_time=datetime.datetime.now(datetime.UTC), **values)
        store.assignments[assignment_id] = updated
        return updated


def delete(
    assignment_id: AssignmentID,
    *,
    store: DataStore = di.Provide["storage.store"],
) -> int:
    """Delete an assignment and its submissions; returns the number of submissions removed.

    Raises:
        EntityNotFound: if assignment_id does not correspond to an assignment
    """
    with store.begin():
        if assignment_id not in store.assignments:
            raise EntityNotFound("assignment", assignment_id)
        doomed = [s.submission_id for s in store.submissions.values() if s.assignment_id == assignment_id]
        for sid in doomed:
            del store.submissions[sid]
        del store.assignments[assignment_id]
        return len(doomed)
