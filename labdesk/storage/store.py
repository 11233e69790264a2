from __future__ import annotations

import contextlib
import threading
import typing as t

from labdesk.model import Actor, ActorID, Assignment, AssignmentID, Group, GroupID, Submission, SubmissionID


class Tables(t.NamedTuple):
    actors: dict[ActorID, Actor]
    assignments: dict[AssignmentID, Assignment]
    submissions: dict[SubmissionID, Submission]
    groups: dict[GroupID, Group]


class DataStore(object):
    """
    In-memory entity tables, guarded by a re-entrant lock.

    Every read and write goes through `begin()`. The outermost block takes a
    snapshot of the tables and restores it if the block raises, so a failed
    multi-step write leaves nothing behind. Entities are immutable pydantic
    models that are replaced, never mutated, which keeps the snapshot shallow.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._depth = 0
        self.actors: dict[ActorID, Actor] = {}
        self.assignments: dict[AssignmentID, Assignment] = {}
        self.submissions: dict[SubmissionID, Submission] = {}
        self.groups: dict[GroupID, Group] = {}

    @contextlib.contextmanager
    def begin(self) -> t.Iterator[DataStore]:
        with self._lock:
            snapshot = self.snapshot() if self._depth == 0 else None
            self._depth += 1
            try:
                yield self
            except BaseException:
                if snapshot is not None:
                    self.restore(snapshot)
                raise
            finally:
                self._depth -= 1

    def snapshot(self) -> Tables:
        """Copy of every table, taken under the lock so no write lands halfway"""
        with self._lock:
            return Tables(
                actors=dict(self.actors),
                assignments=dict(self.assignments),
                submissions=dict(self.submissions),
                groups=dict(self.groups),
            )

    def restore(self, tables: Tables) -> None:
        with self._lock:
            self.actors = dict(tables.actors)
            self.assignments = dict(tables.assignments)
            self.submissions = dict(tables.submissions)
            self.groups = dict(tables.groups)

    def clear(self) -> None:
        with self.begin():
            self.restore(Tables({}, {}, {}, {}))

    def __repr__(self) -> str:
        return (
            f"<DataStore actors={len(self.actors)} assignments={len(self.assignments)} "
            f"submissions={len(self.submissions)} groups={len(self.groups)}>"
        )


TEntity = t.TypeVar("TEntity", Actor, Assignment, Submission, Group)


def replace(entity: TEntity, **changes: t.Any) -> TEntity:
    """Copy of `entity` with `changes` applied and validated, excluded fields included"""
    data = {name: getattr(entity, name) for name in type(entity).model_fields}
    data.update(changes)
    return type(entity).model_validate(data)
