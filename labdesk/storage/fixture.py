"""Seed the in-memory store from a YAML fixture under `storage/fixtures/`.

Fixture times are offsets in days from the moment of loading, so deadlines
in the demo data stay upcoming (or overdue) whenever it is loaded. Entity
IDs are derived from stable names, so a seeded actor keeps its ID across
processes and a persisted session stays valid.
"""

from __future__ import annotations

import datetime
import typing as t
from pathlib import Path

import pydantic as p
import yaml

from labdesk.core import di
from labdesk.core.provider import LoggingProvider
from labdesk.model import ActorID, ActorStatus, AssignmentID, BaseModel, GroupID, Role, SubmissionID

from . import assignment as assignment_storage
from . import group as group_storage
from . import submission as submission_storage
from . import user as user_storage
from .store import DataStore

FixtureRoot = Path(__file__).parent / "fixtures"


class FixtureActor(BaseModel):
    name: str
    email: p.EmailStr
    role: Role
    group: str | None = None
    status: ActorStatus = ActorStatus.Active
    created_days: int = 0
    active_days: int | None = None


class FixtureGroup(BaseModel):
    name: str
    description: str = ""
    teacher: p.EmailStr
    created_days: int = 0


class FixtureAssignment(BaseModel):
    title: str
    description: str
    deadline_days: int
    max_grade: int = 100
    materials: str | None = None
    created_by: p.EmailStr
    created_days: int = 0


class FixtureSubmission(BaseModel):
    assignment: str
    student: p.EmailStr
    file: str
    submitted_days: int
    grade: float | None = None
    comment: str | None = None


class Fixture(BaseModel):
    actors: list[FixtureActor] = []
    groups: list[FixtureGroup] = []
    assignments: list[FixtureAssignment] = []
    submissions: list[FixtureSubmission] = []


def read(name: str) -> Fixture:
    path = FixtureRoot / f"{name}.yaml"
    if not path.exists():
        raise FileNotFoundError(f"no such fixture: {name}")
    with path.open(encoding="utf8") as f:
        return Fixture.model_validate(yaml.safe_load(f) or {})


def load(
    name: str,
    *,
    now: datetime.datetime,
    store: DataStore = di.Provide["storage.store"],
) -> DataStore:
    """Replace the store's contents with the named fixture"""
    logger = LoggingProvider.get_logger()
    fixture = read(name)

    def days(n: int) -> datetime.datetime:
        return now + datetime.timedelta(days=n)

    def end_of_day(n: int) -> datetime.datetime:
        return days(n).replace(hour=23, minute=59, second=0, microsecond=0)

    with store.begin():
        store.clear()
        actors: dict[str, ActorID] = {}
        for fa in fixture.actors:
            actor = user_storage.create(
                actor_id=ActorID.derive(fa.email),
                name=fa.name,
                email=fa.email,
                role=fa.role,
                group=fa.group,
                status=fa.status,
                create_time=days(fa.created_days),
                store=store,
            )
            if fa.active_days is not None:
                user_storage.update(actor.actor_id, last_activity=days(fa.active_days), store=store)
            actors[fa.email] = actor.actor_id

        for fg in fixture.groups:
            group_storage.create(
                group_id=GroupID.derive(fg.name),
                name=fg.name,
                description=fg.description,
                teacher_id=actors[fg.teacher],
                create_time=days(fg.created_days),
                store=store,
            )

        assignments: dict[str, AssignmentID] = {}
        for fs in fixture.assignments:
            a = assignment_storage.create(
                assignment_id=AssignmentID.derive(fs.title),
                title=fs.title,
                description=fs.description,
                deadline=end_of_day(fs.deadline_days),
                max_grade=fs.max_grade,
                materials=fs.materials,
                created_by=actors[fs.created_by],
                create_time=days(fs.created_days),
                store=store,
            )
            assignments[fs.title] = a.assignment_id

        for fsub in fixture.submissions:
            s = submission_storage.create(
                submission_id=SubmissionID.derive(f"{fsub.assignment}:{fsub.student}"),
                assignment_id=assignments[fsub.assignment],
                student_id=actors[fsub.student],
                file=fsub.file,
                submitted_at=days(fsub.submitted_days),
                store=store,
            )
            if fsub.grade is not None:
                submission_storage.grade(
                    s.submission_id,
                    grade=fsub.grade,
                    comment=fsub.comment,
                    graded_at=days(fsub.submitted_days + 1),
                    store=store,
                )

    logger.info(
        "loaded fixture",
        extra={
            "fixture": name,
            "actors": len(fixture.actors),
            "groups": len(fixture.groups),
            "assignments": len(fixture.assignments),
            "submissions": len(fixture.submissions),
        },
    )
    return store


def provide_store(seed: t.Literal["demo", "none"], utcnow: t.Callable[[], datetime.datetime]) -> DataStore:
    store = DataStore()
    if seed != "none":
        load(seed, now=utcnow(), store=store)
    return store
