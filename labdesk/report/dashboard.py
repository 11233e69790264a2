"""The landing page: greeting, role-specific stat cards, deadlines and recent activity."""

from __future__ import annotations

import datetime
import enum
import typing as t

from labdesk.locale import Catalog
from labdesk.metrics import deadline_passed, is_deadline_soon
from labdesk.model import Actor, ActorID, Assignment, BaseModel, Locale, Role, Submission, SubmissionStatus
from labdesk.storage.store import Tables

from .deadline import deadline_rows, DeadlineRow

RecentLimit = 5
UpcomingLimit = 5


class ActivityKind(enum.Enum):
    Submitted = "submitted"
    Graded = "graded"
    AssignmentCreated = "assignment_created"


class StatCard(BaseModel):
    key: str
    label: str
    value: int


class Activity(BaseModel):
    kind: ActivityKind
    at: datetime.datetime
    text: str


class Dashboard(BaseModel):
    greeting: str
    role: Role
    role_label: str
    cards: list[StatCard]
    upcoming: list[DeadlineRow]
    recent: list[Activity]


def _admin_stats(tables: Tables) -> dict[str, int]:
    return {
        "total_users": len(tables.actors),
        "total_assignments": len(tables.assignments),
        "total_groups": len(tables.groups),
        "active_submissions": sum(1 for s in tables.submissions.values() if s.status is SubmissionStatus.Submitted),
    }


def _teacher_stats(actor: Actor, tables: Tables) -> dict[str, int]:
    mine = {a.assignment_id for a in tables.assignments.values() if a.created_by == actor.actor_id}
    groups = {g.name for g in tables.groups.values() if g.teacher_id == actor.actor_id}
    subs = [s for s in tables.submissions.values() if s.assignment_id in mine]
    return {
        "total_assignments": len(mine),
        "total_students": sum(1 for a in tables.actors.values() if a.role is Role.Student and a.group in groups),
        "pending_grades": sum(1 for s in subs if s.status is SubmissionStatus.Submitted),
        "graded_submissions": sum(1 for s in subs if s.status is SubmissionStatus.Graded),
    }


def _student_stats(actor: Actor, tables: Tables, now: datetime.datetime) -> dict[str, int]:
    done = {s.assignment_id for s in tables.submissions.values() if s.student_id == actor.actor_id}
    open_ = [
        a for a in tables.assignments.values()
        if a.assignment_id not in done and not deadline_passed(a.deadline, now)
    ]
    return {
        "total_assignments": len(tables.assignments),
        "completed_assignments": len(done),
        "pending_assignments": len(open_),
        "upcoming_deadlines": sum(1 for a in open_ if is_deadline_soon(a.deadline, now)),
    }


def _visible_assignments(actor: Actor, tables: Tables) -> list[Assignment]:
    if actor.role is Role.Student:
        done = {s.assignment_id for s in tables.submissions.values() if s.student_id == actor.actor_id}
        return [a for a in tables.assignments.values() if a.assignment_id not in done]
    if actor.role is Role.Teacher:
        return [a for a in tables.assignments.values() if a.created_by == actor.actor_id]
    return list(tables.assignments.values())


def _visible_submissions(actor: Actor, tables: Tables) -> list[Submission]:
    if actor.role is Role.Student:
        return [s for s in tables.submissions.values() if s.student_id == actor.actor_id]
    if actor.role is Role.Teacher:
        mine = {a.assignment_id for a in tables.assignments.values() if a.created_by == actor.actor_id}
        return [s for s in tables.submissions.values() if s.assignment_id in mine]
    return list(tables.submissions.values())


def recent_activity(
    actor: Actor,
    tables: Tables,
    catalog: Catalog,
    locale: Locale | None = None,
    limit: int = RecentLimit,
) -> list[Activity]:
    """Latest submissions, grades and new assignments the actor can see, newest first"""
    names: dict[ActorID, str] = {a.actor_id: a.name for a in tables.actors.values()}
    events: list[Activity] = []
    for s in _visible_submissions(actor, tables):
        a = tables.assignments.get(s.assignment_id)
        if a is None:
            continue
        student = names.get(s.student_id, str(s.student_id))
        events.append(
            Activity(
                kind=ActivityKind.Submitted,
                at=s.submitted_at,
                text=catalog.get("activity.submitted", locale, student=student, assignment=a.title),
            )
        )
        if s.grade is not None and s.graded_at is not None:
            events.append(
                Activity(
                    kind=ActivityKind.Graded,
                    at=s.graded_at,
                    text=catalog.get(
                        "activity.graded",
                        locale,
                        student=student,
                        grade=f"{s.grade:g}",
                        max_grade=a.max_grade,
                        assignment=a.title,
                    ),
                )
            )
    for a in tables.assignments.values():
        if actor.role is Role.Teacher and a.created_by != actor.actor_id:
            continue
        events.append(
            Activity(
                kind=ActivityKind.AssignmentCreated,
                at=a.create_time,
                text=catalog.get("activity.assignment_created", locale, assignment=a.title),
            )
        )
    return sorted(events, key=lambda e: e.at, reverse=True)[:limit]


def dashboard(
    actor: Actor,
    tables: Tables,
    now: datetime.datetime,
    catalog: Catalog,
    locale: Locale | None = None,
    local_now: datetime.datetime | None = None,
) -> Dashboard:
    """Build the dashboard of `actor`.

    `local_now` is the actor's wall-clock time for the greeting; it defaults
    to `now`.
    """
    match actor.role:
        case Role.Admin:
            stats = _admin_stats(tables)
        case Role.Teacher:
            stats = _teacher_stats(actor, tables)
        case Role.Student:
            stats = _student_stats(actor, tables, now)

    upcoming = deadline_rows(_visible_assignments(actor, tables), now, include_overdue=False)
    return Dashboard(
        greeting=catalog.greeting(actor.name, local_now or now, locale),
        role=actor.role,
        role_label=catalog.get(f"role.{actor.role.value}", locale),
        cards=[StatCard(key=k, label=catalog.get(f"stat.{k}", locale), value=v) for k, v in stats.items()],
        upcoming=upcoming[:UpcomingLimit],
        recent=recent_activity(actor, tables, catalog, locale),
    )
