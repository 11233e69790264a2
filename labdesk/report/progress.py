"""Per-student progress and the student list."""

from __future__ import annotations

import datetime
import typing as t

from labdesk.metrics import average_grade, completion_percentage, completion_rate, days_until_deadline, \
    deadline_passed, grade_percentage, is_deadline_soon, round_half_up
from labdesk.model import Actor, ActorStatus, Assignment, AssignmentState, BaseModel, Role, StudentProgress, \
    Submission


class AssignmentRow(BaseModel):
    """One assignment as it stands for one student"""

    assignment: Assignment
    state: AssignmentState
    submission: Submission | None = None
    days_left: int
    soon: bool


class StudentOverview(BaseModel):
    total: int
    active: int
    activity_rate: int
    average_completion: int
    average_grade: int


def build_student_progress(
    student: Actor,
    assignments: t.Sequence[Assignment],
    submissions: t.Iterable[Submission],
) -> StudentProgress:
    """Totals for one student.

    Every assignment counts toward the total; a submitted or graded one counts
    as completed. The average grade is the mean of graded submissions as
    percentages of their assignments' max grades, so assignments with
    different max grades weigh the same.
    """
    max_grades = {a.assignment_id: a.max_grade for a in assignments}
    own = [s for s in submissions if s.student_id == student.actor_id and s.assignment_id in max_grades]
    graded = [grade_percentage(s.grade, max_grades[s.assignment_id]) for s in own if s.grade is not None]
    moments = [m for m in [student.last_activity, *(s.submitted_at for s in own)] if m is not None]
    return StudentProgress(
        student_id=student.actor_id,
        name=student.name,
        email=student.email,
        group=student.group,
        status=student.status,
        total_assignments=len(max_grades),
        completed_assignments=len({s.assignment_id for s in own}),
        average_grade=average_grade(graded),
        last_activity=max(moments) if moments else None,
    )


def all_student_progress(
    actors: t.Iterable[Actor],
    assignments: t.Sequence[Assignment],
    submissions: t.Sequence[Submission],
) -> list[StudentProgress]:
    students = sorted((a for a in actors if a.role is Role.Student), key=lambda a: a.name.casefold())
    return [build_student_progress(s, assignments, submissions) for s in students]


def assignment_state(
    assignment: Assignment, submission: Submission | None, now: datetime.datetime
) -> AssignmentState:
    if submission is not None:
        return AssignmentState.Graded if submission.is_graded else AssignmentState.Submitted
    if deadline_passed(assignment.deadline, now):
        return AssignmentState.Overdue
    return AssignmentState.NotStarted


def student_states(
    student: Actor,
    assignments: t.Iterable[Assignment],
    submissions: t.Iterable[Submission],
    now: datetime.datetime,
) -> list[AssignmentRow]:
    """Each assignment with its state for `student`, ordered by deadline"""
    mine = {s.assignment_id: s for s in submissions if s.student_id == student.actor_id}
    rows: list[AssignmentRow] = []
    for a in sorted(assignments, key=lambda a: (a.deadline, a.title)):
        submission = mine.get(a.assignment_id)
        rows.append(
            AssignmentRow(
                assignment=a,
                state=assignment_state(a, submission, now),
                submission=submission,
                days_left=days_until_deadline(a.deadline, now),
                soon=is_deadline_soon(a.deadline, now),
            )
        )
    return rows


def filter_students(
    progress: t.Iterable[StudentProgress],
    *,
    search: str | None = None,
    group: str | None = None,
    status: ActorStatus | None = None,
) -> list[StudentProgress]:
    """Filter the student list; `search` matches name or email, case-insensitively"""
    needle = search.strip().casefold() if search else None
    rows = list(progress)
    if needle:
        rows = [s for s in rows if needle in s.name.casefold() or needle in s.email.casefold()]
    if group is not None:
        rows = [s for s in rows if s.group == group]
    if status is not None:
        rows = [s for s in rows if s.status is status]
    return rows


def student_overview(progress: t.Sequence[StudentProgress]) -> StudentOverview:
    active = sum(1 for s in progress if s.status is ActorStatus.Active)
    completions = [completion_percentage(s.completed_assignments, s.total_assignments) for s in progress]
    return StudentOverview(
        total=len(progress),
        active=active,
        activity_rate=completion_rate(active, len(progress)),
        average_completion=round_half_up(average_grade(completions)),
        average_grade=round_half_up(average_grade(s.average_grade for s in progress)),
    )
