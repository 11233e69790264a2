"""Group and assignment reports for teachers and admins."""

from __future__ import annotations

import datetime
import typing as t

from labdesk.metrics import aggregate_group_stats, average_grade, completion_rate, deadline_passed, \
    grade_percentage, round_half_up
from labdesk.model import Actor, ActorID, Assignment, BaseModel, Group, Role, StudentProgress, Submission


class OverallStats(BaseModel):
    total_students: int
    total_groups: int
    average_grade: int
    average_completion: int


class GroupReport(BaseModel):
    group: Group
    teacher_name: str | None = None
    student_count: int
    average_grade: int
    completion_rate: int
    active_assignments: int


class AssignmentReport(BaseModel):
    assignment: Assignment
    submission_count: int
    total_students: int
    average_grade: int
    completion_rate: int


def overall_stats(
    groups: t.Sequence[Group],
    students: t.Sequence[StudentProgress],
    group: str | None = None,
) -> OverallStats:
    """Headline numbers for all groups, or for the one named `group`"""
    if group is not None:
        groups = [g for g in groups if g.name == group]
        students = [s for s in students if s.group == group]
    stats = aggregate_group_stats(students)
    return OverallStats(
        total_students=len(students),
        total_groups=len(groups),
        average_grade=round_half_up(stats.average_grade),
        average_completion=round_half_up(stats.average_completion),
    )


def group_reports(
    groups: t.Sequence[Group],
    students: t.Sequence[StudentProgress],
    actors: t.Mapping[ActorID, Actor],
    assignments: t.Sequence[Assignment],
    now: datetime.datetime,
) -> list[GroupReport]:
    """One row per group; active assignments are the teacher's open ones"""
    reports: list[GroupReport] = []
    for g in sorted(groups, key=lambda g: g.name):
        members = [s for s in students if s.group == g.name]
        stats = aggregate_group_stats(members)
        teacher = actors.get(g.teacher_id)
        open_ = [a for a in assignments if a.created_by == g.teacher_id and not deadline_passed(a.deadline, now)]
        reports.append(
            GroupReport(
                group=g,
                teacher_name=teacher.name if teacher else None,
                student_count=len(members),
                average_grade=round_half_up(stats.average_grade),
                completion_rate=round_half_up(stats.average_completion),
                active_assignments=len(open_),
            )
        )
    return reports


def assignment_reports(
    assignments: t.Sequence[Assignment],
    submissions: t.Sequence[Submission],
    actors: t.Iterable[Actor],
    group: str | None = None,
) -> list[AssignmentReport]:
    """Submission count, completion rate and average grade (as a percentage) per assignment.

    With `group`, only that group's students count.
    """
    students = {a.actor_id for a in actors if a.role is Role.Student and (group is None or a.group == group)}
    reports: list[AssignmentReport] = []
    for a in sorted(assignments, key=lambda a: (a.deadline, a.title)):
        subs = [s for s in submissions if s.assignment_id == a.assignment_id and s.student_id in students]
        grades = [grade_percentage(s.grade, a.max_grade) for s in subs if s.grade is not None]
        reports.append(
            AssignmentReport(
                assignment=a,
                submission_count=len(subs),
                total_students=len(students),
                average_grade=round_half_up(average_grade(grades)),
                completion_rate=completion_rate(len(subs), len(students)),
            )
        )
    return reports
