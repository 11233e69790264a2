from __future__ import annotations

import datetime
import typing as t

from labdesk.metrics import completion_rate, grade_distribution, GradeDistribution
from labdesk.model import Actor, Assignment, BaseModel, StudentProgress, Submission

from .progress import AssignmentRow, build_student_progress, student_states


class StudentProfile(BaseModel):
    progress: StudentProgress
    completion_rate: int
    assignments: list[AssignmentRow]
    distribution: GradeDistribution


def student_profile(
    student: Actor,
    assignments: t.Sequence[Assignment],
    submissions: t.Sequence[Submission],
    now: datetime.datetime,
) -> StudentProfile:
    progress = build_student_progress(student, assignments, submissions)
    own = [s for s in submissions if s.student_id == student.actor_id]
    max_grades = {a.assignment_id: a.max_grade for a in assignments}
    return StudentProfile(
        progress=progress,
        completion_rate=completion_rate(progress.completed_assignments, progress.total_assignments),
        assignments=student_states(student, assignments, own, now),
        distribution=grade_distribution((s for s in own if s.assignment_id in max_grades), max_grades),
    )
