from __future__ import annotations

import datetime

from labdesk.core import di
from labdesk.metrics import validate_grade
from labdesk.model import ActorID, AssignmentID, Role, Submission, SubmissionID, SubmissionStatus

from .errors import DuplicateEntity, EntityNotFound, StorageError
from .store import DataStore, replace


def get(
    submission_id: SubmissionID,
    *,
    store: DataStore = di.Provide["storage.store"],
) -> Submission | None:
    """Get a submission by ID."""
    with store.begin():
        return store.submissions.get(submission_id)


def find(
    *,
    assignment_id: AssignmentID | None = None,
    student_id: ActorID | None = None,
    status: SubmissionStatus | None = None,
    store: DataStore = di.Provide["storage.store"],
) -> tuple[Submission, ...]:
    """Find submissions matching criteria, oldest first."""
    with store.begin():
        rows = list(store.submissions.values())
    if assignment_id is not None:
        rows = [s for s in rows if s.assignment_id == assignment_id]
    if student_id is not None:
        rows = [s for s in rows if s.student_id == student_id]
    if status is not None:
        rows = [s for s in rows if s.status is status]
    return tuple(sorted(rows, key=lambda s: s.submitted_at))


def create(
    *,
    assignment_id: AssignmentID,
    student_id: ActorID,
    file: str,
    submitted_at: datetime.datetime | None = None,
    submission_id: SubmissionID | None = None,
    store: DataStore = di.Provide["storage.store"],
) -> Submission:
    """Record a student's submission.

    Raises:
        EntityNotFound: if the assignment or the student does not exist
        StorageError: if the actor is not a student
        DuplicateEntity: if the student already submitted this assignment
    """
    with store.begin():
        if assignment_id not in store.assignments:
            raise EntityNotFound("assignment", assignment_id)
        student = store.actors.get(student_id)
        if student is None:
            raise EntityNotFound("actor", student_id)
        if student.role is not Role.Student:
            raise StorageError(f"actor {student_id} is not a student")
        if any(s.assignment_id == assignment_id and s.student_id == student_id for s in store.submissions.values()):
            raise DuplicateEntity("submission", "student", student_id)
        submission = Submission(
            submission_id=submission_id or SubmissionID(),
            assignment_id=assignment_id,
            student_id=student_id,
            submitted_at=submitted_at or datetime.datetime.now(datetime.UTC),
            file=file,
        )
        store.submissions[submission.submission_id] = submission
        return submission


def grade(
    submission_id: SubmissionID,
    *,
    grade: float,
    comment: str | None = None,
    graded_at: datetime.datetime | None = None,
    store: DataStore = di.Provide["storage.store"],
) -> Submission:
    """Grade a submission, or re-grade one already graded.

    The grade is checked against the assignment's max_grade before anything
    is recorded.

    Raises:
        EntityNotFound: if the submission or its assignment does not exist
        InvalidGrade: if the grade is outside 0..max_grade
    """
    with store.begin():
        submission = store.submissions.get(submission_id)
        if submission is None:
            raise EntityNotFound("submission", submission_id)
        assignment = store.assignments.get(submission.assignment_id)
        if assignment is None:
            raise EntityNotFound("assignment", submission.assignment_id)
        validate_grade(grade, assignment.max_grade)
        graded = replace(
            submission,
            status=SubmissionStatus.Graded,
            grade=grade,
            comment=comment,
            graded_at=graded_at or datetime.datetime.now(datetime.UTC),
        )
        store.submissions[submission_id] = graded
        return graded
