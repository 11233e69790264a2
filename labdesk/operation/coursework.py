"""Student submissions, grading and assignment authoring."""

from __future__ import annotations

import datetime
import logging
import typing as t

from labdesk.auth import authorize
from labdesk.core import di
from labdesk.core.provider import TimestampProvider
from labdesk.lib import NotSet
from labdesk.metrics import deadline_passed, InvalidGrade
from labdesk.model import Actor, Assignment, AssignmentID, Role, Submission, SubmissionID
from labdesk.storage import DataStore, EntityNotFound
from labdesk.storage import assignment as assignment_storage
from labdesk.storage import submission as submission_storage

from .errors import ValidationFailed
from .runner import CancellationToken, OperationRunner

logger = logging.getLogger(__name__)

Staff = (Role.Teacher, Role.Admin)
MaxGradeRange = (1, 1000)


class SubmitResult(t.NamedTuple):
    submission: Submission
    late: bool


def _required(value: str | None, message_key: str) -> str:
    if value is None or not value.strip():
        raise ValidationFailed(message_key)
    return value.strip()


def _check_deadline(deadline: datetime.datetime) -> None:
    if deadline.tzinfo is None or deadline.utcoffset() is None:
        raise ValidationFailed("validation.deadline_timezone")


def _check_max_grade(max_grade: int) -> None:
    lo, hi = MaxGradeRange
    if not lo <= max_grade <= hi:
        raise ValidationFailed("validation.max_grade_range", min=lo, max=hi)


async def submit_assignment(
    actor: Actor | None,
    assignment_id: AssignmentID,
    file: str,
    *,
    cancel: CancellationToken | None = None,
    runner: OperationRunner = di.Provide["operation.runner"],
    store: DataStore = di.Provide["storage.store"],
    utcnow: TimestampProvider = di.Provide["utcnow"],
) -> SubmitResult:
    """Submit a file for an assignment.

    Submitting after the deadline is allowed and reported as late. A second
    submission of the same assignment is refused with DuplicateEntity.
    """
    student = authorize(actor, (Role.Student,))
    filename = _required(file, "validation.file_required")

    def apply() -> SubmitResult:
        with store.begin():
            assignment = assignment_storage.get(assignment_id, store=store)
            if assignment is None:
                raise EntityNotFound("assignment", assignment_id)
            now = utcnow()
            submission = submission_storage.create(
                assignment_id=assignment_id,
                student_id=student.actor_id,
                file=filename,
                submitted_at=now,
                store=store,
            )
            return SubmitResult(submission, deadline_passed(assignment.deadline, now))

    result = await runner.run(f"submission:{assignment_id}:{student.actor_id}", apply, cancel)
    logger.info(
        "assignment submitted",
        extra={
            "submission_id": str(result.submission.submission_id),
            "assignment_id": str(assignment_id),
            "student_id": str(student.actor_id),
            "late": result.late,
        },
    )
    return result


async def grade_submission(
    actor: Actor | None,
    submission_id: SubmissionID,
    grade: float,
    comment: str | None = None,
    *,
    cancel: CancellationToken | None = None,
    runner: OperationRunner = di.Provide["operation.runner"],
    store: DataStore = di.Provide["storage.store"],
    utcnow: TimestampProvider = di.Provide["utcnow"],
) -> Submission:
    """Grade (or re-grade) a submission; InvalidGrade when outside 0..max_grade."""
    grader = authorize(actor, Staff)
    note = comment.strip() if comment and comment.strip() else None

    def apply() -> Submission:
        return submission_storage.grade(submission_id, grade=grade, comment=note, graded_at=utcnow(), store=store)

    graded = await runner.run(f"submission:{submission_id}", apply, cancel)
    logger.info(
        "submission graded",
        extra={
            "submission_id": str(submission_id),
            "grade": grade,
            "grader_id": str(grader.actor_id),
        },
    )
    return graded


async def create_assignment(
    actor: Actor | None,
    *,
    title: str,
    description: str,
    deadline: datetime.datetime | None,
    max_grade: int = 100,
    materials: str | None = None,
    cancel: CancellationToken | None = None,
    runner: OperationRunner = di.Provide["operation.runner"],
    store: DataStore = di.Provide["storage.store"],
    utcnow: TimestampProvider = di.Provide["utcnow"],
) -> Assignment:
    """Create an assignment whose deadline lies in the future."""
    author = authorize(actor, Staff)
    title = _required(title, "validation.title_required")
    description = _required(description, "validation.description_required")
    if deadline is None:
        raise ValidationFailed("validation.deadline_required")
    _check_deadline(deadline)
    if deadline_passed(deadline, utcnow()):
        raise ValidationFailed("validation.deadline_past")
    _check_max_grade(max_grade)

    def apply() -> Assignment:
        return assignment_storage.create(
            title=title,
            description=description,
            deadline=deadline,
            max_grade=max_grade,
            materials=materials or None,
            created_by=author.actor_id,
            create_time=utcnow(),
            store=store,
        )

    created = await runner.run(f"assignment:new:{author.actor_id}", apply, cancel)
    logger.info(
        "assignment created",
        extra={
            "assignment_id": str(created.assignment_id),
            "title": created.title,
            "created_by": str(author.actor_id),
        },
    )
    return created


async def update_assignment(
    actor: Actor | None,
    assignment_id: AssignmentID,
    *,
    title: str | NotSet = NotSet(),
    description: str | NotSet = NotSet(),
    deadline: datetime.datetime | NotSet = NotSet(),
    max_grade: int | NotSet = NotSet(),
    materials: str | None | NotSet = NotSet(),
    cancel: CancellationToken | None = None,
    runner: OperationRunner = di.Provide["operation.runner"],
    store: DataStore = di.Provide["storage.store"],
) -> Assignment:
    """Edit an assignment; fields that are given may not be blank."""
    editor = authorize(actor, Staff)
    if not isinstance(title, NotSet):
        title = _required(title, "validation.title_required")
    if not isinstance(description, NotSet):
        description = _required(description, "validation.description_required")
    if not isinstance(deadline, NotSet):
        _check_deadline(deadline)
    if not isinstance(max_grade, NotSet):
        _check_max_grade(max_grade)

    def apply() -> Assignment:
        try:
            return assignment_storage.update(
                assignment_id,
                title=title,
                description=description,
                deadline=deadline,
                max_grade=max_grade,
                materials=materials,
                store=store,
            )
        except InvalidGrade as ex:
            raise ValidationFailed("validation.max_grade_below_grades", grade=f"{ex.grade:g}") from ex

    updated = await runner.run(f"assignment:{assignment_id}", apply, cancel)
    logger.info(
        "assignment updated",
        extra={
            "assignment_id": str(assignment_id),
            "editor_id": str(editor.actor_id),
        },
    )
    return updated


async def delete_assignment(
    actor: Actor | None,
    assignment_id: AssignmentID,
    *,
    cancel: CancellationToken | None = None,
    runner: OperationRunner = di.Provide["operation.runner"],
    store: DataStore = di.Provide["storage.store"],
) -> int:
    """Delete an assignment with its submissions; returns how many submissions went with it."""
    editor = authorize(actor, Staff)

    def apply() -> int:
        return assignment_storage.delete(assignment_id, store=store)

    removed = await runner.run(f"assignment:{assignment_id}", apply, cancel)
    logger.info(
        "assignment deleted",
        extra={
            "assignment_id": str(assignment_id),
            "submissions": removed,
            "editor_id": str(editor.actor_id),
        },
    )
    return removed
