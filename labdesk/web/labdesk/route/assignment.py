"""Assignment, submission and grading routes."""

from __future__ import annotations

import datetime
import typing as t

from fastapi import APIRouter, Depends, HTTPException, Query, status

from labdesk.auth.middleware import require_any, require_staff, require_student
from labdesk.lib import NotSet
from labdesk.locale import Catalog
from labdesk.metrics import days_until_deadline, deadline_passed, grade_percentage, is_deadline_soon, letter_grade
from labdesk.model import Actor, ActorID, Assignment, AssignmentID, AssignmentState, Locale, Role, Submission, \
    SubmissionID
from labdesk.operation import coursework
from labdesk.report import assignment_state, deadline_rows
from labdesk.storage import Tables

from ..dependencies import get_catalog, get_locale, get_now, get_tables
from ..errors import Handled, http_error
from ..view.assignment import AssignmentCreateRequest, AssignmentDeleteResponse, AssignmentDetailResponse, \
    AssignmentListResponse, AssignmentResponse, AssignmentUpdateRequest, DeadlineListResponse, GradeRequest, \
    SubmissionResponse, SubmitRequest, SubmitResponse

router = APIRouter(prefix="/api/assignments", tags=["assignments"])


def _build_submission_response(
    submission: Submission, max_grade: int, names: t.Mapping[ActorID, str]
) -> SubmissionResponse:
    graded = submission.grade is not None
    return SubmissionResponse(
        submission_id=submission.submission_id,
        assignment_id=submission.assignment_id,
        student_id=submission.student_id,
        student_name=names.get(submission.student_id),
        submitted_at=submission.submitted_at,
        file=submission.file,
        status=submission.status,
        grade=submission.grade,
        percentage=grade_percentage(submission.grade, max_grade) if graded else None,
        letter=letter_grade(submission.grade, max_grade) if graded else None,
        comment=submission.comment,
        graded_at=submission.graded_at,
    )


def _build_assignment_response(
    assignment: Assignment,
    actor: Actor,
    now: datetime.datetime,
    tables: Tables | None = None,
) -> AssignmentResponse:
    """Build an assignment response as seen by `actor`; without `tables` it has no submissions yet"""
    names = {a.actor_id: a.name for a in tables.actors.values()} if tables else {}
    submissions = (
        [s for s in tables.submissions.values() if s.assignment_id == assignment.assignment_id] if tables else []
    )
    response = AssignmentResponse(
        assignment_id=assignment.assignment_id,
        title=assignment.title,
        description=assignment.description,
        deadline=assignment.deadline,
        max_grade=assignment.max_grade,
        materials=assignment.materials,
        created_by=assignment.created_by,
        create_time=assignment.create_time,
        update_time=assignment.update_time,
        days_left=days_until_deadline(assignment.deadline, now),
        soon=is_deadline_soon(assignment.deadline, now),
        overdue=deadline_passed(assignment.deadline, now),
    )
    if actor.role is Role.Student:
        own = next((s for s in submissions if s.student_id == actor.actor_id), None)
        response.state = assignment_state(assignment, own, now)
        if own is not None:
            response.submission = _build_submission_response(own, assignment.max_grade, names)
    else:
        response.submission_count = len(submissions)
    return response


def _get_assignment(assignment_id: AssignmentID, tables: Tables, catalog: Catalog, locale: Locale) -> Assignment:
    assignment = tables.assignments.get(assignment_id)
    if assignment is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=catalog.get("error.not_found", locale, kind="assignment"),
        )
    return assignment


@router.get("", operation_id="list_assignments")
def list_assignments(
    search: str | None = Query(default=None, description="case-insensitive match on title or description"),
    state: AssignmentState | None = Query(default=None, description="students only: their own assignment state"),
    actor: Actor = Depends(require_any),
    tables: Tables = Depends(get_tables),
    now: datetime.datetime = Depends(get_now),
) -> AssignmentListResponse:
    """List assignments by deadline.

    Students see their own state for each assignment and may filter on it;
    the state filter is ignored for staff.
    """
    needle = search.strip().casefold() if search else None
    assignments = sorted(tables.assignments.values(), key=lambda a: (a.deadline, a.title))
    if needle:
        assignments = [a for a in assignments if needle in a.title.casefold() or needle in a.description.casefold()]

    rows = [_build_assignment_response(a, actor, now, tables) for a in assignments]
    if state is not None and actor.role is Role.Student:
        rows = [r for r in rows if r.state is state]
    return AssignmentListResponse(assignments=rows, total=len(rows))


@router.get("/deadlines", operation_id="list_deadlines")
def list_deadlines(
    include_overdue: bool = Query(default=True),
    actor: Actor = Depends(require_any),
    tables: Tables = Depends(get_tables),
    now: datetime.datetime = Depends(get_now),
) -> DeadlineListResponse:
    """Assignments ordered by days until their deadline."""
    rows = deadline_rows(tables.assignments.values(), now, include_overdue=include_overdue)
    return DeadlineListResponse(deadlines=rows, total=len(rows))


@router.get("/{assignment_id}", operation_id="get_assignment")
def get_assignment(
    assignment_id: AssignmentID,
    actor: Actor = Depends(require_any),
    tables: Tables = Depends(get_tables),
    now: datetime.datetime = Depends(get_now),
    catalog: Catalog = Depends(get_catalog),
    locale: Locale = Depends(get_locale),
) -> AssignmentDetailResponse:
    """Get an assignment with submissions: a student's own, or all of them for staff."""
    assignment = _get_assignment(assignment_id, tables, catalog, locale)
    names = {a.actor_id: a.name for a in tables.actors.values()}
    submissions = [s for s in tables.submissions.values() if s.assignment_id == assignment_id]
    if actor.role is Role.Student:
        submissions = [s for s in submissions if s.student_id == actor.actor_id]
    return AssignmentDetailResponse(
        assignment=_build_assignment_response(assignment, actor, now, tables),
        submissions=[
            _build_submission_response(s, assignment.max_grade, names)
            for s in sorted(submissions, key=lambda s: s.submitted_at)
        ],
    )


@router.post("", operation_id="create_assignment", status_code=status.HTTP_201_CREATED)
async def create_assignment(
    request: AssignmentCreateRequest,
    actor: Actor = Depends(require_staff),
    catalog: Catalog = Depends(get_catalog),
    locale: Locale = Depends(get_locale),
    now: datetime.datetime = Depends(get_now),
) -> AssignmentResponse:
    """Create a new assignment.

    Only teachers and administrators can create assignments.
    """
    try:
        assignment = await coursework.create_assignment(
            actor,
            title=request.title,
            description=request.description,
            deadline=request.deadline,
            max_grade=request.max_grade,
            materials=request.materials,
        )
    except Handled as ex:
        raise http_error(ex, catalog, locale) from ex
    return _build_assignment_response(assignment, actor, now)


@router.patch("/{assignment_id}", operation_id="update_assignment")
async def update_assignment(
    assignment_id: AssignmentID,
    request: AssignmentUpdateRequest,
    actor: Actor = Depends(require_staff),
    catalog: Catalog = Depends(get_catalog),
    locale: Locale = Depends(get_locale),
    tables: Tables = Depends(get_tables),
    now: datetime.datetime = Depends(get_now),
) -> AssignmentResponse:
    """Update an assignment; fields absent from the request keep their values."""
    # null clears materials; for the other fields it means no change
    changes: dict[str, t.Any] = {
        k: v for k, v in request.model_dump(include=request.model_fields_set).items() if v is not None or k == "materials"
    }
    try:
        assignment = await coursework.update_assignment(
            actor,
            assignment_id,
            title=changes.get("title", NotSet()),
            description=changes.get("description", NotSet()),
            deadline=changes.get("deadline", NotSet()),
            max_grade=changes.get("max_grade", NotSet()),
            materials=changes.get("materials", NotSet()),
        )
    except Handled as ex:
        raise http_error(ex, catalog, locale) from ex
    return _build_assignment_response(assignment, actor, now, tables)


@router.delete("/{assignment_id}", operation_id="delete_assignment")
async def delete_assignment(
    assignment_id: AssignmentID,
    actor: Actor = Depends(require_staff),
    catalog: Catalog = Depends(get_catalog),
    locale: Locale = Depends(get_locale),
) -> AssignmentDeleteResponse:
    """Delete an assignment along with its submissions."""
    try:
        removed = await coursework.delete_assignment(actor, assignment_id)
    except Handled as ex:
        raise http_error(ex, catalog, locale) from ex
    return AssignmentDeleteResponse(assignment_id=assignment_id, submissions_removed=removed)


@router.post("/{assignment_id}/submissions", operation_id="submit_assignment", status_code=status.HTTP_201_CREATED)
async def submit_assignment(
    assignment_id: AssignmentID,
    request: SubmitRequest,
    actor: Actor = Depends(require_student),
    catalog: Catalog = Depends(get_catalog),
    locale: Locale = Depends(get_locale),
    tables: Tables = Depends(get_tables),
) -> SubmitResponse:
    """Submit work for an assignment; late submissions are accepted and flagged."""
    try:
        result = await coursework.submit_assignment(actor, assignment_id, request.file)
    except Handled as ex:
        raise http_error(ex, catalog, locale) from ex
    assignment = _get_assignment(assignment_id, tables, catalog, locale)
    return SubmitResponse(
        submission=_build_submission_response(result.submission, assignment.max_grade, {actor.actor_id: actor.name}),
        late=result.late,
    )


@router.post("/submissions/{submission_id}/grade", operation_id="grade_submission")
async def grade_submission(
    submission_id: SubmissionID,
    request: GradeRequest,
    actor: Actor = Depends(require_staff),
    catalog: Catalog = Depends(get_catalog),
    locale: Locale = Depends(get_locale),
    tables: Tables = Depends(get_tables),
) -> SubmissionResponse:
    """Grade or re-grade a submission; the grade must lie within the assignment's max grade."""
    try:
        submission = await coursework.grade_submission(actor, submission_id, request.grade, request.comment)
    except Handled as ex:
        raise http_error(ex, catalog, locale) from ex
    assignment = _get_assignment(submission.assignment_id, tables, catalog, locale)
    names = {a.actor_id: a.name for a in tables.actors.values()}
    return _build_submission_response(submission, assignment.max_grade, names)
