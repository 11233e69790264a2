"""View models for assignments, submissions and grading."""

from __future__ import annotations

import datetime

import pydantic as p

from labdesk.model import ActorID, AssignmentID, AssignmentState, BaseModel, LetterGrade, SubmissionID, \
    SubmissionStatus
from labdesk.report import DeadlineRow


class AssignmentCreateRequest(BaseModel):
    """Request to create a new assignment."""

    title: str
    description: str
    deadline: datetime.datetime | None = None
    max_grade: int = 100
    materials: str | None = None


class AssignmentUpdateRequest(BaseModel):
    """Request to update an assignment; only fields that are sent change."""

    title: str | None = None
    description: str | None = None
    deadline: datetime.datetime | None = None
    max_grade: int | None = None
    materials: str | None = None


class SubmissionResponse(BaseModel):
    """Submission with its grade expressed as percentage and letter."""

    submission_id: SubmissionID
    assignment_id: AssignmentID
    student_id: ActorID
    student_name: str | None = None
    submitted_at: datetime.datetime
    file: str
    status: SubmissionStatus
    grade: float | None = None
    percentage: float | None = None
    letter: LetterGrade | None = None
    comment: str | None = None
    graded_at: datetime.datetime | None = None


class AssignmentResponse(BaseModel):
    """Assignment details response.

    `state` and `submission` describe the requesting student's own work and
    are empty for staff, who get `submission_count` instead.
    """

    assignment_id: AssignmentID
    title: str
    description: str
    deadline: datetime.datetime
    max_grade: int
    materials: str | None = None
    created_by: ActorID
    create_time: datetime.datetime
    update_time: datetime.datetime | None = None
    days_left: int
    soon: bool
    overdue: bool
    state: AssignmentState | None = None
    submission: SubmissionResponse | None = None
    submission_count: int | None = None


class AssignmentListResponse(BaseModel):
    """List of assignments response."""

    assignments: list[AssignmentResponse]
    total: int


class AssignmentDetailResponse(BaseModel):
    assignment: AssignmentResponse
    submissions: list[SubmissionResponse]


class AssignmentDeleteResponse(BaseModel):
    assignment_id: AssignmentID
    submissions_removed: int


class DeadlineListResponse(BaseModel):
    deadlines: list[DeadlineRow]
    total: int


class SubmitRequest(BaseModel):
    """Request to submit work; `file` is the name of the uploaded file."""

    file: str


class SubmitResponse(BaseModel):
    submission: SubmissionResponse
    late: bool


class GradeRequest(BaseModel):
    """Request to grade a submission."""

    grade: float
    comment: str | None = p.Field(default=None, max_length=2000)
