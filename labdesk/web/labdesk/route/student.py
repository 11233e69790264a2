"""Student roster and profile routes."""

from __future__ import annotations

import datetime

from fastapi import APIRouter, Depends, HTTPException, Query, status

from labdesk.auth.middleware import require_staff
from labdesk.locale import Catalog
from labdesk.model import Actor, ActorID, ActorStatus, Locale, Role
from labdesk.report import all_student_progress, filter_students, student_overview, student_profile, StudentProfile
from labdesk.storage import Tables

from ..dependencies import get_catalog, get_locale, get_now, get_tables
from ..view.student import StudentListResponse

router = APIRouter(prefix="/api/students", tags=["students"])


@router.get("", operation_id="list_students")
def list_students(
    search: str | None = Query(default=None, description="case-insensitive match on name or email"),
    group: str | None = Query(default=None),
    status_: ActorStatus | None = Query(default=None, alias="status"),
    actor: Actor = Depends(require_staff),
    tables: Tables = Depends(get_tables),
) -> StudentListResponse:
    """Students with their progress; the overview covers the filtered rows."""
    progress = all_student_progress(
        tables.actors.values(), list(tables.assignments.values()), list(tables.submissions.values())
    )
    rows = filter_students(progress, search=search, group=group, status=status_)
    return StudentListResponse(students=rows, overview=student_overview(rows), total=len(rows))


@router.get("/{student_id}", operation_id="get_student")
def get_student(
    student_id: ActorID,
    actor: Actor = Depends(require_staff),
    tables: Tables = Depends(get_tables),
    now: datetime.datetime = Depends(get_now),
    catalog: Catalog = Depends(get_catalog),
    locale: Locale = Depends(get_locale),
) -> StudentProfile:
    """A student's progress, per-assignment states and grade distribution."""
    student = tables.actors.get(student_id)
    if student is None or student.role is not Role.Student:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=catalog.get("error.not_found", locale, kind="student"),
        )
    return student_profile(student, list(tables.assignments.values()), list(tables.submissions.values()), now)
