"""View models for the student roster."""

from __future__ import annotations

from labdesk.model import BaseModel, StudentProgress
from labdesk.report import StudentOverview


class StudentListResponse(BaseModel):
    students: list[StudentProgress]
    overview: StudentOverview
    total: int
