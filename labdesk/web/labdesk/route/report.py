"""Group and assignment report routes."""

from __future__ import annotations

import datetime

from fastapi import APIRouter, Depends, Query

from labdesk.auth.middleware import require_staff
from labdesk.model import Actor
from labdesk.report import all_student_progress, assignment_reports, group_reports, overall_stats
from labdesk.storage import Tables
from labdesk.storage import group as group_storage

from ..dependencies import get_now, get_tables
from ..view.report import ReportResponse

router = APIRouter(prefix="/api/reports", tags=["reports"])


@router.get("", operation_id="get_reports")
def get_reports(
    group: str | None = Query(default=None, description="limit the report to one group by name"),
    actor: Actor = Depends(require_staff),
    tables: Tables = Depends(get_tables),
    now: datetime.datetime = Depends(get_now),
) -> ReportResponse:
    """Overall statistics with per-group and per-assignment breakdowns."""
    groups = list(group_storage.from_tables(tables))
    assignments = sorted(tables.assignments.values(), key=lambda a: (a.deadline, a.title))
    submissions = list(tables.submissions.values())
    students = all_student_progress(tables.actors.values(), assignments, submissions)

    reports = group_reports(groups, students, tables.actors, assignments, now)
    if group is not None:
        reports = [r for r in reports if r.group.name == group]
    return ReportResponse(
        overall=overall_stats(groups, students, group=group),
        groups=reports,
        assignments=assignment_reports(assignments, submissions, tables.actors.values(), group=group),
    )
