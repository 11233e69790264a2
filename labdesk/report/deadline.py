from __future__ import annotations

import datetime
import typing as t

from labdesk.metrics import days_until_deadline, deadline_passed, SoonWindowDays
from labdesk.model import Assignment, BaseModel


class DeadlineRow(BaseModel):
    assignment: Assignment
    days_left: int
    soon: bool
    overdue: bool


def deadline_rows(
    assignments: t.Iterable[Assignment],
    now: datetime.datetime,
    *,
    include_overdue: bool = True,
    window: int = SoonWindowDays,
) -> list[DeadlineRow]:
    """Assignments by days until deadline, soonest (or most overdue) first"""
    rows: list[DeadlineRow] = []
    for a in assignments:
        days = days_until_deadline(a.deadline, now)
        overdue = deadline_passed(a.deadline, now)
        if overdue and not include_overdue:
            continue
        rows.append(DeadlineRow(assignment=a, days_left=days, soon=0 < days <= window, overdue=overdue))
    return sorted(rows, key=lambda r: (r.days_left, r.assignment.deadline, r.assignment.title))
