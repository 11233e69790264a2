"""View models for group and assignment reports."""

from __future__ import annotations

from labdesk.model import BaseModel
from labdesk.report import AssignmentReport, GroupReport, OverallStats


class ReportResponse(BaseModel):
    overall: OverallStats
    groups: list[GroupReport]
    assignments: list[AssignmentReport]
