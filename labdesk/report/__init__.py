"""Page-level aggregates built from entity collections."""

__all__ = [
    "Activity",
    "ActivityKind",
    "AssignmentReport",
    "AssignmentRow",
    "Band",
    "Dashboard",
    "DeadlineRow",
    "GroupReport",
    "OverallStats",
    "StatCard",
    "StudentOverview",
    "StudentProfile",
    "all_student_progress",
    "assignment_reports",
    "assignment_state",
    "build_student_progress",
    "completion_band",
    "dashboard",
    "deadline_rows",
    "filter_students",
    "grade_band",
    "group_reports",
    "overall_stats",
    "recent_activity",
    "student_overview",
    "student_profile",
    "student_states",
]

from .aggregate import assignment_reports, AssignmentReport, group_reports, GroupReport, overall_stats, OverallStats
from .band import Band, completion_band, grade_band
from .dashboard import Activity, ActivityKind, Dashboard, dashboard, recent_activity, StatCard
from .deadline import deadline_rows, DeadlineRow
from .profile import student_profile, StudentProfile
from .progress import all_student_progress, assignment_state, AssignmentRow, build_student_progress, \
    filter_students, student_overview, student_states, StudentOverview
