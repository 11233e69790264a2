"""Derived metrics: pure functions over entity collections."""

__all__ = [
    "GradeDistribution",
    "GroupStats",
    "InvalidGrade",
    "MetricsError",
    "SoonWindowDays",
    "aggregate_group_stats",
    "average_grade",
    "completion_percentage",
    "completion_rate",
    "days_until_deadline",
    "deadline_passed",
    "grade_distribution",
    "grade_percentage",
    "is_deadline_soon",
    "letter_grade",
    "round_half_up",
    "validate_grade",
]

from .deadline import days_until_deadline, deadline_passed, is_deadline_soon, SoonWindowDays
from .errors import InvalidGrade, MetricsError
from .grade import grade_distribution, grade_percentage, GradeDistribution, letter_grade, validate_grade
from .progress import aggregate_group_stats, average_grade, completion_percentage, completion_rate, GroupStats, \
    round_half_up
