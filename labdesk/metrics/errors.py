"""Exceptions for derived metrics."""

from __future__ import annotations


class MetricsError(Exception):
    """Error computing a derived metric."""

    pass


class InvalidGrade(MetricsError, ValueError):
    """A grade lies outside [0, max_grade], or the max grade is not positive."""

    def __init__(self, grade: float, max_grade: float) -> None:
        self.grade = grade
        self.max_grade = max_grade
        super().__init__(f"grade {grade!r} is outside [0, {max_grade!r}]")
