"""Completion rates and grade averages."""

from __future__ import annotations

import decimal
import typing as t

from labdesk.model import StudentProgress


class GroupStats(t.NamedTuple):
    average_grade: float
    average_completion: float


def round_half_up(value: float | decimal.Decimal) -> int:
    """Round to the nearest integer, halves going up (84.5 -> 85)."""
    d = value if isinstance(value, decimal.Decimal) else decimal.Decimal(str(value))
    return int(d.quantize(decimal.Decimal(1), rounding=decimal.ROUND_HALF_UP))


def _check_counts(completed: int, total: int) -> None:
    if completed < 0 or total < 0:
        raise ValueError(f"counts must not be negative: {completed}/{total}")
    if completed > total:
        raise ValueError(f"completed exceeds total: {completed}/{total}")


def completion_rate(completed: int, total: int) -> int:
    """Whole-number percentage of completed out of total; 0 when total is 0."""
    _check_counts(completed, total)
    if total == 0:
        return 0
    return round_half_up(decimal.Decimal(100 * completed) / decimal.Decimal(total))


def completion_percentage(completed: int, total: int) -> float:
    _check_counts(completed, total)
    if total == 0:
        return 0.0
    return 100 * completed / total


def average_grade(grades: t.Iterable[float]) -> float:
    """Arithmetic mean; an empty sequence averages to 0."""
    values = list(grades)
    if not values:
        return 0.0
    return sum(values) / len(values)


def aggregate_group_stats(students: t.Sequence[StudentProgress]) -> GroupStats:
    """Average each student's own average grade and own completion percentage."""
    if not students:
        return GroupStats(average_grade=0.0, average_completion=0.0)
    return GroupStats(
        average_grade=average_grade(s.average_grade for s in students),
        average_completion=average_grade(
            completion_percentage(s.completed_assignments, s.total_assignments) for s in students
        ),
    )
