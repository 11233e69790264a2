"""Coarse bands used to colour grades and completion rates."""

import enum
import typing as t


class Band(enum.Enum):
    Excellent = "excellent"
    Good = "good"
    Fair = "fair"
    Poor = "poor"


GradeBands: t.Final = ((Band.Excellent, 90), (Band.Good, 80), (Band.Fair, 70))
CompletionBands: t.Final = ((Band.Excellent, 90), (Band.Good, 75), (Band.Fair, 60))


def _band(value: float, bounds: t.Iterable[tuple[Band, int]]) -> Band:
    for band, bound in bounds:
        if value >= bound:
            return band
    return Band.Poor


def grade_band(percentage: float) -> Band:
    return _band(percentage, GradeBands)


def completion_band(rate: float) -> Band:
    return _band(rate, CompletionBands)
