"""Grade bounds, letter grades and grade distributions."""

from __future__ import annotations

import typing as t

from labdesk.model import AssignmentID, LetterGrade, Submission

from .errors import InvalidGrade

# lower percentage bound of each passing letter, best first
LetterThresholds: t.Final[tuple[tuple[LetterGrade, int], ...]] = (
    (LetterGrade.A, 90),
    (LetterGrade.B, 80),
    (LetterGrade.C, 70),
    (LetterGrade.D, 60),
)

GradeDistribution = dict[LetterGrade, int]


def validate_grade(grade: float, max_grade: float) -> None:
    """Raise InvalidGrade unless 0 <= grade <= max_grade.

    This is the only place grade bounds are checked; storage calls it before
    recording a grade, so no out-of-range value is ever clamped silently.
    """
    if not max_grade > 0:
        raise InvalidGrade(grade, max_grade)
    if not 0 <= grade <= max_grade:
        raise InvalidGrade(grade, max_grade)


def grade_percentage(score: float, max_grade: float) -> float:
    validate_grade(score, max_grade)
    return 100 * score / max_grade


def letter_grade(score: float, max_grade: float) -> LetterGrade:
    """Bucket a score into a letter on its percentage of max_grade.

    Comparisons are made as ``100 * score >= bound * max_grade`` so boundary
    scores (exactly 90%, 80%, ...) land in the higher letter without float
    rounding getting in the way.
    """
    validate_grade(score, max_grade)
    for letter, bound in LetterThresholds:
        if 100 * score >= bound * max_grade:
            return letter
    return LetterGrade.F


def grade_distribution(
    submissions: t.Iterable[Submission], max_grade: int | t.Mapping[AssignmentID, int] = 100
) -> GradeDistribution:
    """Count graded submissions per letter; ungraded submissions are skipped.

    `max_grade` is either one max grade shared by every submission or a
    mapping from assignment ID to that assignment's max grade. All five
    letters are always present in the result.
    """
    distribution: GradeDistribution = {letter: 0 for letter in LetterGrade}
    for submission in submissions:
        if not submission.is_graded or submission.grade is None:
            continue
        if isinstance(max_grade, int):
            mg = max_grade
        else:
            mg = max_grade[submission.assignment_id]
        distribution[letter_grade(submission.grade, mg)] += 1
    return distribution
