"""Tests for labdesk.metrics."""

from __future__ import annotations

import datetime

import pytest

from labdesk.metrics import aggregate_group_stats, average_grade, completion_rate, days_until_deadline, \
    deadline_passed, grade_distribution, grade_percentage, InvalidGrade, is_deadline_soon, letter_grade, \
    round_half_up, validate_grade
from labdesk.model import ActorID, AssignmentID, LetterGrade, StudentProgress, Submission, SubmissionID, \
    SubmissionStatus

Now = datetime.datetime(2026, 3, 10, 12, 0, tzinfo=datetime.UTC)


def make_submission(grade: float | None, assignment_id: AssignmentID | None = None) -> Submission:
    return Submission(
        submission_id=SubmissionID(),
        assignment_id=assignment_id or AssignmentID(),
        student_id=ActorID(),
        submitted_at=Now,
        file="work.zip",
        status=SubmissionStatus.Graded if grade is not None else SubmissionStatus.Submitted,
        grade=grade,
    )


def make_progress(completed: int, total: int, average: float) -> StudentProgress:
    return StudentProgress(
        student_id=ActorID(),
        name="Student",
        email="student@example.com",
        total_assignments=total,
        completed_assignments=completed,
        average_grade=average,
    )


class TestLetterGrade(object):
    """Tests for letter_grade()."""

    @pytest.mark.parametrize(
        "score,expected",
        [
            (100, LetterGrade.A),
            (90, LetterGrade.A),
            (89, LetterGrade.B),
            (80, LetterGrade.B),
            (79, LetterGrade.C),
            (70, LetterGrade.C),
            (69, LetterGrade.D),
            (60, LetterGrade.D),
            (59, LetterGrade.F),
            (0, LetterGrade.F),
        ],
    )
    def test_boundaries_out_of_100(self, score: float, expected: LetterGrade) -> None:
        assert letter_grade(score, 100) is expected

    def test_uses_percentage_of_max_grade(self) -> None:
        """45 of 50 is 90%, an A."""
        assert letter_grade(45, 50) is LetterGrade.A
        assert letter_grade(44.5, 50) is LetterGrade.B

    def test_fractional_boundary_is_exact(self) -> None:
        """27 of 30 is exactly 90% even though 27 / 30 * 100 is not in floating point."""
        assert letter_grade(27, 30) is LetterGrade.A

    def test_out_of_range_raises(self) -> None:
        with pytest.raises(InvalidGrade):
            letter_grade(101, 100)
        with pytest.raises(InvalidGrade):
            letter_grade(-1, 100)


class TestValidateGrade(object):
    """Tests for validate_grade() and grade_percentage()."""

    def test_bounds_are_inclusive(self) -> None:
        validate_grade(0, 100)
        validate_grade(100, 100)

    def test_above_max_raises(self) -> None:
        with pytest.raises(InvalidGrade) as exc_info:
            validate_grade(51, 50)

        assert exc_info.value.grade == 51
        assert exc_info.value.max_grade == 50

    def test_non_positive_max_raises(self) -> None:
        with pytest.raises(InvalidGrade):
            validate_grade(0, 0)

    def test_invalid_grade_is_a_value_error(self) -> None:
        with pytest.raises(ValueError):
            validate_grade(-5, 100)

    def test_percentage(self) -> None:
        assert grade_percentage(40, 50) == 80.0
        assert grade_percentage(85, 100) == 85.0


class TestGradeDistribution(object):
    """Tests for grade_distribution()."""

    def test_counts_each_letter(self) -> None:
        submissions = [make_submission(95), make_submission(82), make_submission(65)]

        assert grade_distribution(submissions) == {
            LetterGrade.A: 1,
            LetterGrade.B: 1,
            LetterGrade.C: 0,
            LetterGrade.D: 1,
            LetterGrade.F: 0,
        }

    def test_empty_has_every_letter_at_zero(self) -> None:
        assert grade_distribution([]) == {letter: 0 for letter in LetterGrade}

    def test_skips_ungraded(self) -> None:
        distribution = grade_distribution([make_submission(None), make_submission(91)])

        assert sum(distribution.values()) == 1
        assert distribution[LetterGrade.A] == 1

    def test_per_assignment_max_grade(self) -> None:
        short = AssignmentID()
        long = AssignmentID()
        submissions = [make_submission(40, short), make_submission(40, long)]

        distribution = grade_distribution(submissions, {short: 50, long: 100})

        assert distribution[LetterGrade.B] == 1
        assert distribution[LetterGrade.F] == 1


class TestDeadline(object):
    """Tests for days_until_deadline(), deadline_passed() and is_deadline_soon()."""

    @pytest.mark.parametrize(
        "delta,expected",
        [
            (datetime.timedelta(days=3), 3),
            (datetime.timedelta(days=2, hours=1), 3),
            (datetime.timedelta(hours=1), 1),
            (datetime.timedelta(0), 0),
            (datetime.timedelta(hours=-1), 0),
            (datetime.timedelta(days=-2), -2),
        ],
    )
    def test_days_until_deadline_rounds_up(self, delta: datetime.timedelta, expected: int) -> None:
        assert days_until_deadline(Now + delta, Now) == expected

    def test_days_across_timezones(self) -> None:
        """The same instant in another zone gives the same answer."""
        almaty = datetime.timezone(datetime.timedelta(hours=5))
        deadline = (Now + datetime.timedelta(days=3)).astimezone(almaty)

        assert days_until_deadline(deadline, Now) == 3

    def test_deadline_passed(self) -> None:
        assert not deadline_passed(Now, Now)
        assert deadline_passed(Now - datetime.timedelta(seconds=1), Now)
        assert not deadline_passed(Now + datetime.timedelta(days=1), Now)

    def test_soon_window(self) -> None:
        assert is_deadline_soon(Now + datetime.timedelta(days=3), Now)
        assert is_deadline_soon(Now + datetime.timedelta(hours=1), Now)
        assert not is_deadline_soon(Now + datetime.timedelta(days=3, hours=1), Now)
        assert not is_deadline_soon(Now, Now)
        assert not is_deadline_soon(Now - datetime.timedelta(days=1), Now)

    def test_naive_datetime_raises(self) -> None:
        naive = datetime.datetime(2026, 3, 12, 12, 0)

        with pytest.raises(ValueError, match="timezone-aware"):
            days_until_deadline(naive, Now)
        with pytest.raises(ValueError):
            deadline_passed(Now, naive)


class TestProgress(object):
    """Tests for completion_rate(), average_grade() and aggregate_group_stats()."""

    def test_completion_rate(self) -> None:
        assert completion_rate(3, 4) == 75
        assert completion_rate(1, 3) == 33
        assert completion_rate(2, 3) == 67
        assert completion_rate(5, 5) == 100

    def test_completion_rate_of_nothing_is_zero(self) -> None:
        assert completion_rate(0, 0) == 0

    def test_completion_rate_rejects_impossible_counts(self) -> None:
        with pytest.raises(ValueError):
            completion_rate(3, 2)
        with pytest.raises(ValueError):
            completion_rate(-1, 2)

    def test_round_half_up(self) -> None:
        assert round_half_up(84.5) == 85
        assert round_half_up(88.5) == 89
        assert round_half_up(84.49) == 84

    def test_average_grade(self) -> None:
        assert average_grade([85, 92]) == 88.5
        assert average_grade([]) == 0.0

    def test_aggregate_group_stats(self) -> None:
        students = [make_progress(4, 5, 85.0), make_progress(1, 5, 92.0)]

        stats = aggregate_group_stats(students)

        assert stats.average_grade == 88.5
        assert stats.average_completion == 50.0

    def test_aggregate_empty_group(self) -> None:
        stats = aggregate_group_stats([])

        assert stats.average_grade == 0.0
        assert stats.average_completion == 0.0
