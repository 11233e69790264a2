"""Deadline arithmetic.

All datetimes must be timezone-aware; a naive value has no defined instant to
compare against, so it is rejected rather than assumed to be UTC or local time.
"""

from __future__ import annotations

import datetime

Day = datetime.timedelta(days=1)
SoonWindowDays = 3


def _check_aware(*values: datetime.datetime) -> None:
    for v in values:
        if v.tzinfo is None or v.tzinfo.utcoffset(v) is None:
            raise ValueError(f"datetime must be timezone-aware: {v!r}")


def days_until_deadline(deadline: datetime.datetime, now: datetime.datetime) -> int:
    """Ceiling of (deadline - now) in days.

    Positive values count days remaining, 0 means due today, negative values
    mean the deadline passed abs(value) days ago.
    """
    _check_aware(deadline, now)
    # ceil(a / b) == -((-a) // b), exact on timedeltas
    return -((now - deadline) // Day)


def deadline_passed(deadline: datetime.datetime, now: datetime.datetime) -> bool:
    _check_aware(deadline, now)
    return now > deadline


def is_deadline_soon(deadline: datetime.datetime, now: datetime.datetime, window: int = SoonWindowDays) -> bool:
    return 0 < days_until_deadline(deadline, now) <= window
