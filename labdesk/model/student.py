import datetime

import pydantic as p

from .base import BaseModel
from .id import ActorID
from .user import ActorStatus


class StudentProgress(BaseModel):
    """Per-student totals derived from assignments and submissions"""

    student_id: ActorID
    name: str
    email: p.EmailStr
    group: str | None = None
    status: ActorStatus = ActorStatus.Active
    total_assignments: int = 0
    completed_assignments: int = 0
    average_grade: float = 0.0
    last_activity: datetime.datetime | None = None
