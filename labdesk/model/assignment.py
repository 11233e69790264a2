import enum
import typing as t

import annotated_types as ant
import pydantic as p

from .base import WithTimestamps
from .id import ActorID, AssignmentID

MaxGrade = t.Annotated[int, ant.Ge(1), ant.Le(1000)]


class AssignmentState(enum.Enum):
    """Where an assignment stands for one student"""

    NotStarted = "not_started"
    Submitted = "submitted"
    Graded = "graded"
    Overdue = "overdue"


class Assignment(WithTimestamps):
    assignment_id: AssignmentID
    title: str
    description: str
    deadline: p.AwareDatetime
    max_grade: MaxGrade = 100
    materials: str | None = None
    created_by: ActorID
