import datetime
import enum
import typing as t

import annotated_types as ant
import pydantic as p

from .base import BaseModel
from .id import ActorID, AssignmentID, SubmissionID

Score = t.Annotated[float, ant.Ge(0)]


class SubmissionStatus(enum.Enum):
    Submitted = "submitted"
    Graded = "graded"


class LetterGrade(enum.Enum):
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"


class Submission(BaseModel):
    submission_id: SubmissionID
    assignment_id: AssignmentID
    student_id: ActorID
    submitted_at: p.AwareDatetime
    file: str
    status: SubmissionStatus = SubmissionStatus.Submitted
    grade: Score | None = None
    comment: str | None = None
    graded_at: datetime.datetime | None = None

    @p.model_validator(mode="after")
    def check_status(self) -> t.Self:
        # a submission is graded exactly when it carries a grade
        if (self.status is SubmissionStatus.Graded) != (self.grade is not None):
            raise ValueError(f"submission status {self.status.value} inconsistent with grade {self.grade!r}")
        return self

    @property
    def is_graded(self) -> bool:
        return self.status is SubmissionStatus.Graded
