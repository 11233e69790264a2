__all__ = [
    # Base
    "BaseModel",
    "WithCtime",
    "WithTimestamps",
    # Enums
    "DeploymentEnvironment",
    "Locale",
    # ID Types
    "ActorID",
    "AssignmentID",
    "SubmissionID",
    "GroupID",
    # Actors
    "Actor",
    "ActorStatus",
    "Role",
    # Coursework
    "Assignment",
    "AssignmentState",
    "Submission",
    "SubmissionStatus",
    "LetterGrade",
    # Groups & students
    "Group",
    "StudentProgress",
]

from .assignment import Assignment, AssignmentState
from .base import BaseModel, WithCtime, WithTimestamps
from .enum import DeploymentEnvironment, Locale
from .group import Group
from .id import ActorID, AssignmentID, GroupID, SubmissionID
from .student import StudentProgress
from .submission import LetterGrade, Submission, SubmissionStatus
from .user import Actor, ActorStatus, Role
