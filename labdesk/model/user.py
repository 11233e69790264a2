import datetime
import enum

import pydantic as p
from pydantic import EmailStr

from .base import WithCtime
from .id import ActorID


class Role(enum.Enum):
    Admin = "admin"
    Teacher = "teacher"
    Student = "student"


class ActorStatus(enum.Enum):
    Active = "active"
    Inactive = "inactive"


class Actor(WithCtime):
    actor_id: ActorID
    name: str
    email: EmailStr
    role: Role
    group: str | None = None
    status: ActorStatus = ActorStatus.Active
    last_activity: datetime.datetime | None = None
    password_hash: str | None = p.Field(default=None, exclude=True, repr=False)

    @property
    def is_active(self) -> bool:
        return self.status is ActorStatus.Active
