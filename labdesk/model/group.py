from .base import WithCtime
from .id import ActorID, GroupID


class Group(WithCtime):
    group_id: GroupID
    name: str
    description: str = ""
    teacher_id: ActorID
    student_count: int = 0
