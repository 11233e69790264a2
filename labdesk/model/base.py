import datetime
import typing as t

import pydantic as p


class BaseModel(p.BaseModel):
    """Entities, views and settings; dumps use field aliases unless told otherwise"""

    def model_dump(self, *, by_alias: bool | None = True, **kwargs: t.Any) -> dict[str, t.Any]:
        return super().model_dump(by_alias=by_alias, **kwargs)


class WithCtime(BaseModel):
    create_time: datetime.datetime


class WithTimestamps(WithCtime):
    update_time: datetime.datetime | None = None
