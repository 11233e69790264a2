import typing as t

from pydantic_settings import BaseSettings as PydanticBaseSettings
from pydantic_settings import SettingsConfigDict

from labdesk.model import BaseModel


# NOTE: labdesk.model.BaseModel follows pydantic-settings in the MRO, so its
#       model_dump (by_alias=True) is the one settings objects get
class BaseSettings(PydanticBaseSettings, BaseModel):  # pyright: ignore [reportIncompatibleVariableOverride]
    # section defaults are instantiated at import; keep unrelated variables
    # such as PATH or HOST out of them
    model_config = SettingsConfigDict(env_prefix="LABDESK_")

    def __init__(self, cf: dict[str, t.Any] | None = None, **kwargs: t.Any):
        # specifically allow initialization with a dict
        if cf is not None:
            kwargs = {**cf, **kwargs}
        super().__init__(**kwargs)


class BaseSecrets(BaseSettings):
    pass
