import typing as t

import annotated_types as ant

from .base import BaseSettings


class OperationSettings(BaseSettings):
    """Simulated latency of mutating operations, in seconds"""

    delay_seconds: t.Annotated[float, ant.Ge(0)] = 1.0
