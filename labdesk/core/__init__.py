__all__ = [
    "BootConfiguration",
    "di",
    "LabdeskContainer",
    "LoggingProvider",
    "Settings",
    "Secrets",
    "TimestampProvider",
]


from . import di
from .config import Secrets, Settings
from .container import BootConfiguration, LabdeskContainer
from .provider import LoggingProvider, TimestampProvider
