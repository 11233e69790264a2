__all__ = [
    "AuthSettings",
    "LabdeskWebSettings",
    "LocaleSettings",
    "LoggingSettings",
    "OperationSettings",
    "Secrets",
    "ServeSettings",
    "SessionSettings",
    "Settings",
    "StorageSettings",
    "WebSettings",
]


from .locale import LocaleSettings
from .logging import LoggingSettings
from .operation import OperationSettings
from .secrets import Secrets
from .settings import Settings
from .storage import SessionSettings, StorageSettings
from .web import AuthSettings, LabdeskWebSettings, ServeSettings, WebSettings
