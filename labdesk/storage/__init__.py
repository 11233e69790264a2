import importlib
import sys
import types
import typing as t

from .errors import DuplicateEntity, EntityInUse, EntityNotFound, StorageError
from .store import DataStore, replace, Tables

__all__ = [
    "DataStore",
    "replace",
    "Tables",
    "DuplicateEntity",
    "EntityInUse",
    "EntityNotFound",
    "StorageError",
    # Repository modules
    "assignment",
    "fixture",
    "group",
    "submission",
    "user",
]

if t.TYPE_CHECKING:
    from . import assignment, fixture, group, submission, user


def __getattr__(name: str) -> types.ModuleType:
    if name in __all__:
        module = importlib.import_module(f"{__name__}.{name}")
        setattr(sys.modules[__name__], name, module)
        return module
    raise AttributeError(f"module {__name__} has no attribute {name}")
