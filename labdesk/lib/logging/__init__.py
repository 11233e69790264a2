__all__ = [
    "ExtraFormatter",
    "JSONEncoder",
]

from .extra import ExtraFormatter
from .json import JSONEncoder
