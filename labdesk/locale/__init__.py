"""Display strings in English and Russian."""

__all__ = [
    "Catalog",
    "Locale",
    "load_table",
]

from labdesk.model import Locale

from .catalog import Catalog, load_table
