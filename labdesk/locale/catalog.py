from __future__ import annotations

import datetime
import functools
import logging
import typing as t
from pathlib import Path

import yaml

from labdesk.model import Locale

logger = logging.getLogger(__name__)

TableRoot = Path(__file__).parent
FallbackLocale = Locale.English


def _flatten(tree: t.Mapping[str, t.Any], prefix: str = "") -> dict[str, str]:
    flat: dict[str, str] = {}
    for k, v in tree.items():
        key = f"{prefix}{k}"
        if isinstance(v, t.Mapping):
            flat.update(_flatten(t.cast(t.Mapping[str, t.Any], v), f"{key}."))
        else:
            flat[key] = str(v)
    return flat


@functools.cache
def load_table(locale: Locale) -> dict[str, str]:
    """The string table of a locale as dotted keys, e.g. `greeting.morning`"""
    path = TableRoot / f"{locale.value}.yaml"
    with path.open(encoding="utf8") as f:
        return _flatten(yaml.safe_load(f) or {})


class Catalog(object):
    """
    Look up display strings by key. A key missing from the chosen locale
    falls back to English, and a key missing there too is returned as is.
    """

    def __init__(self, default: Locale = FallbackLocale) -> None:
        self.default = default

    def get(self, key: str, locale: Locale | None = None, /, **params: t.Any) -> str:
        locale = locale or self.default
        template = load_table(locale).get(key)
        if template is None and locale is not FallbackLocale:
            template = load_table(FallbackLocale).get(key)
        if template is None:
            logger.debug("missing string", extra={"key": key, "locale": locale.value})
            return key
        try:
            return template.format(**params)
        except (KeyError, IndexError):
            logger.warning("string parameters missing", extra={"key": key, "params": sorted(params)})
            return template

    def greeting(self, name: str, at: datetime.datetime, locale: Locale | None = None) -> str:
        """Time-of-day greeting: morning before 12:00, afternoon before 18:00, evening after"""
        if at.hour < 12:
            part = "morning"
        elif at.hour < 18:
            part = "afternoon"
        else:
            part = "evening"
        return self.get(f"greeting.{part}", locale, name=name)
