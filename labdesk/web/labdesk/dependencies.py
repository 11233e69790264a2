"""FastAPI dependency providers for the labdesk web application."""

from __future__ import annotations

import datetime

from fastapi import Depends, Query

from labdesk.core import di
from labdesk.core.provider import TimestampProvider
from labdesk.locale import Catalog
from labdesk.model import Locale
from labdesk.storage import DataStore, Tables


@di.inject
def get_catalog(
    catalog: Catalog = Depends(di.Provide["locale.catalog"]),
) -> Catalog:
    return catalog


def get_locale(
    locale: Locale | None = Query(default=None, description="display language; the configured default if omitted"),
    catalog: Catalog = Depends(get_catalog),
) -> Locale:
    return locale or catalog.default


@di.inject
def get_now(
    utcnow: TimestampProvider = Depends(di.Provide["utcnow"]),
) -> datetime.datetime:
    return utcnow()


@di.inject
def get_tables(
    store: DataStore = Depends(di.Provide["storage.store"]),
) -> Tables:
    """A consistent copy of every table, for read-only aggregates"""
    return store.snapshot()
