"""Role-specific dashboard."""

from __future__ import annotations

import datetime

from fastapi import APIRouter, Depends

from labdesk.auth.middleware import require_any
from labdesk.locale import Catalog
from labdesk.model import Actor, Locale
from labdesk.report import Dashboard, dashboard
from labdesk.storage import Tables

from ..dependencies import get_catalog, get_locale, get_now, get_tables

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("", operation_id="get_dashboard")
def get_dashboard(
    actor: Actor = Depends(require_any),
    tables: Tables = Depends(get_tables),
    now: datetime.datetime = Depends(get_now),
    catalog: Catalog = Depends(get_catalog),
    locale: Locale = Depends(get_locale),
) -> Dashboard:
    """Stat cards, upcoming deadlines and recent activity for the current actor."""
    return dashboard(actor, tables, now, catalog, locale)
