from __future__ import annotations

from dependency_injector.containers import DeclarativeContainer
from dependency_injector.providers import Configuration, Provider, Singleton

from labdesk.locale import Catalog


class LocaleContainer(DeclarativeContainer):
    config: Configuration = Configuration()

    catalog: Provider[Catalog] = Singleton(Catalog, default=config.default)
