from __future__ import annotations

from dependency_injector.containers import DeclarativeContainer
from dependency_injector.providers import Configuration, Provider, Singleton

from labdesk.operation.runner import OperationRunner


class OperationContainer(DeclarativeContainer):
    config: Configuration = Configuration()

    runner: Provider[OperationRunner] = Singleton(OperationRunner, delay=config.delay_seconds)
