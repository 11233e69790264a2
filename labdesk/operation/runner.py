"""Mutations as explicit asynchronous operations.

Every mutating operation waits once (the configured delay stands in for a
remote call) and only then applies its change. Nothing is applied before
that point, so an operation that is cancelled or abandoned leaves no state
behind to roll back.
"""

from __future__ import annotations

import asyncio
import logging
import threading
import typing as t

from .errors import OperationCancelled, OperationInFlight

logger = logging.getLogger(__name__)

T = t.TypeVar("T")


class CancellationToken(object):
    """Cancels an operation that has not yet been applied"""

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True
        self._event.set()

    async def wait(self) -> None:
        await self._event.wait()


class OperationRunner(object):
    def __init__(self, delay: float = 0.0) -> None:
        if delay < 0:
            raise ValueError(f"delay must not be negative: {delay}")
        self.delay = delay
        self._in_flight: set[str] = set()
        self._lock = threading.Lock()

    def in_flight(self, key: str) -> bool:
        with self._lock:
            return key in self._in_flight

    async def run(self, key: str, fn: t.Callable[[], T], cancel: CancellationToken | None = None) -> T:
        """Wait out the delay, then apply `fn` and return its result.

        Raises:
            OperationInFlight: another operation on `key` has not finished
            OperationCancelled: `cancel` fired before `fn` was applied
        """
        with self._lock:
            if key in self._in_flight:
                raise OperationInFlight(key)
            self._in_flight.add(key)

        try:
            await self._suspend(cancel)
            if cancel is not None and cancel.cancelled:
                logger.info("operation cancelled", extra={"key": key})
                raise OperationCancelled(key)
            result = fn()
            logger.debug("operation applied", extra={"key": key})
            return result
        finally:
            with self._lock:
                self._in_flight.discard(key)

    async def _suspend(self, cancel: CancellationToken | None) -> None:
        if cancel is None:
            await asyncio.sleep(self.delay)
            return
        try:
            await asyncio.wait_for(cancel.wait(), timeout=self.delay)
        except TimeoutError:
            pass
