"""Readiness tracking and observer fan-out."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any

_logger = logging.getLogger(__name__)

Observer = Callable[[dict[str, Any]], None]


class ReadinessHub:
    """One-shot readiness latch plus an ordered list of change observers.

    Readiness is settled exactly once, by the first fetch attempt. Callers
    awaiting :meth:`ready` before that each get their own future; all of
    them are settled together.
    """

    def __init__(self) -> None:
        self._ready = False
        self._ready_error: BaseException | None = None
        self._waiters: list[asyncio.Future[None]] = []
        self._observers: list[Observer] = []

    @property
    def is_ready(self) -> bool:
        return self._ready

    @property
    def ready_error(self) -> BaseException | None:
        return self._ready_error

    async def ready(self) -> None:
        """Wait for the first fetch to complete.

        Returns immediately once readiness is established; raises the
        captured error if the first fetch failed.
        """
        if self._ready:
            if self._ready_error is not None:
                raise self._ready_error
            return

        fut: asyncio.Future[None] = asyncio.get_running_loop().create_future()
        self._waiters.append(fut)
        await fut

    def notify_ready(self, error: BaseException | None = None) -> bool:
        """Settle readiness. Returns ``False`` if it was already settled."""
        if self._ready:
            return False
        self._ready = True
        self._ready_error = error

        waiters, self._waiters = self._waiters, []
        for fut in waiters:
            if fut.done():
                continue
            if error is not None:
                fut.set_exception(error)
            else:
                fut.set_result(None)
        return True

    def cancel_waiters(self) -> None:
        """Cancel callers still waiting for readiness."""
        waiters, self._waiters = self._waiters, []
        for fut in waiters:
            if not fut.done():
                fut.cancel()

    def observe(self, callback: Observer) -> None:
        """Register *callback* for future custom-configuration changes."""
        self._observers.append(callback)

    def notify_observers(self, data: dict[str, Any]) -> None:
        for observer in list(self._observers):
            try:
                observer(data)
            except Exception:
                _logger.debug("observer %r failed", observer, exc_info=True)
