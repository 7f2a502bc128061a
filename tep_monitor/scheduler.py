"""Tick sources that drive the dashboard.

Provides:
- ``Ticker``         - subscriber list plus :meth:`Ticker.fire`.
- ``ManualTicker``   - fired explicitly; used by tests and scripted demos.
- ``IntervalTicker`` - background asyncio task firing every ``period_s``.
"""

from __future__ import annotations

import asyncio
import contextlib
import inspect
import logging
from collections.abc import Callable
from typing import Any

__all__ = ["IntervalTicker", "ManualTicker", "TickCallback", "Ticker"]

logger = logging.getLogger("tep_monitor.scheduler")

TickCallback = Callable[[], Any]


class Ticker:
    """A named source of ticks that subscribers listen to.

    Subscribers are zero-argument callables.  Coroutine results are awaited
    before the next subscriber runs, so one tick is fully applied before
    another starts.
    """

    def __init__(self, name: str = "ticker") -> None:
        self.name = name
        self.fired = 0
        self._subscribers: list[TickCallback] = []

    def subscribe(self, callback: TickCallback) -> None:
        if callback not in self._subscribers:
            self._subscribers.append(callback)

    def unsubscribe(self, callback: TickCallback) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    async def fire(self) -> None:
        """Invoke every subscriber once, in subscription order."""
        self.fired += 1
        # Copy so callbacks may unsubscribe themselves
        for callback in list(self._subscribers):
            result = callback()
            if inspect.isawaitable(result):
                await result


class ManualTicker(Ticker):
    """Ticker that only fires when told to, with no wall-clock delay."""

    async def advance(self, ticks: int = 1) -> None:
        for _ in range(ticks):
            await self.fire()


class IntervalTicker(Ticker):
    """Fires on a fixed period from a background task.

    Use as an async context manager so the task is always cancelled::

        async with IntervalTicker(1.0, name="clock") as ticker:
            ...
    """

    def __init__(self, period_s: float, name: str = "interval") -> None:
        if period_s <= 0:
            raise ValueError(f"period_s must be positive, got {period_s}")
        super().__init__(name)
        self.period_s = period_s
        self._task: asyncio.Task[None] | None = None

    async def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name=f"ticker-{self.name}")
        logger.debug("Started %s ticker (%.3fs)", self.name, self.period_s)

    async def stop(self) -> None:
        if self._task and not self._task.done():
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
        self._task = None
        logger.debug("Stopped %s ticker after %d ticks", self.name, self.fired)

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def __aenter__(self) -> IntervalTicker:
        await self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.stop()

    async def _run(self) -> None:
        loop = asyncio.get_running_loop()
        # Deadlines are absolute: a slow tick shortens the following sleep.
        # Deadlines missed during a stall are dropped, never fired in a burst.
        next_at = loop.time() + self.period_s
        while True:
            await asyncio.sleep(max(0.0, next_at - loop.time()))
            next_at += self.period_s
            try:
                await self.fire()
            except Exception:
                logger.exception("%s ticker subscriber failed", self.name)
            now = loop.time()
            if next_at <= now:
                skipped = int((now - next_at) // self.period_s) + 1
                logger.debug("%s ticker overran, skipping %d tick(s)", self.name, skipped)
                next_at += skipped * self.period_s
