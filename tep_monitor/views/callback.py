"""Callback view – delegates rendering to a user-provided Python callable.

This allows users to hook any custom display or export logic into the
dashboard without having to subclass :class:`View`::

    dashboard.add_view(lambda snapshot: print(snapshot.kpis.system_status))
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Callable
from typing import Any

from tep_monitor.models import DashboardSnapshot
from tep_monitor.views.base import View

__all__ = ["CallbackView"]


class CallbackView(View):
    """Wraps a user-supplied function as a view.

    The callable receives a :class:`DashboardSnapshot` on every sensor
    update.  It can be a regular function, a coroutine function, or a
    lambda.

    Parameters:
        callback: ``(snapshot: DashboardSnapshot) -> None`` or async variant.
        offload: Run sync callbacks in the default executor instead of on
            the event loop thread.
    """

    def __init__(
        self,
        callback: Callable[[DashboardSnapshot], Any],
        *,
        offload: bool = False,
    ) -> None:
        self._callback = callback
        self._is_async = inspect.iscoroutinefunction(callback)
        self._offload = offload

    async def connect(self) -> None:
        """No-op."""

    async def render(self, snapshot: DashboardSnapshot) -> None:
        if self._is_async:
            await self._callback(snapshot)
        elif self._offload:
            loop = asyncio.get_running_loop()
            await loop.run_in_executor(None, self._callback, snapshot)
        else:
            self._callback(snapshot)

    async def close(self) -> None:
        """No-op."""
