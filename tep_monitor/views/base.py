"""View abstraction - the UI shell the dashboard pushes snapshots to.

Concrete views implement ``connect``, ``render`` and ``close``.  The
dashboard connects every registered view before the first tick, renders a
fresh :class:`~tep_monitor.models.DashboardSnapshot` after every sensor
update and closes the views on shutdown.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from tep_monitor.models import DashboardSnapshot

__all__ = ["View"]


class View(ABC):
    """Abstract base class for all views."""

    @abstractmethod
    async def connect(self) -> None:
        """Open resources before the first render."""

    @abstractmethod
    async def render(self, snapshot: DashboardSnapshot) -> None:
        """Display one snapshot."""

    @abstractmethod
    async def close(self) -> None:
        """Release resources."""

    @property
    def name(self) -> str:
        return type(self).__name__
