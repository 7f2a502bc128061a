"""Selection manager - which channels are drawn on the trend chart."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from tep_monitor.models import ChartSeries

__all__ = ["SERIES_PALETTE", "SelectionManager"]

logger = logging.getLogger("tep_monitor.selection")

# Indexed by position in the selection, not by sensor id.
SERIES_PALETTE: tuple[str, ...] = ("#3b82f6", "#8b5cf6", "#10b981")


class SelectionManager:
    """Ordered, bounded set of selected sensor ids.

    Ids keep their insertion order.  Once ``capacity`` ids are selected,
    selecting another evicts the oldest one (FIFO), never the least risky.
    """

    def __init__(self, initial: Iterable[int] = (1, 2, 3), capacity: int = len(SERIES_PALETTE)) -> None:
        self.capacity = capacity
        self._ids: list[int] = []
        for sensor_id in initial:
            if sensor_id not in self._ids:
                self._add(sensor_id)

    def toggle(self, sensor_id: int) -> list[int]:
        """Select *sensor_id*, or deselect it when already selected.

        Returns the selection after the change.
        """
        if sensor_id in self._ids:
            self._ids.remove(sensor_id)
            logger.debug("Deselected sensor %d", sensor_id)
        else:
            self._add(sensor_id)
        return self.ids

    def remove(self, sensor_id: int) -> list[int]:
        """Deselect *sensor_id*; unknown ids are ignored."""
        if sensor_id in self._ids:
            self._ids.remove(sensor_id)
        return self.ids

    def color_for(self, index: int) -> str:
        return SERIES_PALETTE[index % len(SERIES_PALETTE)]

    def series(self) -> list[ChartSeries]:
        """Chart series for the current selection, coloured by position."""
        return [
            ChartSeries(key=f"sensor_{sensor_id}", color=self.color_for(index), sensor_id=sensor_id)
            for index, sensor_id in enumerate(self._ids)
        ]

    @property
    def ids(self) -> list[int]:
        return list(self._ids)

    def __contains__(self, sensor_id: object) -> bool:
        return sensor_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def _add(self, sensor_id: int) -> None:
        if len(self._ids) >= self.capacity:
            evicted = self._ids.pop(0)
            logger.debug("Selection full - evicted sensor %d", evicted)
        self._ids.append(sensor_id)
        logger.debug("Selected sensor %d", sensor_id)
