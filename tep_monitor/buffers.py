"""Rolling in-memory buffers fed once per sensor tick.

Provides:
- ``TrendBuffer`` - sliding window of chart points, oldest first.
- ``EventLog``    - bounded log of recent readings, newest first.
"""

from __future__ import annotations

import collections
import itertools
import logging
from collections.abc import Iterable

from tep_monitor.models import ChartPoint, LogEntry
from tep_monitor.sensor_models import Sensor

__all__ = ["EventLog", "TrendBuffer"]

logger = logging.getLogger("tep_monitor.buffers")


# -----------------------------------------------------------------------
# Trend buffer
# -----------------------------------------------------------------------


class TrendBuffer:
    """Fixed-capacity window of :class:`ChartPoint` samples.

    Appending to a full buffer drops the oldest point.
    """

    def __init__(self, capacity: int = 30) -> None:
        self.capacity = capacity
        self._points: collections.deque[ChartPoint] = collections.deque(maxlen=capacity)

    def append_sample(self, sensors: list[Sensor], selection: Iterable[int], now: str) -> ChartPoint:
        """Sample the selected channels from *sensors* and append the point.

        Selected ids that are not present in *sensors* are left out of the
        point rather than failing the tick.
        """
        by_id = {sensor.id: sensor for sensor in sensors}
        values: dict[str, float] = {}
        for sensor_id in selection:
            sensor = by_id.get(sensor_id)
            if sensor is None:
                logger.debug("Selected sensor %d not found - skipping sample", sensor_id)
                continue
            values[f"sensor_{sensor_id}"] = sensor.value

        point = ChartPoint(time=now, **values)
        self._points.append(point)
        return point

    @property
    def points(self) -> list[ChartPoint]:
        return list(self._points)

    def clear(self) -> None:
        self._points.clear()

    def __len__(self) -> int:
        return len(self._points)


# -----------------------------------------------------------------------
# Event log
# -----------------------------------------------------------------------


class EventLog:
    """Newest-first log of the highest-risk readings.

    Every tick logs the first ``top_n`` sensors of the risk ranking.  Entry
    numbers come from a session-wide counter, so they keep increasing after
    old entries have been evicted.
    """

    def __init__(self, capacity: int = 100, top_n: int = 5) -> None:
        self.capacity = capacity
        self.top_n = top_n
        self._entries: collections.deque[LogEntry] = collections.deque(maxlen=capacity)
        self._sequence = itertools.count(1)

    def append_log(self, sensors: list[Sensor], now: str) -> list[LogEntry]:
        """Log the top-ranked sensors and return the new entries.

        The batch keeps ranking order at the head of the log; its entries
        are numbered in that same order.
        """
        batch = [
            LogEntry(
                no=next(self._sequence),
                time=now,
                sensor_name=sensor.name,
                value=f"{sensor.value:.2f}",
                status=sensor.status,
            )
            for sensor in sensors[: self.top_n]
        ]
        # extendleft reverses its input; feed it reversed to keep ranking order
        self._entries.extendleft(reversed(batch))
        return batch

    @property
    def entries(self) -> list[LogEntry]:
        return list(self._entries)

    def latest(self, count: int) -> list[LogEntry]:
        return list(itertools.islice(self._entries, count))

    def __len__(self) -> int:
        return len(self._entries)
