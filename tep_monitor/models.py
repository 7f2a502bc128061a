"""Common data models for the TEP dashboard.

Defines the records that flow from the dashboard core to views: chart
points, chart series, log entries and the per-render ``DashboardSnapshot``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from tep_monitor.kpis import KpiSummary
from tep_monitor.sensor_models import Sensor, SensorStatus

__all__ = ["ChartPoint", "ChartSeries", "DashboardSnapshot", "LogEntry"]


class ChartPoint(BaseModel):
    """One sample of the trend chart.

    Besides ``time`` the point carries one ``sensor_<id>`` key per channel
    that was selected (and found) when the sample was taken.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    time: str

    @property
    def values(self) -> dict[str, float]:
        """The ``sensor_<id>`` entries of this point."""
        return dict(self.model_extra or {})

    def get(self, key: str, default: float | None = None) -> float | None:
        return (self.model_extra or {}).get(key, default)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump()


class ChartSeries(BaseModel):
    """A line on the trend chart: data key plus positional colour."""

    key: str
    color: str
    sensor_id: int


class LogEntry(BaseModel):
    """A row of the event log.

    Attributes:
        no: Sequence number, strictly increasing for the whole session.
        time: Wall-clock label of the tick that produced the row.
        sensor_name: Instrument tag, e.g. ``"XMEAS_12"``.
        value: Reading formatted with two decimals.
        status: Channel status at that tick.
    """

    model_config = {"frozen": True}

    no: int
    time: str
    sensor_name: str
    value: str
    status: SensorStatus


class DashboardSnapshot(BaseModel):
    """Everything a view needs to draw the dashboard once."""

    clock: str
    kpis: KpiSummary
    sensors: list[Sensor]
    selection: list[int]
    series: list[ChartSeries] = Field(default_factory=list)
    chart: list[ChartPoint] = Field(default_factory=list)
    log: list[LogEntry] = Field(default_factory=list)

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Return a plain ``dict`` representation (JSON-safe types)."""
        return self.model_dump(mode="json")

    def to_json(self) -> str:
        """Return a compact JSON string."""
        return self.model_dump_json()
