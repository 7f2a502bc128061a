"""Console view - prints dashboard snapshots to stdout.

The text format lays the panels out top to bottom: header, KPI cards,
latest trend sample, risk ranking and recent event log.
"""

from __future__ import annotations

import sys
from typing import IO

from tep_monitor.kpis import risk_band
from tep_monitor.models import DashboardSnapshot
from tep_monitor.views.base import View

__all__ = ["ConsoleView"]

_RULE = "-" * 64


class ConsoleView(View):
    """Writes dashboard snapshots to the console (stdout by default).

    Parameters:
        fmt: Output format - ``"text"`` (human-readable panels) or
             ``"json"`` (one JSON object per snapshot).
        stream: Writable file-like object (defaults to ``sys.stdout``).
        ranking_rows: How many of the riskiest sensors to list.
        log_rows: How many of the newest log entries to list.
    """

    def __init__(
        self,
        *,
        fmt: str = "text",
        stream: IO[str] | None = None,
        ranking_rows: int = 15,
        log_rows: int = 20,
    ) -> None:
        if fmt not in ("text", "json"):
            raise ValueError(f"Unknown console format '{fmt}' (expected 'text' or 'json')")
        self._fmt = fmt
        self._stream = stream or sys.stdout
        self.ranking_rows = ranking_rows
        self.log_rows = log_rows

    async def connect(self) -> None:
        """No-op - stdout is always available."""

    async def render(self, snapshot: DashboardSnapshot) -> None:
        if self._fmt == "json":
            self._stream.write(snapshot.to_json() + "\n")
        else:
            self._stream.write(self.format_text(snapshot))
        self._stream.flush()

    async def close(self) -> None:
        """No-op - we do not own stdout."""

    def format_text(self, snapshot: DashboardSnapshot) -> str:
        kpis = snapshot.kpis
        lines = [
            _RULE,
            f"TEP Monitor  {snapshot.clock}  System {kpis.system_status}",
            f"Status {kpis.system_status:<9s} Avg risk {kpis.average_risk:5.1f}  "
            f"Uptime {kpis.uptime:<8s} Alerts {kpis.critical_count}",
        ]
        if kpis.category_averages:
            lines.append(
                "Averages  "
                + "  ".join(f"{category}={value:.1f}" for category, value in kpis.category_averages.items())
            )

        lines.append("")
        lines.append("Trend")
        if snapshot.chart:
            latest = snapshot.chart[-1]
            samples = [
                f"{series.key}={latest.get(series.key):.2f} ({series.color})"
                for series in snapshot.series
                if latest.get(series.key) is not None
            ]
            lines.append(f"  [{latest.time}] {len(snapshot.chart)} pts  " + ("  ".join(samples) or "(no samples)"))
        else:
            lines.append("  (no data)")

        lines.append("")
        lines.append("Risk ranking")
        for sensor in snapshot.sensors[: self.ranking_rows]:
            marker = "*" if sensor.id in snapshot.selection else " "
            lines.append(
                f" {marker} {sensor.name:<9s} risk {sensor.risk:5.1f}% {risk_band(sensor.risk):<6s} "
                f"value {sensor.value:6.2f}  {sensor.status}"
            )

        lines.append("")
        lines.append(f"{'No':>6s}  {'Time':<10s} {'Sensor':<9s} {'Value':>7s}  Status")
        for entry in snapshot.log[: self.log_rows]:
            lines.append(f"{entry.no:>6d}  {entry.time:<10s} {entry.sensor_name:<9s} {entry.value:>7s}  {entry.status}")

        return "\n".join(lines) + "\n"
