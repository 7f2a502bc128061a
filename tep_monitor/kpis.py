"""Derived KPIs - pure functions recomputed from the current sensor state.

Nothing here is cached; the inputs are 52 small records and every call
simply rescans them.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field

from tep_monitor.sensor_models import Sensor, SensorType

__all__ = [
    "KpiSummary",
    "RiskBand",
    "SystemStatus",
    "average_risk",
    "category_averages",
    "critical_count",
    "format_uptime",
    "risk_band",
    "summarize",
    "system_status",
]

WARNING_THRESHOLD = 1
CRITICAL_THRESHOLD = 5

HIGH_RISK_ABOVE = 70.0
MEDIUM_RISK_ABOVE = 40.0


class SystemStatus(StrEnum):
    """Plant-wide status derived from the number of critical channels."""

    NORMAL = "NORMAL"
    WARNING = "WARNING"
    CRITICAL = "CRITICAL"


class RiskBand(StrEnum):
    """Colour band of a risk score in the ranking panel."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class KpiSummary(BaseModel):
    """All KPI card values for one render."""

    system_status: SystemStatus
    average_risk: float
    critical_count: int
    uptime: str = "0h 0m"
    category_averages: dict[SensorType, float] = Field(default_factory=dict)


def average_risk(sensors: list[Sensor]) -> float:
    if not sensors:
        return 0.0
    return sum(s.risk for s in sensors) / len(sensors)


def critical_count(sensors: list[Sensor]) -> int:
    return sum(1 for s in sensors if s.is_critical)


def system_status(count: int) -> SystemStatus:
    """Classify the plant from the number of critical channels.

    ``0`` is normal, ``1..4`` a warning and ``5`` or more critical.
    """
    if count >= CRITICAL_THRESHOLD:
        return SystemStatus.CRITICAL
    if count >= WARNING_THRESHOLD:
        return SystemStatus.WARNING
    return SystemStatus.NORMAL


def category_averages(sensors: list[Sensor]) -> dict[SensorType, float]:
    """Mean ``value`` per category; categories with no channels are omitted."""
    totals: dict[SensorType, list[float]] = {}
    for sensor in sensors:
        totals.setdefault(sensor.sensor_type, []).append(sensor.value)
    return {category: sum(values) / len(values) for category, values in totals.items()}


def risk_band(risk: float) -> RiskBand:
    if risk > HIGH_RISK_ABOVE:
        return RiskBand.HIGH
    if risk > MEDIUM_RISK_ABOVE:
        return RiskBand.MEDIUM
    return RiskBand.LOW


def format_uptime(elapsed_s: float) -> str:
    """Render elapsed seconds as ``"<hours>h <minutes>m"``."""
    total = max(0, int(elapsed_s))
    hours, remainder = divmod(total, 3600)
    return f"{hours}h {remainder // 60}m"


def summarize(sensors: list[Sensor], *, uptime: str = "0h 0m") -> KpiSummary:
    count = critical_count(sensors)
    return KpiSummary(
        system_status=system_status(count),
        average_risk=average_risk(sensors),
        critical_count=count,
        uptime=uptime,
        category_averages=category_averages(sensors),
    )
