"""Configuration loader for the dashboard YAML format.

Parses YAML files with the following top-level sections::

    dashboard:   # timer periods, run duration, logging, seed
    sensors:     # random-walk and alarm tuning
    selection:   # initially charted channels
    trend:       # chart window size
    log:         # event log size
    views:       # list of view configs for the view factory

Example:

.. code-block:: yaml

    dashboard:
      update_period_s: 1.0
      duration_s: 60
      seed: 7

    sensors:
      critical_probability: 0.15
      critical_value_threshold: 80

    selection:
      initial: [1, 2, 3]

    views:
      - type: console
        fmt: text
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from tep_monitor.sensor_models import NUM_SENSORS

__all__ = [
    "DashboardConfig",
    "DashboardSettings",
    "LogSettings",
    "SelectionSettings",
    "SensorSettings",
    "TrendSettings",
    "load_yaml_config",
]

logger = logging.getLogger("tep_monitor.config")


class DashboardSettings(BaseModel):
    """Timers and process-level knobs.

    Attributes:
        update_period_s: Sensor update period (drives chart and log too).
        clock_period_s: Clock label refresh period.
        uptime_period_s: Uptime label refresh period.
        duration_s: Optional run duration; ``None`` runs until stopped.
        log_level: Logging level string.
        seed: Seed for the random source; ``None`` is unseeded.
        time_format: ``strftime`` format of clock, chart and log labels.
    """

    update_period_s: float = Field(default=1.0, gt=0)
    clock_period_s: float = Field(default=1.0, gt=0)
    uptime_period_s: float = Field(default=1.0, gt=0)
    duration_s: float | None = None
    log_level: str = "INFO"
    seed: int | None = None
    time_format: str = "%H:%M:%S"


class SensorSettings(BaseModel):
    value_step: float = Field(default=2.5, ge=0)
    risk_step: float = Field(default=1.5, ge=0)
    critical_probability: float = Field(default=0.15, ge=0, le=1)
    initial_critical_probability: float = Field(default=0.2, ge=0, le=1)
    critical_value_threshold: float | None = None


class SelectionSettings(BaseModel):
    initial: list[int] = Field(default_factory=lambda: [1, 2, 3])
    capacity: int = Field(default=3, ge=1, le=3)

    @field_validator("initial")
    @classmethod
    def _check_ids(cls, ids: list[int]) -> list[int]:
        for sensor_id in ids:
            if not 1 <= sensor_id <= NUM_SENSORS:
                raise ValueError(f"selection id {sensor_id} out of range [1, {NUM_SENSORS}]")
        return ids


class TrendSettings(BaseModel):
    capacity: int = Field(default=30, ge=1)


class LogSettings(BaseModel):
    capacity: int = Field(default=100, ge=1)
    top_n: int = Field(default=5, ge=1)


class DashboardConfig(BaseModel):
    """Parsed representation of the full YAML configuration.

    Attributes:
        dashboard: Timer and process settings.
        sensors: Update engine tuning.
        selection: Initial chart selection.
        trend: Trend window settings.
        log: Event log settings.
        view_configs: Raw dicts passed to the view factory.
    """

    dashboard: DashboardSettings = Field(default_factory=DashboardSettings)
    sensors: SensorSettings = Field(default_factory=SensorSettings)
    selection: SelectionSettings = Field(default_factory=SelectionSettings)
    trend: TrendSettings = Field(default_factory=TrendSettings)
    log: LogSettings = Field(default_factory=LogSettings)
    view_configs: list[dict[str, Any]] = Field(default_factory=list)


_SECTIONS = ("dashboard", "sensors", "selection", "trend", "log", "views")


def load_yaml_config(path: str | Path) -> DashboardConfig:
    """Load and validate a YAML configuration file.

    Returns a :class:`DashboardConfig` ready to be passed to
    :class:`~tep_monitor.dashboard.Dashboard`.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with path.open("r") as fh:
        raw: dict[str, Any] = yaml.safe_load(fh) or {}

    for key in raw:
        if key not in _SECTIONS:
            logger.warning("Ignoring unknown config section '%s'", key)

    config = DashboardConfig(
        dashboard=DashboardSettings(**(raw.get("dashboard") or {})),
        sensors=SensorSettings(**(raw.get("sensors") or {})),
        selection=SelectionSettings(**(raw.get("selection") or {})),
        trend=TrendSettings(**(raw.get("trend") or {})),
        log=LogSettings(**(raw.get("log") or {})),
        view_configs=list(raw.get("views") or []),
    )

    logger.info(
        "Loaded config: update every %.2fs, %d views, seed=%s",
        config.dashboard.update_period_s,
        len(config.view_configs),
        config.dashboard.seed,
    )
    return config
