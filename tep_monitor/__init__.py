"""TEP Monitor - a timer-driven operations dashboard over 52 simulated
Tennessee Eastman Process sensor channels.

Quick start::

    from tep_monitor import Dashboard
    from tep_monitor.views import ConsoleView

    dashboard = Dashboard()
    dashboard.add_view(ConsoleView())
    dashboard.run(duration_s=10)
"""

from __future__ import annotations

from tep_monitor.config import DashboardConfig, load_yaml_config
from tep_monitor.dashboard import Dashboard
from tep_monitor.generator import UpdateEngine
from tep_monitor.kpis import KpiSummary, SystemStatus
from tep_monitor.models import ChartPoint, ChartSeries, DashboardSnapshot, LogEntry
from tep_monitor.selection import SelectionManager
from tep_monitor.sensor_models import Sensor, SensorStatus, SensorType, generate_sensors

__all__ = [
    "ChartPoint",
    "ChartSeries",
    "Dashboard",
    "DashboardConfig",
    "DashboardSnapshot",
    "KpiSummary",
    "LogEntry",
    "SelectionManager",
    "Sensor",
    "SensorStatus",
    "SensorType",
    "SystemStatus",
    "UpdateEngine",
    "generate_sensors",
    "load_yaml_config",
]

__version__ = "0.1.0"
