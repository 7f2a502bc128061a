"""Tests for tep_monitor.models – ChartPoint, LogEntry and DashboardSnapshot."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from tep_monitor.kpis import SystemStatus, summarize
from tep_monitor.models import ChartPoint, ChartSeries, DashboardSnapshot, LogEntry
from tep_monitor.sensor_models import Sensor, SensorStatus, SensorType

# -----------------------------------------------------------------------
# ChartPoint
# -----------------------------------------------------------------------


class TestChartPoint:
    """Dynamic ``sensor_<id>`` keys on a chart point."""

    def test_extra_sensor_keys(self) -> None:
        point = ChartPoint(time="10:00:00", sensor_3=41.5, sensor_9=7.25)
        assert point.values == {"sensor_3": 41.5, "sensor_9": 7.25}
        assert point.get("sensor_3") == 41.5
        assert point.get("sensor_4") is None
        assert point.get("sensor_4", 0.0) == 0.0

    def test_to_dict_flattens_keys(self) -> None:
        point = ChartPoint(time="t", sensor_1=1.0)
        assert point.to_dict() == {"time": "t", "sensor_1": 1.0}

    def test_frozen(self) -> None:
        point = ChartPoint(time="t")
        with pytest.raises(ValidationError, match="frozen"):
            point.time = "other"  # type: ignore[misc]


# -----------------------------------------------------------------------
# LogEntry
# -----------------------------------------------------------------------


class TestLogEntry:
    def test_construction(self) -> None:
        entry = LogEntry(no=3, time="t", sensor_name="XMEAS_1", value="12.00", status=SensorStatus.NORMAL)
        assert entry.no == 3
        assert entry.status is SensorStatus.NORMAL

    def test_status_parsed_from_string(self) -> None:
        entry = LogEntry(no=1, time="t", sensor_name="XMEAS_1", value="1.00", status="Critical")
        assert entry.status is SensorStatus.CRITICAL


# -----------------------------------------------------------------------
# DashboardSnapshot
# -----------------------------------------------------------------------


class TestDashboardSnapshot:
    """Serialisation of the per-render snapshot."""

    @pytest.fixture()
    def snapshot(self) -> DashboardSnapshot:
        sensors = [
            Sensor(id=1, name="XMEAS_1", value=55.0, risk=80.0, status=SensorStatus.CRITICAL, sensor_type=SensorType.TEMPERATURE),
            Sensor(id=14, name="XMEAS_14", value=25.0, risk=20.0, sensor_type=SensorType.PRESSURE),
        ]
        return DashboardSnapshot(
            clock="10:00:00",
            kpis=summarize(sensors, uptime="0h 3m"),
            sensors=sensors,
            selection=[1],
            series=[ChartSeries(key="sensor_1", color="#3b82f6", sensor_id=1)],
            chart=[ChartPoint(time="09:59:59", sensor_1=55.0)],
            log=[LogEntry(no=1, time="09:59:59", sensor_name="XMEAS_1", value="55.00", status=SensorStatus.CRITICAL)],
        )

    def test_to_dict(self, snapshot: DashboardSnapshot) -> None:
        d = snapshot.to_dict()
        assert d["clock"] == "10:00:00"
        assert d["kpis"]["system_status"] == "WARNING"
        assert d["kpis"]["category_averages"] == {"temperature": 55.0, "pressure": 25.0}
        assert d["chart"] == [{"time": "09:59:59", "sensor_1": 55.0}]
        assert d["sensors"][0]["status"] == "Critical"

    def test_to_json_is_valid(self, snapshot: DashboardSnapshot) -> None:
        parsed = json.loads(snapshot.to_json())
        assert parsed["selection"] == [1]
        assert parsed["series"][0]["key"] == "sensor_1"
        assert parsed["log"][0]["no"] == 1

    def test_kpis_reflect_sensors(self, snapshot: DashboardSnapshot) -> None:
        assert snapshot.kpis.system_status is SystemStatus.WARNING
        assert snapshot.kpis.average_risk == pytest.approx(50.0)
