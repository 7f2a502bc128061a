"""Tests for tep_monitor.kpis – averages, counts, classification, uptime."""

from __future__ import annotations

import pytest

from tep_monitor.kpis import (
    KpiSummary,
    RiskBand,
    SystemStatus,
    average_risk,
    category_averages,
    critical_count,
    format_uptime,
    risk_band,
    summarize,
    system_status,
)
from tep_monitor.sensor_models import Sensor, SensorStatus, SensorType, sensor_type_for


def _sensors(critical: int, total: int = 10) -> list[Sensor]:
    return [
        Sensor(
            id=i,
            name=f"XMEAS_{i}",
            value=float(i),
            risk=float(i),
            status=SensorStatus.CRITICAL if i <= critical else SensorStatus.NORMAL,
            sensor_type=sensor_type_for(i),
        )
        for i in range(1, total + 1)
    ]


class TestSystemStatus:
    """0 → NORMAL, 1..4 → WARNING, 5+ → CRITICAL."""

    @pytest.mark.parametrize(
        ("count", "expected"),
        [
            (0, SystemStatus.NORMAL),
            (1, SystemStatus.WARNING),
            (4, SystemStatus.WARNING),
            (5, SystemStatus.CRITICAL),
            (52, SystemStatus.CRITICAL),
        ],
    )
    def test_thresholds(self, count: int, expected: SystemStatus) -> None:
        assert system_status(count) is expected

    def test_from_sensor_collection(self) -> None:
        assert system_status(critical_count(_sensors(critical=5))) is SystemStatus.CRITICAL
        assert system_status(critical_count(_sensors(critical=3))) is SystemStatus.WARNING
        assert system_status(critical_count(_sensors(critical=0))) is SystemStatus.NORMAL


class TestAggregates:
    def test_average_risk(self) -> None:
        # risks are 1, 2, ..., 10
        assert average_risk(_sensors(0)) == pytest.approx(5.5)

    def test_average_risk_empty(self) -> None:
        assert average_risk([]) == 0.0

    def test_critical_count(self) -> None:
        assert critical_count(_sensors(critical=4)) == 4

    def test_category_averages(self) -> None:
        sensors = _sensors(0, total=52)
        averages = category_averages(sensors)
        assert averages[SensorType.TEMPERATURE] == pytest.approx(7.0)  # ids 1..13
        assert averages[SensorType.PRESSURE] == pytest.approx(20.0)  # ids 14..26
        assert averages[SensorType.FLOW] == pytest.approx(33.0)  # ids 27..39
        assert averages[SensorType.COMPOSITION] == pytest.approx(46.0)  # ids 40..52

    def test_average_risk_full_plant(self) -> None:
        sensors = _sensors(0, total=52)
        assert all(0.0 <= s.risk <= 100.0 for s in sensors)
        assert average_risk(sensors) == pytest.approx(26.5)

    def test_category_averages_omits_empty_categories(self) -> None:
        assert set(category_averages(_sensors(0, total=5))) == {SensorType.TEMPERATURE}


class TestRiskBand:
    @pytest.mark.parametrize(
        ("risk", "expected"),
        [(0.0, RiskBand.LOW), (40.0, RiskBand.LOW), (40.1, RiskBand.MEDIUM), (70.0, RiskBand.MEDIUM), (70.1, RiskBand.HIGH)],
    )
    def test_bands(self, risk: float, expected: RiskBand) -> None:
        assert risk_band(risk) is expected


class TestFormatUptime:
    @pytest.mark.parametrize(
        ("seconds", "expected"),
        [(0, "0h 0m"), (59.9, "0h 0m"), (60, "0h 1m"), (3599, "0h 59m"), (3600, "1h 0m"), (7325, "2h 2m"), (-5, "0h 0m")],
    )
    def test_format(self, seconds: float, expected: str) -> None:
        assert format_uptime(seconds) == expected


class TestSummarize:
    def test_bundles_all_kpis(self) -> None:
        summary = summarize(_sensors(critical=2), uptime="1h 5m")
        assert isinstance(summary, KpiSummary)
        assert summary.system_status is SystemStatus.WARNING
        assert summary.critical_count == 2
        assert summary.average_risk == pytest.approx(5.5)
        assert summary.uptime == "1h 5m"
        assert summary.category_averages == {SensorType.TEMPERATURE: pytest.approx(5.5)}
