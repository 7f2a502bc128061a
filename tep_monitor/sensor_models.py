"""Synthetic sensor channels for the Tennessee Eastman Process dashboard.

Defines the core types (``Sensor``, ``SensorType``, ``SensorStatus``) and the
``generate_sensors`` factory that builds the 52 ``XMEAS_n`` channels.
"""

from __future__ import annotations

import random
from enum import StrEnum

from pydantic import BaseModel, Field

__all__ = [
    "NUM_SENSORS",
    "Sensor",
    "SensorStatus",
    "SensorType",
    "clamp",
    "generate_sensors",
    "sensor_name",
    "sensor_type_for",
    "sort_by_risk",
]

NUM_SENSORS = 52

# Last id (inclusive) of the temperature, pressure and flow blocks.
_TEMPERATURE_MAX_ID = 13
_PRESSURE_MAX_ID = 26
_FLOW_MAX_ID = 39


class SensorType(StrEnum):
    """Measurement category of a channel."""

    TEMPERATURE = "temperature"
    PRESSURE = "pressure"
    FLOW = "flow"
    COMPOSITION = "composition"


class SensorStatus(StrEnum):
    """Per-channel alarm status."""

    NORMAL = "Normal"
    CRITICAL = "Critical"


class Sensor(BaseModel):
    """One synthetic measurement channel.

    Instances are immutable: the update engine produces a fresh ``Sensor``
    for every tick, so ``sensor_type`` can never change after creation.

    Attributes:
        id: Channel number, ``1..52``.
        name: Instrument tag, e.g. ``"XMEAS_7"``.
        value: Current reading, clamped to ``[0, 100]``.
        risk: Synthetic risk score, clamped to ``[0, 100]``.
        status: ``Normal`` or ``Critical``.
        sensor_type: Category derived from ``id``.
    """

    model_config = {"frozen": True}

    id: int = Field(ge=1, le=NUM_SENSORS)
    name: str
    value: float = Field(ge=0.0, le=100.0)
    risk: float = Field(ge=0.0, le=100.0)
    status: SensorStatus = SensorStatus.NORMAL
    sensor_type: SensorType

    @property
    def is_critical(self) -> bool:
        return self.status is SensorStatus.CRITICAL


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    """Clamp *value* into ``[low, high]``."""
    return max(low, min(high, value))


def sensor_name(sensor_id: int) -> str:
    return f"XMEAS_{sensor_id}"


def sensor_type_for(sensor_id: int) -> SensorType:
    """Return the category of channel *sensor_id*.

    Raises:
        ValueError: if *sensor_id* is outside ``1..52``.
    """
    if not 1 <= sensor_id <= NUM_SENSORS:
        raise ValueError(f"Sensor id {sensor_id} out of range [1, {NUM_SENSORS}]")
    if sensor_id <= _TEMPERATURE_MAX_ID:
        return SensorType.TEMPERATURE
    if sensor_id <= _PRESSURE_MAX_ID:
        return SensorType.PRESSURE
    if sensor_id <= _FLOW_MAX_ID:
        return SensorType.FLOW
    return SensorType.COMPOSITION


def sort_by_risk(sensors: list[Sensor]) -> list[Sensor]:
    """Return *sensors* ordered by descending risk (stable for ties)."""
    return sorted(sensors, key=lambda s: s.risk, reverse=True)


def generate_sensors(
    rng: random.Random | None = None,
    *,
    initial_critical_probability: float = 0.2,
) -> list[Sensor]:
    """Create the 52 channels with random value, risk and status.

    The result is sorted by descending risk.
    """
    rng = rng or random.Random()
    sensors: list[Sensor] = []
    for sensor_id in range(1, NUM_SENSORS + 1):
        value = rng.uniform(0.0, 100.0)
        risk = rng.uniform(0.0, 100.0)
        critical = rng.random() < initial_critical_probability
        sensors.append(
            Sensor(
                id=sensor_id,
                name=sensor_name(sensor_id),
                value=clamp(value),
                risk=clamp(risk),
                status=SensorStatus.CRITICAL if critical else SensorStatus.NORMAL,
                sensor_type=sensor_type_for(sensor_id),
            )
        )
    return sort_by_risk(sensors)
