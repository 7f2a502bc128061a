"""Update engine - perturbs every channel once per tick.

This is the only place that produces new sensor state.  Each call to
:meth:`UpdateEngine.tick` returns a fresh, risk-sorted list and leaves the
input untouched.
"""

from __future__ import annotations

import logging
import random

from tep_monitor.sensor_models import Sensor, SensorStatus, clamp, sort_by_risk

__all__ = ["UpdateEngine"]

logger = logging.getLogger("tep_monitor.generator")


class UpdateEngine:
    """Applies bounded random-walk updates to a sensor collection.

    Parameters:
        rng:
            Random source.  Anything exposing ``random()`` and
            ``uniform(a, b)`` works; pass ``random.Random(seed)`` (or a
            scripted stand-in) for reproducible ticks.
        value_step:
            Half-width of the uniform step applied to ``value``.
        risk_step:
            Half-width of the uniform step applied to ``risk``.
        critical_probability:
            Chance that a channel reports ``Critical`` on a given tick.
        critical_value_threshold:
            When set, any channel whose new value exceeds it is forced
            ``Critical`` regardless of the random draw.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        *,
        value_step: float = 2.5,
        risk_step: float = 1.5,
        critical_probability: float = 0.15,
        critical_value_threshold: float | None = None,
    ) -> None:
        self._rng = rng or random.Random()
        self.value_step = value_step
        self.risk_step = risk_step
        self.critical_probability = critical_probability
        self.critical_value_threshold = critical_value_threshold
        self._tick_count = 0

    def tick(self, sensors: list[Sensor]) -> list[Sensor]:
        """Return the next state of *sensors*, sorted by descending risk."""
        updated = [self._step(sensor) for sensor in sensors]
        self._tick_count += 1
        if self._tick_count % 100 == 0:
            logger.debug("Tick %d - updated %d sensors", self._tick_count, len(updated))
        return sort_by_risk(updated)

    @property
    def tick_count(self) -> int:
        return self._tick_count

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _step(self, sensor: Sensor) -> Sensor:
        value = clamp(sensor.value + self._rng.uniform(-self.value_step, self.value_step))
        risk = clamp(sensor.risk + self._rng.uniform(-self.risk_step, self.risk_step))
        critical = self._rng.random() < self.critical_probability
        if self.critical_value_threshold is not None and value > self.critical_value_threshold:
            critical = True
        return sensor.model_copy(
            update={
                "value": value,
                "risk": risk,
                "status": SensorStatus.CRITICAL if critical else SensorStatus.NORMAL,
            }
        )
