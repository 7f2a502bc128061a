"""Dashboard - top-level state container that wires the update engine,
selection, trend buffer and event log to tickers and views.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import random
import signal
import threading
import time
from collections.abc import Callable
from datetime import datetime
from typing import Any

from tep_monitor.buffers import EventLog, TrendBuffer
from tep_monitor.config import DashboardConfig
from tep_monitor.generator import UpdateEngine
from tep_monitor.kpis import format_uptime, summarize
from tep_monitor.models import ChartPoint, DashboardSnapshot, LogEntry
from tep_monitor.scheduler import IntervalTicker, Ticker
from tep_monitor.selection import SelectionManager
from tep_monitor.sensor_models import Sensor, generate_sensors
from tep_monitor.views.base import View
from tep_monitor.views.callback import CallbackView

__all__ = ["Dashboard"]

logger = logging.getLogger("tep_monitor")


class Dashboard:
    """Owns all dashboard state and pushes snapshots to views.

    Example::

        from tep_monitor import Dashboard
        from tep_monitor.views import ConsoleView

        dashboard = Dashboard()
        dashboard.add_view(ConsoleView())
        dashboard.run(duration_s=10)

    Three tickers drive the state: *clock* refreshes the clock label,
    *uptime* refreshes the uptime label and *update* advances the sensors,
    samples the trend chart, appends to the event log and renders every
    view.  The chart is sampled from the sensor values produced by the same
    update.

    Parameters:
        config:
            Parsed configuration; defaults apply when omitted.
        rng:
            Random source for sensor generation and updates.  Defaults to
            ``random.Random(config.dashboard.seed)``.
        clock:
            Returns the current wall-clock time (labels only).
        monotonic:
            Returns seconds from a monotonic clock (uptime only).
    """

    def __init__(
        self,
        config: DashboardConfig | None = None,
        *,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] = datetime.now,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config or DashboardConfig()
        self._rng = rng or random.Random(self.config.dashboard.seed)
        self._clock = clock
        self._monotonic = monotonic

        sensor_cfg = self.config.sensors
        self._engine = UpdateEngine(
            self._rng,
            value_step=sensor_cfg.value_step,
            risk_step=sensor_cfg.risk_step,
            critical_probability=sensor_cfg.critical_probability,
            critical_value_threshold=sensor_cfg.critical_value_threshold,
        )
        self._sensors: list[Sensor] = generate_sensors(
            self._rng,
            initial_critical_probability=sensor_cfg.initial_critical_probability,
        )
        self._selection = SelectionManager(
            self.config.selection.initial,
            capacity=self.config.selection.capacity,
        )
        self._trend = TrendBuffer(self.config.trend.capacity)
        self._log = EventLog(self.config.log.capacity, top_n=self.config.log.top_n)

        self._started_at = self._monotonic()
        self._clock_label = self._now_label()
        self._uptime_label = format_uptime(0)

        self._views: list[View] = []
        self._tickers: list[IntervalTicker] = []
        self._stop_event: asyncio.Event | None = None
        self._running = False

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def sensors(self) -> list[Sensor]:
        return list(self._sensors)

    @property
    def selection(self) -> list[int]:
        return self._selection.ids

    @property
    def chart(self) -> list[ChartPoint]:
        return self._trend.points

    @property
    def log(self) -> list[LogEntry]:
        return self._log.entries

    @property
    def clock_label(self) -> str:
        return self._clock_label

    @property
    def uptime_label(self) -> str:
        return self._uptime_label

    @property
    def running(self) -> bool:
        return self._running

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def update_sensors(self) -> list[Sensor]:
        """Advance every sensor one tick and feed the chart and the log."""
        self._sensors = self._engine.tick(self._sensors)
        now = self._now_label()
        self._trend.append_sample(self._sensors, self._selection.ids, now)
        self._log.append_log(self._sensors, now)
        return self.sensors

    def refresh_clock(self) -> str:
        self._clock_label = self._now_label()
        return self._clock_label

    def refresh_uptime(self) -> str:
        self._uptime_label = format_uptime(self._monotonic() - self._started_at)
        return self._uptime_label

    def toggle(self, sensor_id: int) -> list[int]:
        """Select or deselect *sensor_id* for charting, immediately."""
        return self._selection.toggle(sensor_id)

    def deselect(self, sensor_id: int) -> list[int]:
        return self._selection.remove(sensor_id)

    def snapshot(self) -> DashboardSnapshot:
        """Build a render-ready view of the current state, KPIs included."""
        return DashboardSnapshot(
            clock=self._clock_label,
            kpis=summarize(self._sensors, uptime=self._uptime_label),
            sensors=self.sensors,
            selection=self._selection.ids,
            series=self._selection.series(),
            chart=self._trend.points,
            log=self._log.entries,
        )

    # ------------------------------------------------------------------
    # View management
    # ------------------------------------------------------------------

    def add_view(self, view: View | Callable[[DashboardSnapshot], Any]) -> None:
        """Register a view (or callable) to receive a snapshot per update."""
        if not isinstance(view, View):
            view = CallbackView(view)
        self._views.append(view)

    @property
    def views(self) -> list[View]:
        return list(self._views)

    async def publish(self) -> DashboardSnapshot:
        """Render the current snapshot on every view.

        A failing view is logged and skipped; the others still render.
        """
        snapshot = self.snapshot()
        for view in self._views:
            try:
                await view.render(snapshot)
            except Exception as exc:
                logger.error("%s render failed: %s", view.name, exc)
        return snapshot

    # ------------------------------------------------------------------
    # Ticker wiring
    # ------------------------------------------------------------------

    def bind(self, *, clock: Ticker, uptime: Ticker, update: Ticker) -> None:
        """Subscribe the dashboard to three tick sources."""
        clock.subscribe(self.refresh_clock)
        uptime.subscribe(self.refresh_uptime)
        update.subscribe(self._on_update)

    async def _on_update(self) -> None:
        self.update_sensors()
        await self.publish()

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------

    def run(self, duration_s: float | None = None) -> None:
        """Blocking entry point - starts the event loop.

        Works inside environments that already have a running event loop
        (Jupyter, IPython) by spawning a dedicated background thread with its
        own loop.

        Parameters:
            duration_s: If provided, stop automatically after this many
                        seconds.  ``None`` means run until Ctrl-C.
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None

        if loop is not None and loop.is_running():
            exc: list[BaseException | None] = [None]

            def _target() -> None:
                try:
                    asyncio.run(self.run_async(duration_s=duration_s))
                except KeyboardInterrupt:
                    logger.info("Interrupted by user")
                except BaseException as e:
                    exc[0] = e

            t = threading.Thread(target=_target, daemon=True)
            t.start()
            t.join()
            if exc[0] is not None:
                raise exc[0]
        else:
            try:
                asyncio.run(self.run_async(duration_s=duration_s))
            except KeyboardInterrupt:
                logger.info("Interrupted by user")

    async def run_async(self, duration_s: float | None = None) -> None:
        """Async entry point - runs inside an existing event loop.

        All tickers are stopped and all views closed before this returns,
        whatever the reason for stopping.
        """
        if not self._views:
            logger.warning("No views registered - nothing to do. Call add_view() first.")
            return

        settings = self.config.dashboard
        if duration_s is None:
            duration_s = settings.duration_s

        logger.info(
            "Starting dashboard: %d sensors, %d views, update every %.2fs",
            len(self._sensors),
            len(self._views),
            settings.update_period_s,
        )

        for view in self._views:
            await view.connect()

        clock = IntervalTicker(settings.clock_period_s, name="clock")
        uptime = IntervalTicker(settings.uptime_period_s, name="uptime")
        update = IntervalTicker(settings.update_period_s, name="update")
        self._tickers = [clock, uptime, update]
        self.bind(clock=clock, uptime=uptime, update=update)

        # NotImplementedError: raised on Windows where signal handlers are unsupported.
        # RuntimeError: raised when running in a non-main thread (e.g. notebook env).
        loop = asyncio.get_running_loop()
        self._stop_event = asyncio.Event()
        installed: list[signal.Signals] = []
        for sig in (signal.SIGINT, signal.SIGTERM):
            with contextlib.suppress(NotImplementedError, RuntimeError):
                loop.add_signal_handler(sig, self._stop_event.set)
                installed.append(sig)

        self._running = True
        try:
            async with contextlib.AsyncExitStack() as stack:
                for ticker in self._tickers:
                    await stack.enter_async_context(ticker)
                try:
                    await asyncio.wait_for(self._stop_event.wait(), timeout=duration_s)
                except TimeoutError:
                    logger.info("Duration reached (%.1fs) - stopping", duration_s)
                else:
                    logger.info("Stop requested - shutting down")
        except asyncio.CancelledError:
            logger.info("Dashboard cancelled")
        finally:
            self._running = False
            for sig in installed:
                loop.remove_signal_handler(sig)
            logger.info("Closing %d views after %d updates...", len(self._views), update.fired)
            for view in self._views:
                await view.close()
            self._stop_event = None

    def stop(self) -> None:
        """Ask a running :meth:`run_async` to shut down."""
        if self._stop_event is not None:
            self._stop_event.set()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _now_label(self) -> str:
        return self._clock().strftime(self.config.dashboard.time_format)
