#!/usr/bin/env python3
"""CallbackView examples -- 3 cases demonstrating a lambda view, an async
view, and scripted selection changes driven by manual tickers.

Directly runnable (no external services required).

Usage::

    python examples/callback_view_example.py           # Case 1 (default)
    python examples/callback_view_example.py --case 2   # Async callback
    python examples/callback_view_example.py --case 3   # Manual tickers
"""

from __future__ import annotations

import argparse

# ---------------------------------------------------------------------------
# Case 1: Lambda shorthand -- simplest possible view
# ---------------------------------------------------------------------------


def run_case_1() -> None:
    """A lambda that prints the KPI line of every snapshot."""
    from tep_monitor import Dashboard

    print("=== Case 1: Lambda shorthand ===\n")

    dashboard = Dashboard()
    dashboard.add_view(
        lambda snap: print(
            f"  [{snap.clock}] {snap.kpis.system_status:<8s} "
            f"avg risk {snap.kpis.average_risk:5.1f}  alerts {snap.kpis.critical_count}"
        )
    )
    dashboard.run(duration_s=5)


# ---------------------------------------------------------------------------
# Case 2: Async callback -- auto-detected by CallbackView
# ---------------------------------------------------------------------------


def run_case_2() -> None:
    """Async view that tracks the riskiest channel across updates."""
    import asyncio

    from tep_monitor import Dashboard
    from tep_monitor.config import DashboardConfig, DashboardSettings
    from tep_monitor.views.callback import CallbackView

    print("=== Case 2: Async callback ===\n")

    async def leader(snap):
        await asyncio.sleep(0.01)
        top = snap.sensors[0]
        print(f"  top: {top.name:<9s} risk {top.risk:5.1f}  {top.status}")

    cfg = DashboardConfig(dashboard=DashboardSettings(update_period_s=0.5, seed=7))
    dashboard = Dashboard(cfg)
    dashboard.add_view(CallbackView(leader))
    dashboard.run(duration_s=4)


# ---------------------------------------------------------------------------
# Case 3: Manual tickers -- deterministic, no wall-clock waiting
# ---------------------------------------------------------------------------


def run_case_3() -> None:
    """Drive the dashboard tick by tick and change the selection between ticks."""
    import asyncio
    import random

    from tep_monitor import Dashboard
    from tep_monitor.scheduler import ManualTicker

    print("=== Case 3: Manual tickers ===\n")

    dashboard = Dashboard(rng=random.Random(42))
    dashboard.add_view(lambda snap: print(f"  chart: {snap.chart[-1].to_dict()}"))

    clock, uptime, update = ManualTicker("clock"), ManualTicker("uptime"), ManualTicker("update")
    dashboard.bind(clock=clock, uptime=uptime, update=update)

    async def script() -> None:
        await update.advance(2)
        print(f"  toggle 4 -> {dashboard.toggle(4)}")
        await update.advance(2)
        print(f"  toggle 2 -> {dashboard.toggle(2)}")
        await update.advance(1)

    asyncio.run(script())


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------


def main() -> None:
    parser = argparse.ArgumentParser(description="CallbackView examples")
    parser.add_argument(
        "--case", type=int, default=1, choices=[1, 2, 3], help="Which example case to run (default: 1)"
    )
    args = parser.parse_args()

    cases = {
        1: run_case_1,
        2: run_case_2,
        3: run_case_3,
    }
    cases[args.case]()


if __name__ == "__main__":
    main()
