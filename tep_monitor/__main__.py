"""CLI entry point for the TEP dashboard.

Usage::

    tep-monitor run --duration 30
    tep-monitor run --format json --seed 7 --period 0.5
    tep-monitor run --config dashboard.yaml
    tep-monitor list-sensors
    tep-monitor init-config --output dashboard.yaml
"""

from __future__ import annotations

import argparse
import logging
import sys
import textwrap

# ---------------------------------------------------------------------------
# Sample YAML config template for init-config
# ---------------------------------------------------------------------------
_SAMPLE_CONFIG = """\
# TEP Monitor configuration

dashboard:
  update_period_s: 1.0                # sensor update / chart / log period
  clock_period_s: 1.0                 # clock label refresh
  uptime_period_s: 1.0                # uptime label refresh
  # duration_s: 60                    # optional: auto-stop after N seconds
  # seed: 42                          # optional: reproducible random walk
  # log_level: INFO                   # DEBUG, INFO, WARNING, ERROR
  # time_format: "%H:%M:%S"

sensors:
  value_step: 2.5                     # value moves by uniform(-2.5, 2.5) per tick
  risk_step: 1.5                      # risk moves by uniform(-1.5, 1.5) per tick
  critical_probability: 0.15          # chance a channel reports Critical per tick
  initial_critical_probability: 0.2
  # critical_value_threshold: 80      # optional: force Critical above this value

selection:
  initial: [1, 2, 3]                  # channels charted at startup (max 3)

trend:
  capacity: 30                        # chart points kept

log:
  capacity: 100                       # log rows kept
  top_n: 5                            # riskiest channels logged per tick

views:
  - type: console
    fmt: text                         # text or json
    ranking_rows: 15
    log_rows: 20
"""


def _positive_float(text: str) -> float:
    try:
        value = float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {text!r}") from None
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {text}")
    return value


# ======================================================================
# Main entry point
# ======================================================================


def main(argv: list[str] | None = None) -> None:
    epilog = textwrap.dedent("""\
        examples:
          tep-monitor run --duration 30
          tep-monitor run --format json --seed 7 --period 0.5
          tep-monitor run --config dashboard.yaml
          tep-monitor list-sensors
          tep-monitor init-config --output dashboard.yaml
    """)

    parser = argparse.ArgumentParser(
        prog="tep-monitor",
        description="Operations dashboard over simulated Tennessee Eastman Process sensors.",
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", title="commands")

    # -- run ---------------------------------------------------------------
    run_parser = subparsers.add_parser(
        "run",
        help="Run the dashboard and render it on the console.",
    )
    run_parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to YAML config file. --format is ignored when the file declares views.",
    )
    run_parser.add_argument(
        "--period",
        type=_positive_float,
        default=None,
        help="Sensor update period in seconds (default: 1.0).",
    )
    run_parser.add_argument(
        "--duration",
        "-d",
        type=float,
        default=None,
        help="Run duration in seconds (default: indefinite, Ctrl-C to stop).",
    )
    run_parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed the random source for a reproducible run.",
    )
    run_parser.add_argument(
        "--format",
        type=str,
        default="text",
        choices=["text", "json"],
        help="Console output format (default: text).",
    )
    run_parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO).",
    )

    # -- list-sensors ------------------------------------------------------
    subparsers.add_parser(
        "list-sensors",
        help="List the 52 sensor channels and their categories.",
    )

    # -- init-config -------------------------------------------------------
    init_parser = subparsers.add_parser(
        "init-config",
        help="Generate a sample YAML configuration file.",
    )
    init_parser.add_argument(
        "--output",
        "-o",
        type=str,
        default=None,
        help="Write config to this file instead of stdout.",
    )

    # A leading flag (e.g. `tep-monitor --duration 5`) implies "run".
    _known_commands = {"run", "list-sensors", "init-config"}
    raw_args = argv if argv is not None else sys.argv[1:]
    if raw_args and raw_args[0] not in _known_commands and raw_args[0] not in ("-h", "--help"):
        raw_args = ["run", *list(raw_args)]

    args = parser.parse_args(raw_args)

    if args.command is None:
        parser.print_help()
        return

    # -- Dispatch ----------------------------------------------------------
    if args.command == "run":
        _cmd_run(args)
    elif args.command == "list-sensors":
        _cmd_list_sensors()
    elif args.command == "init-config":
        _cmd_init_config(args.output)
    else:
        parser.print_help()


# ======================================================================
# Command implementations
# ======================================================================


def _cmd_run(args: argparse.Namespace) -> None:
    """Build the dashboard from CLI flags and/or a config file and run it."""
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(name)-30s %(levelname)-7s %(message)s",
        datefmt="%H:%M:%S",
    )

    from tep_monitor.config import DashboardConfig, DashboardSettings, load_yaml_config
    from tep_monitor.dashboard import Dashboard
    from tep_monitor.views.console import ConsoleView
    from tep_monitor.views.factory import create_view

    if args.config:
        cfg = load_yaml_config(args.config)
        logging.getLogger().setLevel(getattr(logging, cfg.dashboard.log_level, logging.INFO))
    else:
        cfg = DashboardConfig()

    overrides = {"update_period_s": args.period, "seed": args.seed}
    overrides = {key: value for key, value in overrides.items() if value is not None}
    if overrides:
        cfg.dashboard = DashboardSettings.model_validate({**cfg.dashboard.model_dump(), **overrides})

    dashboard = Dashboard(cfg)
    if cfg.view_configs:
        for view_dict in cfg.view_configs:
            dashboard.add_view(create_view(view_dict))
    else:
        dashboard.add_view(ConsoleView(fmt=args.format))

    duration = args.duration if args.duration is not None else cfg.dashboard.duration_s
    dashboard.run(duration_s=duration)


# -- list-sensors -----------------------------------------------------------


def _cmd_list_sensors() -> None:
    from tep_monitor.sensor_models import NUM_SENSORS, sensor_name, sensor_type_for

    print(f"\n{'Id':>3} {'Name':<10} {'Type':<12}")
    print("-" * 27)
    for sensor_id in range(1, NUM_SENSORS + 1):
        print(f"{sensor_id:>3} {sensor_name(sensor_id):<10} {sensor_type_for(sensor_id):<12}")
    print("-" * 27)
    print(f"{'TOTAL':<14} {NUM_SENSORS:>12}")
    print()


# -- init-config ------------------------------------------------------------


def _cmd_init_config(output_path: str | None) -> None:
    if output_path:
        from pathlib import Path

        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        Path(output_path).write_text(_SAMPLE_CONFIG)
        print(f"Sample config written to {output_path}")
    else:
        print(_SAMPLE_CONFIG)


# ======================================================================
if __name__ == "__main__":
    main()
