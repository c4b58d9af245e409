"""
Command line entry point for the thermostat simulator.

Plays a series of target temperatures against a fresh controller and prints
every tick.
"""

import argparse
import sys
from typing import List, Optional
import structlog
from pydantic import ValidationError

from thermostat import __version__
from thermostat.config.loader import ConfigLoader
from thermostat.config.settings import SimulationOptions
from thermostat.control.simulation import TickRecord
from thermostat.core.container import create_container
from thermostat.core.exceptions import ThermostatError, ConfigurationError
from thermostat.core.logging import setup_colored_logging

logger = structlog.get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="thermostat-sim",
        description="Thermostat control simulator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  thermostat-sim --target 25              # Heat from 20°C to 25°C
  thermostat-sim -t 25 -t 18              # Heat, then cool
  thermostat-sim --config thermostat.yaml # Play the configured targets
        """,
    )

    parser.add_argument(
        "--config",
        "-c",
        type=str,
        help="Path to configuration file (default: auto-detect)",
    )

    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        default=None,
        help="Set logging level (default: from config, else info)",
    )

    parser.add_argument(
        "--target",
        "-t",
        type=int,
        action="append",
        dest="targets",
        help="Target temperature to play; repeat for a sequence (overrides config)",
    )

    parser.add_argument("--max-ticks", type=int, help="Ticks allowed per target")

    parser.add_argument(
        "--reconcile", action="store_true", help="Reconcile after every tick"
    )

    parser.add_argument(
        "--validate-config", action="store_true", help="Validate configuration and exit"
    )

    parser.add_argument("--version", action="version", version=f"thermostat-sim {__version__}")

    return parser


def format_record(record: TickRecord) -> str:
    """One line per tick."""
    marker = "*" if record.changed else " "
    return (
        f"{marker} tick {record.tick:>3}  {record.operation:<15} "
        f"{record.current_temp:>3}°C -> {record.target_temp:>3}°C  "
        f"mode={record.mode.value:<8} fan={record.fan_speed.value}"
    )


def print_history(history: List[TickRecord]) -> None:
    for record in history:
        print(format_record(record))


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the application.

    Returns the process exit code.
    """

    args = build_parser().parse_args(argv)

    # CLI log level wins over the config file
    setup_colored_logging(args.log_level or "info")

    config_file = args.config or ConfigLoader.get_default_config_path()

    if args.validate_config:
        try:
            settings = ConfigLoader.load_settings(config_file)
        except ThermostatError as e:
            print(f"❌ Configuration validation failed: {e}")
            return 1

        print(f"✅ Configuration is valid: {config_file or '(defaults)'}")
        print(f"   Log level: {settings.app_options.log_level.value}")
        print(f"   Max ticks: {settings.simulation_options.max_ticks}")
        print(f"   Reconcile each tick: {settings.simulation_options.reconcile_each_tick}")
        print(f"   Targets: {settings.simulation_options.targets}")
        return 0

    simulator = None
    try:
        container = create_container(config_file)
        settings = container.settings()

        if args.log_level is None:
            setup_colored_logging(settings.app_options.log_level)

        overrides = {}
        if args.targets is not None:
            overrides["targets"] = args.targets
        if args.max_ticks is not None:
            overrides["max_ticks"] = args.max_ticks
        if args.reconcile:
            overrides["reconcile_each_tick"] = True
        try:
            options = SimulationOptions(
                **{**settings.simulation_options.model_dump(), **overrides}
            )
        except ValidationError as e:
            raise ConfigurationError(f"Invalid command line options: {e}") from e

        simulator = container.simulator(options=options)

        print("🌡️  Thermostat simulator")
        print("=" * 50)

        simulator.run(options.targets)
        print_history(simulator.history)

        status = simulator.controller.get_status()
        print("-" * 50)
        print(
            f"Final: {status['current_temp']}°C (target {status['target_temp']}°C), "
            f"mode={status['mode']}, fan={status['fan_speed']}"
        )
        return 0

    except ThermostatError as e:
        if simulator is not None:
            # Ticks that ran before the failure
            print_history(simulator.history)
        logger.error("Thermostat simulation failed", error=str(e))
        print(f"❌ {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
