"""Command-line entry point.

    python -m taxisim Input.txt --seed 7
    python -m taxisim Input.txt --always-accept
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from .config import AppConfig, get_config
from .container import Container
from .domain.errors import TaxiSimError
from .logging_config import configure_logging
from .services import CallSimulator


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="taxisim",
        description="Simulate shop taxi dispatch over a road network.",
    )
    parser.add_argument(
        "scenario",
        nargs="?",
        type=Path,
        help="Scenario file (defaults to TAXISIM_SCENARIO_DATA_DIR/FILE_NAME)",
    )
    parser.add_argument("--seed", type=int, help="Seed for driver decisions")
    parser.add_argument(
        "--decline-probability",
        type=float,
        help="Chance that a driver declines a call",
    )
    parser.add_argument(
        "--always-accept",
        action="store_true",
        help="Drivers never decline",
    )
    parser.add_argument("--log-level", help="Logging level, e.g. DEBUG")
    return parser


def _apply_overrides(config: AppConfig, args: argparse.Namespace) -> AppConfig:
    dispatch_updates = {}
    if args.seed is not None:
        dispatch_updates["seed"] = args.seed
    if args.always_accept:
        dispatch_updates["decline_probability"] = 0.0
    elif args.decline_probability is not None:
        dispatch_updates["decline_probability"] = args.decline_probability

    updates = {}
    if dispatch_updates:
        updates["dispatch"] = config.dispatch.model_copy(update=dispatch_updates)
    if args.log_level:
        updates["observability"] = config.observability.model_copy(
            update={"level": args.log_level}
        )
    return config.model_copy(update=updates) if updates else config


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    if args.decline_probability is not None and not 0.0 <= args.decline_probability <= 1.0:
        print("error: --decline-probability must be between 0 and 1", file=sys.stderr)
        return 2

    try:
        config = _apply_overrides(get_config(), args)
        configure_logging(config.observability)

        container = Container.create_default(config, scenario_path=args.scenario)
        simulator = container.resolve(CallSimulator)
        for report in simulator.iter_reports():
            print(report.render())
    except TaxiSimError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0
