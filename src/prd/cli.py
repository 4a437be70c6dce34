"""Command-line entry point for :mod:`prd`.

Runs a PRD event many times and reports how close the effective rate lands to
the nominal one.

Example
-------
python -m prd.cli 25 --trials 10000000 --seed 7
"""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict
from typing import Sequence

from prd.data import SolverConfig
from prd.errors import PrdError
from prd.simulate import DEFAULT_TRIALS, SimulationConfig, SimulationSummary, simulate

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def configure_logging(*, level: int = logging.INFO) -> None:
    """Configure a simple root logger that writes to stderr.

    This is safe to call multiple times.
    """

    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(
            level=level,
            format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        )
    else:
        root.setLevel(level)


def _print_summary(summary: SimulationSummary) -> None:
    print(f"Event has been run {summary.trials} times")
    print(f"Event has been successful {summary.successes} times")
    print(f"Event stated percentage was {summary.percentage:g}%")
    print(f"Event PRD coefficient was {summary.coefficient * 100.0:.15f}%")
    print(f"Event had effective percentage of {summary.effective_percentage:.4f}%")
    print(f"Longest failure streak was {summary.longest_failure_streak}")
    print(f"Time elapsed is {summary.elapsed_seconds:.3f} s")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="prd", description="Simulate a pseudo-random distribution event")
    parser.add_argument("percentage", type=float, help="Nominal success percentage, 0..100 inclusive")
    parser.add_argument(
        "--trials",
        type=int,
        default=DEFAULT_TRIALS,
        help=f"Number of times to run the event (default: {DEFAULT_TRIALS:,})",
    )
    parser.add_argument(
        "--seed",
        type=lambda value: int(value, 0),
        default=None,
        help="Seed for the uniform sampler (accepts decimal or 0x-prefixed hex)",
    )
    parser.add_argument(
        "--no-table",
        action="store_true",
        help="Always bisect instead of consulting the precomputed coefficient table",
    )
    parser.add_argument(
        "--log-level",
        choices=_LOG_LEVELS,
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("--json", action="store_true", help="Print the summary as JSON")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    configure_logging(level=getattr(logging, args.log_level))

    try:
        sim_config = SimulationConfig(trials=args.trials, seed=args.seed)
        summary = simulate(
            args.percentage,
            config=sim_config,
            solver_config=SolverConfig(use_table=not args.no_table),
        )
    except (PrdError, ValueError) as e:
        parser.error(str(e))

    if args.json:
        payload = asdict(summary)
        payload["effective_percentage"] = summary.effective_percentage
        print(json.dumps(payload, indent=2))
    else:
        _print_summary(summary)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
