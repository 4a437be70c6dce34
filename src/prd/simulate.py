"""Monte Carlo trial runner for PRD events.

Runs one event for a fixed number of trials and aggregates the outcome. The
CLI uses this; it is also handy for eyeballing that the effective rate lands
on the nominal one.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Optional

from prd.data import SolverConfig
from prd.event import PrdEvent
from prd.sampler import make_sampler

logger = logging.getLogger(__name__)

DEFAULT_TRIALS: int = 1_000_000


@dataclass(frozen=True, slots=True)
class SimulationConfig:
    """Monte Carlo simulation settings."""

    trials: int = DEFAULT_TRIALS
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.trials < 1:
            raise ValueError("SimulationConfig.trials must be >= 1")


@dataclass(frozen=True, slots=True)
class SimulationSummary:
    percentage: float
    coefficient: float
    trials: int
    successes: int
    longest_failure_streak: int
    elapsed_seconds: float

    @property
    def effective_percentage(self) -> float:
        return self.successes / self.trials * 100.0


def run_trials(event: PrdEvent, *, trials: int) -> SimulationSummary:
    """Run ``event`` ``trials`` times and summarise the results.

    Side-effect
    -----------
    Advances the event's internal state; it is not reset first.
    """

    if trials < 1:
        raise ValueError("trials must be >= 1")

    successes = 0
    streak = 0
    longest_streak = 0

    start = time.perf_counter()
    for _ in range(trials):
        if event.run():
            successes += 1
            streak = 0
        else:
            streak += 1
            if streak > longest_streak:
                longest_streak = streak
    end = time.perf_counter()

    return SimulationSummary(
        percentage=event.percentage,
        coefficient=event.coefficient,
        trials=trials,
        successes=successes,
        longest_failure_streak=longest_streak,
        elapsed_seconds=end - start,
    )


def simulate(
    percentage: float,
    *,
    config: Optional[SimulationConfig] = None,
    solver_config: Optional[SolverConfig] = None,
) -> SimulationSummary:
    """Build an event for ``percentage`` and run it per ``config``."""

    cfg = config or SimulationConfig()
    event = PrdEvent(percentage, sampler=make_sampler(cfg.seed), config=solver_config)
    logger.info(
        "Running %d trials: percentage=%s coefficient=%.15f seed=%s",
        cfg.trials,
        event.percentage,
        event.coefficient,
        cfg.seed,
    )

    summary = run_trials(event, trials=cfg.trials)
    logger.info(
        "Simulation complete: successes=%d effective=%.4f%% elapsed=%.3fs",
        summary.successes,
        summary.effective_percentage,
        summary.elapsed_seconds,
    )
    return summary
