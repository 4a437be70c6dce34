"""Pseudo-random distribution (PRD) events.

A PRD event succeeds with a chance that starts at a coefficient ``C``, grows by
``C`` after every miss and resets after every proc. ``C`` is solved so the
long-run rate matches a nominal percentage, with far less variance than an
independent roll.
"""

from .data import PrdParameters, SolverConfig, validate_percentage
from .errors import InvalidArgumentError, NonConvergenceError, PrdError
from .event import PrdEvent
from .sampler import UniformSampler, make_sampler
from .simulate import SimulationConfig, SimulationSummary, run_trials, simulate
from .solver import (
    SolveResult,
    coefficient_from_percentage,
    coefficient_table,
    expected_rate,
    solve_coefficient,
    solve_parameters,
)

__all__ = [
    "PrdParameters",
    "SolverConfig",
    "validate_percentage",
    "PrdError",
    "InvalidArgumentError",
    "NonConvergenceError",
    "PrdEvent",
    "UniformSampler",
    "make_sampler",
    "SimulationConfig",
    "SimulationSummary",
    "run_trials",
    "simulate",
    "SolveResult",
    "coefficient_from_percentage",
    "coefficient_table",
    "expected_rate",
    "solve_coefficient",
    "solve_parameters",
]
