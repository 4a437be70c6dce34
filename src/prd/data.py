"""Domain data model for the pseudo-random distribution.

This module is intentionally *pure*: it defines the immutable parameter and
configuration objects, plus percentage validation. The coefficient search
lives in :mod:`prd.solver` and the stateful roll in :mod:`prd.event`.
"""

from __future__ import annotations

import math
import numbers
import sys
from dataclasses import dataclass

from prd.errors import InvalidArgumentError

MIN_PERCENTAGE: float = 0.0
MAX_PERCENTAGE: float = 100.0


def validate_percentage(value: object) -> float:
    """Return ``value`` as a float, or raise :class:`InvalidArgumentError`.

    Accepts any real number (ints, floats, numpy scalars) in [0, 100]. Booleans,
    strings and ``None`` are rejected even though some of them coerce to float.
    """

    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidArgumentError(f"Percentage argument is not a number: {value!r}")

    perc = float(value)
    if math.isnan(perc) or math.isinf(perc):
        raise InvalidArgumentError(f"Percentage argument must be finite: {value!r}")
    if perc < MIN_PERCENTAGE or perc > MAX_PERCENTAGE:
        raise InvalidArgumentError(f"Percentage argument must be between 0 and 100: {value!r}")

    return perc


@dataclass(frozen=True, slots=True)
class SolverConfig:
    """Coefficient search settings.

    ``max_series_terms`` bounds the work of a single expectation evaluation,
    which grows as ``ceil(1/c)``; it is what stops very small percentages from
    running for minutes.

    Integer percentages are answered from :func:`prd.solver.coefficient_table`,
    which is always built with the default budgets and tolerance. Only
    ``use_table`` affects them; the other fields apply to fractional
    percentages (or to every percentage when ``use_table`` is off).
    """

    use_table: bool = True
    max_iterations: int = 200
    max_series_terms: int = 5_000_000
    tolerance: float = sys.float_info.epsilon

    def __post_init__(self) -> None:
        if self.max_iterations < 1:
            raise ValueError("SolverConfig.max_iterations must be >= 1")
        if self.max_series_terms < 1:
            raise ValueError("SolverConfig.max_series_terms must be >= 1")
        if not self.tolerance >= 0:
            raise ValueError("SolverConfig.tolerance must be >= 0")


DEFAULT_SOLVER_CONFIG = SolverConfig()


@dataclass(frozen=True, slots=True)
class PrdParameters:
    """Immutable PRD parameters derived once from a nominal percentage.

    The coefficient is stored on the percentage scale, exactly as the solver
    returns it, so the event's floor matches the solved value bit-for-bit.
    """

    nominal_percentage: float
    coefficient_percentage: float

    def __post_init__(self) -> None:
        validate_percentage(self.nominal_percentage)
        if not 0.0 <= self.coefficient_percentage <= 100.0:
            raise ValueError("PrdParameters.coefficient_percentage must be within [0, 100]")

    @property
    def coefficient(self) -> float:
        """Coefficient as a probability fraction in [0, 1]."""
        return self.coefficient_percentage / 100.0
