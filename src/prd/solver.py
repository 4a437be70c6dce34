"""Coefficient search for the pseudo-random distribution.

Under PRD the proc chance on the N-th trial since the last proc is
``P(N) = min(1, C * N)``. Each failure raises the chance by ``C``, which is also
the initial chance, and a proc resets the counter. ``C`` sits below the nominal
fraction for every percentage strictly between 0 and 100.

There is no closed form for ``C`` given a nominal percentage, so we bisect on
``C`` and evaluate the implied long-run rate with :func:`expected_rate`.

Cost
----
One call to :func:`expected_rate` is ``ceil(1/c)`` steps and ``C`` shrinks
roughly with the square of the nominal fraction. A 1% event needs ~6,400 terms
per bisection step; 0.1% needs ~640,000. ``SolverConfig.max_series_terms``
bounds this and raises :class:`~prd.errors.NonConvergenceError` instead of
stalling (around 0.04% with the default budget).

The series is plain Python arithmetic, so wall-clock time matters well before
the budget trips: a fractional percentage near 1% solves in a fraction of a
second, 0.1% takes several seconds, and 0.05% takes around 40 seconds (each
bisection step walks millions of terms). Subnormal percentages whose
coefficient would overflow ``1/c`` also raise the error.

For integer percentages the lazily built :func:`coefficient_table` skips the
search entirely, and for fractional ones it narrows the initial bracket to the
neighbouring integer entries.
"""

from __future__ import annotations

import functools
import logging
import math
from dataclasses import dataclass
from typing import Optional

from prd.data import DEFAULT_SOLVER_CONFIG, PrdParameters, SolverConfig, validate_percentage
from prd.errors import InvalidArgumentError, NonConvergenceError

logger = logging.getLogger(__name__)

TABLE_SIZE: int = 101


@dataclass(frozen=True, slots=True)
class SolveResult:
    """Outcome of a coefficient search, with diagnostics."""

    percentage: float
    coefficient_percentage: float
    iterations: int
    used_table: bool

    @property
    def coefficient(self) -> float:
        return self.coefficient_percentage / 100.0


def expected_rate(c: float, *, max_terms: Optional[int] = None) -> float:
    """Return the long-run proc rate (a fraction) implied by coefficient ``c``.

    This is the reciprocal of the expected trial index of the first proc. The
    series is finite: once ``i * c >= 1`` the proc is certain, so trial
    ``ceil(1/c)`` closes it.
    """

    if not 0.0 < c <= 1.0:
        raise InvalidArgumentError(f"Coefficient must be within (0, 1]: {c!r}")

    # Subnormal c overflows 1/c; check the budget before ceil() sees inf.
    inv = 1.0 / c
    if not math.isfinite(inv):
        raise NonConvergenceError(f"Expectation series for c={c!r} needs an unbounded number of terms")
    if max_terms is not None and inv > max_terms:
        raise NonConvergenceError(
            f"Expectation series for c={c!r} needs {math.ceil(inv)} terms (budget {max_terms})"
        )

    max_fails = math.ceil(inv)

    p_proc_by_n = 0.0
    sum_n_p_proc_on_n = 0.0
    for i in range(1, max_fails + 1):
        p_proc_on_n = min(1.0, i * c) * (1.0 - p_proc_by_n)
        p_proc_by_n += p_proc_on_n
        sum_n_p_proc_on_n += i * p_proc_on_n

    return 1.0 / sum_n_p_proc_on_n


def _bisect(target: float, lower: float, upper: float, config: SolverConfig) -> tuple[float, int]:
    """Bisect ``(lower, upper]`` for the coefficient whose rate hits ``target``.

    Returns ``(coefficient_fraction, iterations)``. Stops once two successive
    rate estimates agree within ``config.tolerance``.
    """

    c_mid: Optional[float] = None
    previous_rate = 1.0

    for iteration in range(1, config.max_iterations + 1):
        candidate = (upper + lower) / 2.0
        try:
            rate = expected_rate(candidate, max_terms=config.max_series_terms)
        except NonConvergenceError as e:
            raise NonConvergenceError(
                f"Coefficient search for {target * 100.0!r}% exceeded the series budget",
                best_estimate=None if c_mid is None else c_mid * 100.0,
                iterations=iteration - 1,
            ) from e

        c_mid = candidate
        if abs(rate - previous_rate) <= config.tolerance:
            return c_mid, iteration

        if rate > target:
            upper = c_mid
        else:
            lower = c_mid
        previous_rate = rate

    raise NonConvergenceError(
        f"Coefficient search for {target * 100.0!r}% did not converge in {config.max_iterations} iterations",
        best_estimate=None if c_mid is None else c_mid * 100.0,
        iterations=config.max_iterations,
    )


@functools.cache
def coefficient_table() -> tuple[float, ...]:
    """Return percentage-scale coefficients for nominal percentages 0..100.

    Built on first use and cached for the life of the process. The tuple is
    never mutated, so it is safe to share across threads.
    """

    config = SolverConfig(use_table=False)
    table = tuple(solve_coefficient(p, config=config).coefficient_percentage for p in range(TABLE_SIZE))
    logger.info("Built PRD coefficient table (%d entries)", len(table))
    return table


def solve_coefficient(percentage: object, *, config: Optional[SolverConfig] = None) -> SolveResult:
    """Solve for the PRD coefficient of ``percentage`` and report diagnostics.

    Raises
    ------
    InvalidArgumentError
        If ``percentage`` is not a finite number in [0, 100].
    NonConvergenceError
        If the search exceeds ``config.max_iterations``, a candidate exceeds
        ``config.max_series_terms``, or ``percentage`` is so small that its
        fraction or coefficient underflows.
    """

    cfg = config or DEFAULT_SOLVER_CONFIG
    p = validate_percentage(percentage)

    if p == 0.0:
        return SolveResult(percentage=p, coefficient_percentage=0.0, iterations=0, used_table=False)
    if p == 100.0:
        return SolveResult(percentage=p, coefficient_percentage=100.0, iterations=0, used_table=False)

    target = p / 100.0
    if target == 0.0:
        # p is so close to zero that the nominal fraction underflows.
        raise NonConvergenceError(
            f"Coefficient search for {p!r}% underflows: nominal fraction rounds to 0",
            best_estimate=None,
            iterations=0,
        )
    lower, upper = 0.0, target

    if cfg.use_table:
        table = coefficient_table()
        if p.is_integer():
            return SolveResult(percentage=p, coefficient_percentage=table[int(p)], iterations=0, used_table=True)

        # C is monotonic in P, so the neighbouring integer entries bracket it.
        lower = table[math.floor(p)] / 100.0
        upper = min(upper, table[math.ceil(p)] / 100.0)

    c, iterations = _bisect(target, lower, upper, cfg)
    logger.debug(
        "Solved PRD coefficient: p=%s c=%s%% iterations=%d bracket=(%s, %s) table=%s",
        p,
        c * 100.0,
        iterations,
        lower,
        upper,
        cfg.use_table,
    )

    return SolveResult(percentage=p, coefficient_percentage=c * 100.0, iterations=iterations, used_table=cfg.use_table)


def coefficient_from_percentage(percentage: object, *, config: Optional[SolverConfig] = None) -> float:
    """Return the PRD coefficient for ``percentage`` on the percentage scale.

    Callers divide by 100 to use it as a probability.
    """

    return solve_coefficient(percentage, config=config).coefficient_percentage


def solve_parameters(percentage: object, *, config: Optional[SolverConfig] = None) -> PrdParameters:
    """Validate ``percentage`` and build its immutable :class:`PrdParameters`."""

    result = solve_coefficient(percentage, config=config)
    return PrdParameters(nominal_percentage=result.percentage, coefficient_percentage=result.coefficient_percentage)
