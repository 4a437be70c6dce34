"""Stateful pseudo-random distribution event.

A miss makes the next proc more likely and a proc starts the ramp over, so
procs land in a narrow band: the longest possible drought for coefficient ``C`` is
``ceil(1/C)`` trials.
"""

from __future__ import annotations

from typing import Optional

from prd.data import PrdParameters, SolverConfig
from prd.sampler import UniformSampler, make_sampler
from prd.solver import solve_parameters


def clamp(value: float, minimum: float, maximum: float) -> float:
    return max(minimum, min(maximum, value))


class PrdEvent:
    """A repeatable event whose proc chance follows the PRD model.

    Parameters
    ----------
    percentage:
        Nominal long-run success rate, 0..100 inclusive.
    sampler:
        Uniform random source. Defaults to a fresh unseeded ``random.Random``.
    config:
        Coefficient search settings, see :class:`prd.data.SolverConfig`.

    Notes
    -----
    ``run`` does a read-modify-write of the current probability. Separate
    instances share nothing and can be used from separate threads, but calls to
    ``run`` on one instance must be synchronised by the caller.
    """

    __slots__ = ("_parameters", "_sampler", "_current_probability")

    def __init__(
        self,
        percentage: float,
        *,
        sampler: Optional[UniformSampler] = None,
        config: Optional[SolverConfig] = None,
    ) -> None:
        self._parameters: PrdParameters = solve_parameters(percentage, config=config)
        self._sampler: UniformSampler = sampler if sampler is not None else make_sampler()
        self._current_probability: float = self._parameters.coefficient_percentage

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(percentage={self.percentage!r}, "
            f"coefficient={self.coefficient!r}, current_probability={self._current_probability!r})"
        )

    @property
    def parameters(self) -> PrdParameters:
        return self._parameters

    @property
    def percentage(self) -> float:
        """Nominal percentage the event was created with."""
        return self._parameters.nominal_percentage

    @property
    def coefficient(self) -> float:
        """PRD coefficient as a probability fraction in [0, 1]."""
        return self._parameters.coefficient

    @property
    def coefficient_percentage(self) -> float:
        return self._parameters.coefficient_percentage

    @property
    def current_probability(self) -> float:
        """Chance (as a percentage) that the next ``run`` procs."""
        return self._current_probability

    def run(self) -> bool:
        """Roll the event, update the current probability and return the result.

        A proc resets the chance to the coefficient; a miss adds the
        coefficient, capped at 100.
        """

        success = self._roll()
        floor = self._parameters.coefficient_percentage
        if success:
            self._current_probability = clamp(floor, 0.0, 100.0)
        else:
            self._current_probability = clamp(self._current_probability + floor, 0.0, 100.0)
        return success

    def reset(self) -> None:
        """Forget any accumulated misses."""
        self._current_probability = self._parameters.coefficient_percentage

    def _roll(self) -> bool:
        # A zero chance never procs, even on an exact 0.0 draw.
        if self._current_probability <= 0.0:
            return False
        return self._sampler.uniform(0.0, 100.0) <= self._current_probability
