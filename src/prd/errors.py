"""Exception types raised by :mod:`prd`."""

from __future__ import annotations

from typing import Optional


class PrdError(Exception):
    """Base class for all errors raised by this package."""


class InvalidArgumentError(PrdError, ValueError):
    """A percentage (or coefficient) is non-numeric, non-finite or out of range."""


class NonConvergenceError(PrdError, ArithmeticError):
    """The coefficient search exhausted its iteration or series budget.

    ``best_estimate`` is the last coefficient candidate on the percentage scale
    (``None`` if no candidate was evaluated) and ``iterations`` is the number of
    bisection steps taken before giving up.
    """

    def __init__(self, message: str, *, best_estimate: Optional[float] = None, iterations: int = 0) -> None:
        super().__init__(message)
        self.best_estimate = best_estimate
        self.iterations = iterations
