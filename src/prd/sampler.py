"""Uniform random source used by :class:`prd.event.PrdEvent`.

Events never reach for the module-level ``random`` functions. Each one is given
(or creates) its own sampler, so tests can inject a seeded or scripted source.
"""

from __future__ import annotations

import random
from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class UniformSampler(Protocol):
    """Anything that can draw a uniform real in ``[a, b]``.

    :class:`random.Random` satisfies this protocol as-is.
    """

    def uniform(self, a: float, b: float) -> float: ...


def make_sampler(seed: Optional[int] = None) -> random.Random:
    """Return an independent ``random.Random``, seeded when ``seed`` is given."""

    return random.Random(seed)
