"""
Popularity sources for the scorer's popularity factor.

There is no real popularity signal yet. ``RandomPopularity`` is the stand-in:
a uniform draw from ``[0.3, 0.8]`` per scored opportunity, so popularity nudges
rankings without dominating them. ``FixedPopularity`` pins the value, for tests
and reproducible CLI runs. A real signal only has to implement
``PopularitySource``; the scoring formula does not change.

Every engine owns its own source instance. ``RandomPopularity`` keeps a
private ``random.Random`` rather than drawing from the module-level RNG.
"""

from __future__ import annotations

import random
from typing import Optional, Protocol

from ladder_recs.models.opportunity import Opportunity

POPULARITY_LOW = 0.3
POPULARITY_HIGH = 0.8


class PopularitySource(Protocol):
    """Anything that can produce a popularity factor in ``[0, 1]``."""

    def popularity_for(self, opportunity: Opportunity) -> float: ...


class RandomPopularity:
    """Uniform random popularity in ``[low, high]``.

    Args:
        seed: Optional seed for this instance's RNG.
        low: Lower bound (default 0.3).
        high: Upper bound (default 0.8).
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        low: float = POPULARITY_LOW,
        high: float = POPULARITY_HIGH,
    ) -> None:
        if not 0.0 <= low <= high <= 1.0:
            raise ValueError(f"Popularity bounds must satisfy 0 <= low <= high <= 1, got {low}, {high}.")
        self._rng = random.Random(seed)
        self.low = low
        self.high = high

    def popularity_for(self, opportunity: Opportunity) -> float:
        return self._rng.uniform(self.low, self.high)


class FixedPopularity:
    """Same popularity for every opportunity."""

    def __init__(self, value: float) -> None:
        if not 0.0 <= value <= 1.0:
            raise ValueError(f"Fixed popularity must be in [0.0, 1.0], got {value}.")
        self.value = value

    def popularity_for(self, opportunity: Opportunity) -> float:
        return self.value
