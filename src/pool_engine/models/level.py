"""Pool level value type for the 0-100 percentage and 0.0-1.0 fraction boundary.

Every public function accepts and returns integer percentages; every internal
calculation works on fractions. The helpers here are the only place the two
representations meet.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


def to_percent(fraction: float) -> int:
    """Convert a fraction to an integer percentage, rounding half up.

    Non-finite input, or input too large to scale, converts to 0 so callers
    never see a NaN level.
    """
    percent = fraction * 100.0
    if not math.isfinite(percent):
        return 0
    return int(math.floor(percent + 0.5))


def to_fraction(percent: float) -> float:
    """Convert a percentage to a fraction. Non-finite input converts to 0.0."""
    if not math.isfinite(percent):
        return 0.0
    return percent / 100.0


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp *value* into [lower, upper]; non-finite values collapse to *lower*."""
    if not math.isfinite(value):
        return lower
    return max(lower, min(upper, value))


@dataclass(frozen=True, order=True)
class PoolLevel:
    """A pool level held as a fraction of nominal capacity."""

    fraction: float

    @classmethod
    def from_percent(cls, percent: float) -> PoolLevel:
        return cls(to_fraction(percent))

    @property
    def percent(self) -> int:
        return to_percent(self.fraction)

    def clamped(self, lower: float, upper: float) -> PoolLevel:
        return PoolLevel(clamp(self.fraction, lower, upper))
