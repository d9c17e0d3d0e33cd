"""Habits as seen by the recommendation engine (owned by the host app)."""

from __future__ import annotations

from dataclasses import dataclass

from pool_engine.models.enums import EffortTier


@dataclass(frozen=True)
class Habit:
    """A habit to be ordered. ``resistance`` of None means mid-scale."""

    id: str
    name: str
    resistance: float | None = None
    completed_today: bool = False


@dataclass(frozen=True)
class RankedHabit:
    """A habit placed in suggested attempt order."""

    habit: Habit
    priority: int  # 1-based
    recommendation: str
    effort_tier: EffortTier
