"""Habit ordering from the current pool level.

High pool: hardest first, to spend peak capacity. Moderate pool: habits
nearest mid-scale resistance first. Low pool: easiest first, to protect
momentum. Habits already completed today always go last.
"""

from __future__ import annotations

import math
from typing import Sequence

from pool_engine.models.enums import (
    DEFAULT_RESISTANCE,
    HIGH_EFFORT_THRESHOLD,
    MID_RESISTANCE,
    MODERATE_EFFORT_THRESHOLD,
    TWO_MINUTE_THRESHOLD,
    EffortTier,
)
from pool_engine.models.habit import Habit, RankedHabit
from pool_engine.models.level import to_fraction

TWO_MINUTE_VERSION = "Use 2-minute version"
STANDARD_VERSION = "Standard version okay"
FULL_VERSION = "Full version"
DONE_TODAY = "Done today"


def effort_tier(level_fraction: float) -> EffortTier:
    if level_fraction >= HIGH_EFFORT_THRESHOLD:
        return EffortTier.HIGH
    if level_fraction >= MODERATE_EFFORT_THRESHOLD:
        return EffortTier.MODERATE
    return EffortTier.LOW


def version_recommendation(level_fraction: float) -> str:
    if level_fraction < TWO_MINUTE_THRESHOLD:
        return TWO_MINUTE_VERSION
    if level_fraction < MODERATE_EFFORT_THRESHOLD:
        return STANDARD_VERSION
    return FULL_VERSION


def resistance_of(habit: Habit) -> float:
    """Habit resistance, with missing or non-finite scores read as mid-scale."""
    if habit.resistance is None or not math.isfinite(habit.resistance):
        return DEFAULT_RESISTANCE
    return float(habit.resistance)


def _sort_key(tier: EffortTier):
    if tier == EffortTier.HIGH:
        return lambda h: -resistance_of(h)
    if tier == EffortTier.MODERATE:
        return lambda h: abs(resistance_of(h) - MID_RESISTANCE)
    return resistance_of


def get_recommended_habit_order(habits: Sequence[Habit], pool_level: int) -> list[RankedHabit]:
    """Order habits by suggested attempt sequence for *pool_level*.

    Args:
        habits: Today's habits.
        pool_level: Current pool level as an integer percentage.

    Returns:
        RankedHabits in order with 1-based priorities. Ties keep input order.
    """
    level = to_fraction(pool_level)
    tier = effort_tier(level)
    recommendation = version_recommendation(level)

    pending = sorted((h for h in habits if not h.completed_today), key=_sort_key(tier))
    completed = [h for h in habits if h.completed_today]

    ranked = [
        RankedHabit(habit=h, priority=i, recommendation=recommendation, effort_tier=tier)
        for i, h in enumerate(pending, start=1)
    ]
    ranked.extend(
        RankedHabit(habit=h, priority=i, recommendation=DONE_TODAY, effort_tier=tier)
        for i, h in enumerate(completed, start=len(pending) + 1)
    )
    return ranked
