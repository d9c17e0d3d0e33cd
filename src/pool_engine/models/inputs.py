"""Caller-supplied inputs for the once-per-day and aggregate calculations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from pool_engine.models.enums import (
    DEFAULT_SLEEP_HOURS,
    DysregulationTier,
    ScreenTimeTrend,
    SleepQuality,
)


@dataclass(frozen=True)
class SleepInputs:
    """Everything the morning calculation needs about last night and yesterday."""

    sleep_hours: float = DEFAULT_SLEEP_HOURS
    sleep_quality: SleepQuality = SleepQuality.NORMAL_REM
    yesterday_complete: bool = False
    streak_days: int = 0
    dysregulation_tier: DysregulationTier = DysregulationTier.HEALTHY
    capacity_expansion: float = 0.0  # fraction above nominal, e.g. 0.16


@dataclass(frozen=True)
class UsageSignals:
    """Aggregate behaviour signals used to assess the dysregulation tier.

    ``primary_app_category`` accepts a catalog key string ("social",
    "gaming_gacha", ...) or an ActivityCategory / DrainActivity member.
    """

    avg_daily_screen_time_min: float = 0.0
    primary_app_category: str | Enum = "social"
    reported_anhedonia: bool = False
    difficulty_with_boredom: bool = False
    compulsive_use: bool = False
    screen_time_trend: ScreenTimeTrend = ScreenTimeTrend.STABLE


@dataclass(frozen=True)
class ExerciseSession:
    """A single logged exercise session."""

    timestamp: datetime
    kind: str = "exercise"
    minutes: float | None = None
