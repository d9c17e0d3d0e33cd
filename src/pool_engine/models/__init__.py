"""Data models for the pool engine."""

from pool_engine.models.clock import local_naive, parse_timestamp
from pool_engine.models.enums import (
    ActivityCategory,
    DrainActivity,
    DysregulationTier,
    EffortTier,
    PoolStatus,
    RecoveryActivity,
    Resolution,
    ScreenTimeTrend,
    SleepQuality,
)
from pool_engine.models.habit import Habit, RankedHabit
from pool_engine.models.inputs import ExerciseSession, SleepInputs, UsageSignals
from pool_engine.models.level import PoolLevel, to_fraction, to_percent
from pool_engine.models.pool_state import (
    Crash,
    DrainEvent,
    PoolMetadata,
    PoolState,
    RechargeEvent,
    combine_crashes,
)
from pool_engine.models.trace import PoolTrace

__all__ = [
    "ActivityCategory",
    "Crash",
    "DrainActivity",
    "DrainEvent",
    "DysregulationTier",
    "EffortTier",
    "ExerciseSession",
    "Habit",
    "PoolLevel",
    "PoolMetadata",
    "PoolState",
    "PoolStatus",
    "PoolTrace",
    "RankedHabit",
    "RechargeEvent",
    "RecoveryActivity",
    "Resolution",
    "ScreenTimeTrend",
    "SleepInputs",
    "SleepQuality",
    "UsageSignals",
    "combine_crashes",
    "local_naive",
    "parse_timestamp",
    "to_fraction",
    "to_percent",
]
