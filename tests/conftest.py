"""Shared test fixtures: a reference day, day states and habits."""

from __future__ import annotations

from datetime import date, datetime
from typing import Callable

import pytest

from pool_engine.config import CONFIG_PATH_ENV
from pool_engine.engine import PoolEngine
from pool_engine.models.enums import DysregulationTier, SleepQuality
from pool_engine.models.habit import Habit
from pool_engine.models.inputs import SleepInputs
from pool_engine.models.pool_state import PoolMetadata, PoolState

DAY = date(2026, 3, 2)  # a Monday


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's POOL_ENGINE_CONFIG out of the tests."""
    monkeypatch.delenv(CONFIG_PATH_ENV, raising=False)


@pytest.fixture
def engine() -> PoolEngine:
    return PoolEngine()


@pytest.fixture
def rested_inputs() -> SleepInputs:
    """8 h normal sleep, yesterday complete, 10-day streak: a full morning pool."""
    return SleepInputs(
        sleep_hours=8.0,
        sleep_quality=SleepQuality.NORMAL_REM,
        yesterday_complete=True,
        streak_days=10,
    )


@pytest.fixture
def rested_day(engine: PoolEngine, rested_inputs: SleepInputs) -> PoolState:
    """A fresh day at 100% with no wake time (no micro-recovery)."""
    return engine.start_day(rested_inputs, day=DAY)


@pytest.fixture
def make_state() -> Callable[..., PoolState]:
    """Factory fixture for bare PoolStates."""

    def _make(
        morning: int = 80,
        current: int | None = None,
        day: date = DAY,
        tier: DysregulationTier = DysregulationTier.HEALTHY,
        capacity_expansion: float = 0.0,
        woke_at: datetime | None = None,
    ) -> PoolState:
        return PoolState(
            date=day,
            morning_level=morning,
            current_level=morning if current is None else current,
            metadata=PoolMetadata(
                sleep_hours=7.0,
                dysregulation_tier=tier,
                capacity_expansion=capacity_expansion,
            ),
            woke_at=woke_at,
        )

    return _make


@pytest.fixture
def habits() -> list[Habit]:
    """Four pending habits of mixed resistance plus one already done."""
    return [
        Habit("a", "Floss", resistance=2),
        Habit("b", "Deep work block", resistance=8),
        Habit("c", "Journal", resistance=5),
        Habit("d", "Stretch"),
        Habit("e", "Run", resistance=9, completed_today=True),
    ]
