"""Capacity expansion: raising the pool ceiling through exercise consistency.

The trailing window is split into 7-day periods ending at *now*. Walking
back from the most recent period, each period with at least the minimum
number of sessions extends the streak; the first shortfall ends it. The
streak length maps to a stepped expansion fraction above 100%.

Inactivity has no graduated decay: a broken streak simply stops accruing.

Reference:
    Robertson et al. (2016). Effect of exercise training on striatal
        dopamine D2/D3 receptors in methamphetamine users during behavioral
        treatment. Neuropsychopharmacology 41(6):1629-1636.
"""

from __future__ import annotations

from datetime import datetime
from typing import Sequence

import numpy as np

from pool_engine.config import DEFAULT_CONFIG, PoolConfig
from pool_engine.models.clock import local_naive
from pool_engine.models.enums import (
    CAPACITY_LOOKBACK_WEEKS,
    DAYS_PER_WEEK,
    MIN_SESSIONS_PER_WEEK,
    NOMINAL_CAPACITY,
)
from pool_engine.models.inputs import ExerciseSession
from pool_engine.models.level import clamp

_SECONDS_PER_DAY = 86400.0


def weekly_session_counts(
    history: Sequence[ExerciseSession],
    now: datetime,
    weeks: int = CAPACITY_LOOKBACK_WEEKS,
) -> np.ndarray:
    """Count sessions per trailing 7-day period.

    Period ``i`` covers ``[now - 7(i+1) days, now - 7i days)``, so index 0 is
    the most recent week. Sessions at or after *now* are ignored.

    Returns:
        Integer array of length *weeks*.
    """
    if weeks <= 0:
        return np.zeros(0, dtype=np.int64)
    if not history:
        return np.zeros(weeks, dtype=np.int64)

    now = local_naive(now)
    ages_days = np.array(
        [
            (now - local_naive(s.timestamp)).total_seconds() / _SECONDS_PER_DAY
            for s in history
        ],
        dtype=np.float64,
    )
    in_window = (ages_days > 0) & (ages_days <= weeks * DAYS_PER_WEEK)
    period_index = np.ceil(ages_days[in_window] / DAYS_PER_WEEK).astype(np.int64) - 1
    return np.bincount(period_index, minlength=weeks)[:weeks]


def consecutive_qualifying_weeks(
    counts: np.ndarray | Sequence[int],
    min_sessions: int = MIN_SESSIONS_PER_WEEK,
) -> int:
    """Length of the unbroken run of qualifying periods, most recent first."""
    qualifying = np.asarray(counts) >= min_sessions
    if qualifying.all():
        return int(qualifying.size)
    # argmin finds the first False
    return int(np.argmin(qualifying))


def expansion_for_weeks(weeks: int, config: PoolConfig = DEFAULT_CONFIG) -> float:
    """Stepped expansion fraction for a streak of *weeks* qualifying weeks.

    Streaks longer than the highest step reach the absolute ceiling.
    """
    if not config.capacity_steps:
        return 0.0
    top_threshold = max(threshold for threshold, _ in config.capacity_steps)
    if weeks > top_threshold:
        return config.capacity_max_ceiling
    for threshold, fraction in sorted(config.capacity_steps, reverse=True):
        if weeks >= threshold:
            return min(fraction, config.capacity_max_ceiling)
    return 0.0


def calculate_capacity_expansion(
    history: Sequence[ExerciseSession],
    now: datetime | None = None,
    config: PoolConfig | None = None,
) -> float:
    """Capacity expansion fraction earned by recent exercise consistency.

    Args:
        history: Exercise sessions, any order.
        now: End of the trailing window (None → datetime.now()).
        config: Optional tuning; defaults to DEFAULT_CONFIG.

    Returns:
        Fraction above nominal capacity, 0.0 up to the absolute ceiling.
    """
    config = config or DEFAULT_CONFIG
    if not history:
        return 0.0
    if now is None:
        now = datetime.now()

    counts = weekly_session_counts(history, now, config.capacity_lookback_weeks)
    weeks = consecutive_qualifying_weeks(counts, config.min_sessions_per_week)
    return expansion_for_weeks(weeks, config)


def pool_ceiling(capacity_expansion: float, config: PoolConfig = DEFAULT_CONFIG) -> float:
    """Maximum attainable pool fraction: 1.0 plus the (bounded) expansion."""
    return NOMINAL_CAPACITY + clamp(capacity_expansion, 0.0, config.capacity_max_ceiling)
