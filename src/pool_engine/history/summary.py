"""End-of-day summary over a run of daily PoolStates.

The baseline is an exponentially weighted moving average of end-of-day
levels, the same smoothing used for acute training load.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Sequence

import numpy as np
import pandas as pd

from pool_engine.models.pool_state import DrainEvent, PoolState, RechargeEvent

BASELINE_SPAN = 7
HEAVY_DRAIN_PERCENT = 50
STRONG_RECOVERY_PERCENT = 30
TREND_PERCENT = 10
TOP_DRAIN_COUNT = 3


@dataclass(frozen=True)
class Insight:
    kind: str  # "warning" or "positive"
    message: str


@dataclass(frozen=True)
class DailySummary:
    date: date
    morning_level: int
    end_level: int
    net_change: int
    total_drain: int
    top_drains: tuple[DrainEvent, ...]
    total_recovery: int
    recovery_activities: tuple[RechargeEvent, ...]
    vs_yesterday: int | None
    vs_week_ago: int | None
    baseline_ewma: float
    insights: tuple[Insight, ...] = field(default_factory=tuple)


def baseline_ewma(levels: Sequence[float], span: int = BASELINE_SPAN) -> float:
    """Most recent EWMA of daily end levels (oldest first)."""
    if not levels:
        return 0.0
    series = pd.Series(levels, dtype=np.float64)
    return float(series.ewm(span=span, adjust=False).mean().iloc[-1])


def _insights(total_drain: int, total_recovery: int, vs_week_ago: int | None) -> tuple[Insight, ...]:
    insights = []
    if total_drain > HEAVY_DRAIN_PERCENT:
        insights.append(Insight(
            "warning", "Heavy depletion today. Consider a recovery day tomorrow."
        ))
    if total_recovery > STRONG_RECOVERY_PERCENT:
        insights.append(Insight(
            "positive", "Strong recovery practices. Your sensitivity is improving."
        ))
    if vs_week_ago is not None and vs_week_ago > TREND_PERCENT:
        insights.append(Insight(
            "positive", "Your baseline is trending up compared to last week."
        ))
    elif vs_week_ago is not None and vs_week_ago < -TREND_PERCENT:
        insights.append(Insight(
            "warning", "Your baseline has dropped. Consider a 1-2 week digital detox."
        ))
    return tuple(insights)


def generate_daily_summary(history: Sequence[PoolState]) -> DailySummary | None:
    """Summarize the last day in *history* against the days before it.

    Args:
        history: Daily states, oldest first. The last entry is "today".

    Returns:
        A DailySummary, or None for an empty history.
    """
    if not history:
        return None

    today = history[-1]
    yesterday = history[-2] if len(history) > 1 else None
    week_ago = history[-8] if len(history) > 7 else None

    drains = sorted(today.drain_activities, key=lambda e: e.magnitude, reverse=True)
    total_drain = sum(e.impact_percent for e in today.drain_activities)
    total_recovery = sum(e.boost_percent for e in today.recharge_activities)
    vs_yesterday = today.current_level - yesterday.current_level if yesterday else None
    vs_week_ago = today.current_level - week_ago.current_level if week_ago else None

    return DailySummary(
        date=today.date,
        morning_level=today.morning_level,
        end_level=today.current_level,
        net_change=today.current_level - today.morning_level,
        total_drain=total_drain,
        top_drains=tuple(drains[:TOP_DRAIN_COUNT]),
        total_recovery=total_recovery,
        recovery_activities=today.recharge_activities,
        vs_yesterday=vs_yesterday,
        vs_week_ago=vs_week_ago,
        baseline_ewma=baseline_ewma([s.current_level for s in history]),
        insights=_insights(total_drain, total_recovery, vs_week_ago),
    )
