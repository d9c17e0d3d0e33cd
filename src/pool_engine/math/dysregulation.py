"""Dysregulation assessment: classify chronic tolerance from usage signals.

The tier's multipliers amplify depletion, dampen recovery and dampen the
morning capacity ceiling.

Reference:
    Lembke (2021). Dopamine Nation. Dutton.
"""

from __future__ import annotations

from enum import Enum

from pool_engine.catalog.baselines import TierModifiers
from pool_engine.config import DEFAULT_CONFIG, PoolConfig
from pool_engine.models.enums import (
    ANHEDONIA_POINTS,
    BOREDOM_INTOLERANCE_POINTS,
    COMPULSIVE_USE_POINTS,
    DYSREGULATION_CUT_POINTS,
    FLAGGED_APP_CATEGORIES,
    FLAGGED_CATEGORY_POINTS,
    SCREEN_TIME_SCORE_BANDS,
    TREND_POINTS,
    DysregulationTier,
    ScreenTimeTrend,
)
from pool_engine.models.inputs import UsageSignals


def _category_key(category: str | Enum | None) -> str:
    if isinstance(category, Enum):
        category = category.value
    return str(category or "").strip().lower()


def screen_time_points(avg_daily_minutes: float) -> int:
    """0-3 points for daily screen time above 120 / 240 / 360 minutes."""
    for threshold, points in SCREEN_TIME_SCORE_BANDS:
        if avg_daily_minutes > threshold:
            return points
    return 0


def dysregulation_score(signals: UsageSignals) -> int:
    """Integer tolerance score from weighted behaviour thresholds."""
    score = screen_time_points(signals.avg_daily_screen_time_min)

    if _category_key(signals.primary_app_category) in FLAGGED_APP_CATEGORIES:
        score += FLAGGED_CATEGORY_POINTS
    if signals.reported_anhedonia:
        score += ANHEDONIA_POINTS
    if signals.difficulty_with_boredom:
        score += BOREDOM_INTOLERANCE_POINTS
    if signals.compulsive_use:
        score += COMPULSIVE_USE_POINTS

    if signals.screen_time_trend == ScreenTimeTrend.INCREASING:
        score += TREND_POINTS
    elif signals.screen_time_trend == ScreenTimeTrend.DECREASING:
        score -= TREND_POINTS

    return score


def tier_for_score(score: int) -> DysregulationTier:
    for minimum, tier in DYSREGULATION_CUT_POINTS:
        if score >= minimum:
            return tier
    return DysregulationTier.HEALTHY


def assess_dysregulation_tier(signals: UsageSignals) -> DysregulationTier:
    """Classify the user's tolerance tier (healthy < mild < moderate < severe)."""
    return tier_for_score(dysregulation_score(signals))


def tier_modifiers(
    tier: DysregulationTier,
    config: PoolConfig = DEFAULT_CONFIG,
) -> TierModifiers:
    """Depletion, recovery and capacity multipliers for *tier*."""
    return config.tier(tier)
