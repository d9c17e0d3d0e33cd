"""Sleep fill: the once-per-day morning pool calculation.

Morning level = sleep fill × quality, plus completion and streak bonuses,
scaled by the dysregulation tier's capacity multiplier and clamped to
[20%, 100% + capacity expansion].

References:
    Volkow et al. (2012). Evidence that sleep deprivation downregulates
        dopamine D2R in ventral striatum. J Neurosci 32(19):6711-6717.
    Van Dongen et al. (2003). The cumulative cost of additional wakefulness.
        Sleep 26(2):117-126.
"""

from __future__ import annotations

import logging
import math

from pool_engine.config import DEFAULT_CONFIG, PoolConfig
from pool_engine.math.capacity import pool_ceiling
from pool_engine.models.enums import (
    DEFAULT_SLEEP_HOURS,
    SLEEP_BUCKET_MAX_HOURS,
    SLEEP_BUCKET_MIN_HOURS,
    SleepQuality,
)
from pool_engine.models.inputs import SleepInputs
from pool_engine.models.level import clamp, to_percent

logger = logging.getLogger(__name__)


def sleep_bucket(hours: float) -> int:
    """Round sleep hours half-up to the nearest whole hour within [3, 9].

    Non-finite input is treated as the default 7 hours.
    """
    if not math.isfinite(hours):
        hours = DEFAULT_SLEEP_HOURS
    bucket = int(math.floor(hours + 0.5))
    return max(SLEEP_BUCKET_MIN_HOURS, min(SLEEP_BUCKET_MAX_HOURS, bucket))


def sleep_fill_fraction(
    hours: float,
    quality: SleepQuality = SleepQuality.NORMAL_REM,
    config: PoolConfig = DEFAULT_CONFIG,
) -> float:
    """Base fill from sleep duration multiplied by the quality multiplier.

    *quality* may be a SleepQuality or its stored key ("lowREM", ...). An
    unknown key is logged and applies no adjustment.
    """
    base = config.sleep_fill_rates.get(sleep_bucket(hours), 0.0)
    try:
        quality = SleepQuality(quality)
    except ValueError:
        logger.warning("Unknown sleep quality %r; no quality adjustment applied", quality)
        return base
    return base * config.sleep_quality_multipliers.get(quality, 1.0)


def streak_bonus(streak_days: int, config: PoolConfig = DEFAULT_CONFIG) -> float:
    """Additive momentum bonus: one step per streak threshold reached."""
    reached = sum(1 for threshold in config.streak_bonus_thresholds if streak_days >= threshold)
    return reached * config.streak_bonus_per_threshold


def morning_pool_fraction(inputs: SleepInputs, config: PoolConfig = DEFAULT_CONFIG) -> float:
    """Morning level as a clamped fraction."""
    fill = sleep_fill_fraction(inputs.sleep_hours, inputs.sleep_quality, config)
    if inputs.yesterday_complete:
        fill += config.yesterday_complete_bonus
    fill += streak_bonus(inputs.streak_days, config)
    fill *= config.tier(inputs.dysregulation_tier).capacity

    return clamp(fill, config.morning_floor, pool_ceiling(inputs.capacity_expansion, config))


def calculate_morning_pool(inputs: SleepInputs, config: PoolConfig | None = None) -> int:
    """Calculate the morning pool level as an integer percentage.

    Invoked once per calendar day; every other calculation is on demand.

    Args:
        inputs: Last night's sleep plus yesterday's completion and streak.
        config: Optional tuning; defaults to DEFAULT_CONFIG.

    Returns:
        Percentage in [20, 100 × (1 + capacity expansion)].
    """
    return to_percent(morning_pool_fraction(inputs, config or DEFAULT_CONFIG))
