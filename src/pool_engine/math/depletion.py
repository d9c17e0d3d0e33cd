"""Depletion model: logged draining activities and their delayed crash.

Each draining session removes ``rate × minutes/30`` of the pool, amplified by
``1 + 0.3 × prior sessions of the same activity today`` and by the
dysregulation tier. A crash of 35% of that magnitude is scheduled from the
moment of logging and decays linearly to zero over 60 minutes.

Reference:
    Lembke (2021). Dopamine Nation. Dutton. (variable-ratio reinforcement,
        tolerance within a session cluster)
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, timedelta
from typing import Mapping

from pool_engine.catalog.activities import Classification, classify_activity
from pool_engine.config import DEFAULT_CONFIG, PoolConfig
from pool_engine.models.enums import (
    DEPLETION_REFERENCE_MINUTES,
    DrainActivity,
    DysregulationTier,
)
from pool_engine.models.pool_state import Crash, DrainEvent

logger = logging.getLogger(__name__)


def depletion_multiplier(prior_sessions_today: int, config: PoolConfig = DEFAULT_CONFIG) -> float:
    """Repetition amplification: ``1 + 0.3 × n``. Negative counts are treated as 0."""
    return 1.0 + config.repetition_amplification * max(0, prior_sessions_today)


def calculate_crash(
    depletion: float,
    now: datetime,
    config: PoolConfig = DEFAULT_CONFIG,
) -> Crash:
    """Schedule the post-activity crash for a depletion of *depletion*."""
    window = config.crash_recovery_minutes
    return Crash(
        amount=depletion * config.crash_fraction,
        recovery_minutes=window,
        started_at=now,
        expires_at=now + timedelta(minutes=window),
    )


def crash_remaining(crash: Crash | None, now: datetime) -> float:
    """Still-applicable crash at *now*: full at logging, linear to zero, 0 once expired."""
    if crash is None:
        return 0.0
    return crash.remaining(now)


def _safe_minutes(minutes: float) -> float:
    if not math.isfinite(minutes) or minutes < 0:
        return 0.0
    return float(minutes)


def log_drain_activity(
    activity_name: str,
    minutes: float,
    prior_sessions_today: int = 0,
    tier: DysregulationTier = DysregulationTier.HEALTHY,
    now: datetime | None = None,
    custom_mappings: Mapping[str, str | DrainActivity] | None = None,
    config: PoolConfig | None = None,
) -> DrainEvent:
    """Resolve and price a draining activity.

    Args:
        activity_name: Free-text app or activity name.
        minutes: Session length. Negative or non-finite values count as 0.
        prior_sessions_today: Times this same activity was already logged today.
        tier: Dysregulation tier whose depletion multiplier is baked in.
        now: Logging time (None → datetime.now()).
        custom_mappings: Optional user name → catalog key overrides.
        config: Optional tuning; defaults to DEFAULT_CONFIG.

    Returns:
        A DrainEvent carrying its magnitude and scheduled crash.
    """
    config = config or DEFAULT_CONFIG
    if now is None:
        now = datetime.now()

    classification: Classification = classify_activity(
        activity_name, custom_mappings, config.depletion_patterns
    )
    rate_info = config.depletion_rate(classification.activity)
    safe_minutes = _safe_minutes(minutes)

    base_impact = rate_info.rate * (safe_minutes / DEPLETION_REFERENCE_MINUTES)
    multiplier = depletion_multiplier(prior_sessions_today, config)
    modifier = config.tier(tier).depletion
    magnitude = base_impact * multiplier * modifier

    logger.debug(
        "Drain %r → %s (%s): %.3f × %.2f × %.2f = %.3f",
        activity_name,
        classification.activity.value,
        classification.resolution.name,
        base_impact,
        multiplier,
        modifier,
        magnitude,
    )

    return DrainEvent(
        app=activity_name,
        minutes=safe_minutes,
        activity=classification.activity,
        category=rate_info.category,
        mechanism=rate_info.mechanism,
        resolution=classification.resolution,
        base_rate=rate_info.rate,
        base_impact=base_impact,
        session_multiplier=multiplier,
        depletion_modifier=modifier,
        magnitude=magnitude,
        crash=calculate_crash(magnitude, now, config),
        logged_at=now,
    )


def drains_from_screen_time(
    screen_time_by_app: Mapping[str, float],
    tier: DysregulationTier = DysregulationTier.HEALTHY,
    now: datetime | None = None,
    custom_mappings: Mapping[str, str | DrainActivity] | None = None,
    config: PoolConfig | None = None,
) -> list[DrainEvent]:
    """Price a batch of screen-time totals (app name → minutes).

    Each app is logged once as a first session. Zero-impact apps are dropped
    and the result is ordered most-draining first.
    """
    if now is None:
        now = datetime.now()
    events = [
        log_drain_activity(app, mins, 0, tier, now, custom_mappings, config)
        for app, mins in screen_time_by_app.items()
    ]
    draining = [e for e in events if e.magnitude > 0.0]
    return sorted(draining, key=lambda e: e.magnitude, reverse=True)
