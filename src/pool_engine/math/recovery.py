"""Recovery model: logged recharging activities.

Recovery is immediate and permanent for the rest of the day; unlike
depletion there is no secondary decay.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Mapping

from pool_engine.catalog.recovery import legacy_key, recovery_from_key
from pool_engine.config import DEFAULT_CONFIG, PoolConfig
from pool_engine.models.enums import DysregulationTier, RecoveryActivity, Resolution
from pool_engine.models.pool_state import RechargeEvent

logger = logging.getLogger(__name__)

UNKNOWN_ACTIVITY_ERROR = "Unknown activity"


@dataclass(frozen=True)
class RechargeResolution:
    """A resolved boost before the tier's recovery multiplier is applied."""

    boost: float
    label: str
    resolution: Resolution
    kind: RecoveryActivity | None = None
    mechanism: str = ""
    requirements: Mapping[str, str] = field(default_factory=dict)
    error: str | None = None


def resolve_recharge(
    activity: str | RecoveryActivity | None,
    intensity: str | None = None,
    config: PoolConfig = DEFAULT_CONFIG,
) -> RechargeResolution:
    """Resolve a recharge by type key first, then by legacy (category, intensity).

    Never raises: an unknown activity yields a zero-boost resolution with
    ``resolution=UNRESOLVED`` and an error marker.
    """
    kind = recovery_from_key(activity)
    if kind is not None and kind in config.recovery_activities:
        entry = config.recovery_activities[kind]
        return RechargeResolution(
            boost=entry.boost,
            label=entry.label,
            resolution=Resolution.EXACT,
            kind=kind,
            mechanism=entry.mechanism,
            requirements=dict(entry.requirements),
        )

    pair = legacy_key(activity if isinstance(activity, str) else None, intensity)
    if pair is not None and pair in config.legacy_recharge:
        legacy = config.legacy_recharge[pair]
        return RechargeResolution(
            boost=legacy.boost,
            label=legacy.label,
            resolution=Resolution.LEGACY,
        )

    logger.warning("Unresolved recharge activity %r (intensity=%r)", activity, intensity)
    return RechargeResolution(
        boost=0.0,
        label="",
        resolution=Resolution.UNRESOLVED,
        error=UNKNOWN_ACTIVITY_ERROR,
    )


def _override_fraction(boost_override: float) -> float | None:
    if not math.isfinite(boost_override) or boost_override < 0:
        return None
    # Older clients send whole percentages (10 meaning 10%)
    return boost_override / 100.0 if boost_override > 1 else float(boost_override)


def log_recharge_activity(
    activity: str | RecoveryActivity,
    intensity: str | None = None,
    tier: DysregulationTier = DysregulationTier.HEALTHY,
    now: datetime | None = None,
    boost_override: float | None = None,
    config: PoolConfig | None = None,
) -> RechargeEvent:
    """Resolve a recharging activity and scale it by the tier's recovery multiplier.

    Args:
        activity: Detailed type key (e.g. "cold_shower_2min") or a legacy
            category ("exercise") paired with *intensity*.
        intensity: Legacy intensity ("light", "moderate", ...).
        tier: Dysregulation tier whose recovery multiplier is baked in.
        now: Logging time (None → datetime.now()).
        boost_override: Explicit boost replacing the catalog value; values
            above 1 are read as percentages.
        config: Optional tuning; defaults to DEFAULT_CONFIG.

    Returns:
        A RechargeEvent. Check ``is_resolved`` / ``error`` for unknown keys.
    """
    config = config or DEFAULT_CONFIG
    if now is None:
        now = datetime.now()

    resolved = resolve_recharge(activity, intensity, config)
    boost = resolved.boost
    resolution = resolved.resolution
    error = resolved.error
    label = resolved.label

    if boost_override is not None:
        override = _override_fraction(boost_override)
        if override is not None:
            boost = override
            resolution = Resolution.OVERRIDE
            error = None
            label = label or str(getattr(activity, "value", activity))

    modifier = config.tier(tier).recovery
    raw = activity.value if isinstance(activity, RecoveryActivity) else str(activity or "")
    return RechargeEvent(
        activity=raw,
        intensity=intensity,
        kind=resolved.kind,
        label=label,
        mechanism=resolved.mechanism,
        requirements=resolved.requirements,
        base_boost=boost,
        recovery_modifier=modifier,
        magnitude=boost * modifier,
        resolution=resolution,
        logged_at=now,
        error=error,
    )
