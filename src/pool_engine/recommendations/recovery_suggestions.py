"""Recovery suggestions for the current level and time of day."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from pool_engine.models.enums import MAX_RECOVERY_SUGGESTIONS, RecoveryActivity
from pool_engine.models.level import to_fraction
from pool_engine.models.pool_state import RechargeEvent


@dataclass(frozen=True)
class RecoverySuggestion:
    activity: RecoveryActivity
    priority: int  # 1 = most urgent
    reason: str


def _recent_keys(recent: Sequence[RechargeEvent | RecoveryActivity | str]) -> set[str]:
    keys = set()
    for item in recent:
        if isinstance(item, RechargeEvent):
            keys.add(item.kind.value if item.kind is not None else item.activity.lower())
        elif isinstance(item, RecoveryActivity):
            keys.add(item.value)
        else:
            keys.add(str(item).lower())
    return keys


def get_recovery_suggestions(
    pool_level: int,
    hour: int,
    recent_activities: Sequence[RechargeEvent | RecoveryActivity | str] = (),
) -> list[RecoverySuggestion]:
    """Suggest up to three recharging activities.

    Args:
        pool_level: Current level as an integer percentage.
        hour: Local hour of day, 0-23.
        recent_activities: Recharges already done today; used to avoid repeats.
    """
    level = to_fraction(pool_level)
    recent = _recent_keys(recent_activities)
    suggestions: list[RecoverySuggestion] = []

    if 6 <= hour < 10 and RecoveryActivity.SUNLIGHT_SUNNY_10MIN.value not in recent:
        suggestions.append(RecoverySuggestion(
            RecoveryActivity.SUNLIGHT_SUNNY_10MIN, 1,
            "Morning sunlight sets your circadian rhythm for the day",
        ))

    if level < 0.30:
        if not any("cold" in key for key in recent):
            suggestions.append(RecoverySuggestion(
                RecoveryActivity.COLD_SHOWER_2MIN, 1,
                "Cold exposure provides the fastest recovery (+10-12%)",
            ))
        suggestions.append(RecoverySuggestion(
            RecoveryActivity.BOREDOM_15MIN, 2,
            "Deliberate boredom recalibrates sensitivity",
        ))

    if 0.30 <= level < 0.60:
        suggestions.append(RecoverySuggestion(
            RecoveryActivity.EXERCISE_WALK_30MIN, 2,
            "Light movement restores without depleting",
        ))
        suggestions.append(RecoverySuggestion(
            RecoveryActivity.MEDITATION_10MIN, 3,
            "Meditation builds a sustained baseline",
        ))

    if 14 <= hour < 16:
        suggestions.append(RecoverySuggestion(
            RecoveryActivity.NATURE_WALK_15MIN, 2,
            "Counter the afternoon trough with attention restoration",
        ))

    return suggestions[:MAX_RECOVERY_SUGGESTIONS]
