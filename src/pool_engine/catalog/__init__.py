"""Static catalogs: activity rates, recovery boosts and baseline tables."""

from pool_engine.catalog.activities import (
    DEPLETION_PATTERNS,
    DEPLETION_RATES,
    Classification,
    DepletionRate,
    classify_activity,
)
from pool_engine.catalog.baselines import (
    CAPACITY_STEPS,
    CIRCADIAN_WINDOWS,
    DYSREGULATION_TIERS,
    SLEEP_FILL_RATES,
    SLEEP_QUALITY_MULTIPLIERS,
    STATUS_BANDS,
    CircadianWindow,
    StatusBand,
    TierModifiers,
)
from pool_engine.catalog.recovery import (
    LEGACY_RECHARGE,
    RECOVERY_ACTIVITIES,
    LegacyRecharge,
    RecoveryBoost,
)

__all__ = [
    "CAPACITY_STEPS",
    "CIRCADIAN_WINDOWS",
    "Classification",
    "DEPLETION_PATTERNS",
    "DEPLETION_RATES",
    "DYSREGULATION_TIERS",
    "DepletionRate",
    "LEGACY_RECHARGE",
    "LegacyRecharge",
    "RECOVERY_ACTIVITIES",
    "RecoveryBoost",
    "SLEEP_FILL_RATES",
    "SLEEP_QUALITY_MULTIPLIERS",
    "STATUS_BANDS",
    "CircadianWindow",
    "StatusBand",
    "TierModifiers",
    "classify_activity",
]
