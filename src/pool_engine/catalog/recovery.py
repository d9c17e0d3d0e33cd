"""Recharging-activity catalogs.

Two parallel tables exist. The detailed table is keyed by RecoveryActivity
and annotated with mechanism and requirements; the legacy table is keyed by
(category, intensity) pairs that older clients still send. All boosts are
fractions of nominal capacity.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from pool_engine.models.enums import RecoveryActivity


@dataclass(frozen=True)
class RecoveryBoost:
    """Detailed catalog entry."""

    boost: float
    label: str
    mechanism: str
    requirements: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class LegacyRecharge:
    """Legacy (category, intensity) catalog entry."""

    minutes: float
    boost: float
    label: str


_R = RecoveryActivity

_COLD_SHOWER = {"temperature": "50-60°F (10-15°C)"}
_COLD_PLUNGE = {"temperature": "40-50°F (4-10°C)"}
_MORNING = {"timing": "Within 1 hour of waking"}
_GREEN = {"environment": "Green space or natural setting"}
_FOREST = {"environment": "Forest or dense natural area"}
_IN_PERSON = {"type": "In-person interaction"}
_NO_INPUT = {"note": "No phone, no music, no stimulation"}

RECOVERY_ACTIVITIES: dict[RecoveryActivity, RecoveryBoost] = {
    # Cold exposure: norepinephrine co-release, effect persists for hours
    _R.COLD_SHOWER_1MIN: RecoveryBoost(0.08, "Cold shower (1 min)", "Norepinephrine co-release, sustained effect", _COLD_SHOWER),
    _R.COLD_SHOWER_2MIN: RecoveryBoost(0.10, "Cold shower (2-3 min)", "Norepinephrine co-release, sustained effect", _COLD_SHOWER),
    _R.COLD_PLUNGE_30SEC: RecoveryBoost(0.10, "Cold plunge (30 sec)", "Acute intense cold response", _COLD_PLUNGE),
    _R.COLD_PLUNGE_1MIN: RecoveryBoost(0.12, "Cold plunge (1 min)", "Acute intense cold response", _COLD_PLUNGE),
    _R.COLD_EXPOSURE_EXTENDED: RecoveryBoost(
        0.18,
        "Extended cold exposure (10-15 min)",
        "Cumulative catecholamine release",
        {"temperature": "~60°F (15°C)", "weeklyMinimum": "11 min total"},
    ),
    # Morning light
    _R.SUNLIGHT_SUNNY_5MIN: RecoveryBoost(0.05, "Morning sun (5 min, sunny)", "Retinal-SCN-neurochemical cascade", _MORNING),
    _R.SUNLIGHT_SUNNY_10MIN: RecoveryBoost(0.07, "Morning sun (10 min, sunny)", "Retinal-SCN-neurochemical cascade", _MORNING),
    _R.SUNLIGHT_OVERCAST_15MIN: RecoveryBoost(0.06, "Morning sun (15 min, overcast)", "Reduced but sufficient light exposure", _MORNING),
    _R.SUNLIGHT_OVERCAST_30MIN: RecoveryBoost(0.08, "Morning sun (30 min, cloudy)", "Extended exposure compensates for cloud cover", _MORNING),
    # Meditation
    _R.MEDITATION_5MIN: RecoveryBoost(0.04, "Meditation (5 min)", "Minimum effective dose"),
    _R.MEDITATION_10MIN: RecoveryBoost(0.06, "Meditation (10 min)", "Meaningful restoration"),
    _R.MEDITATION_15MIN: RecoveryBoost(0.08, "Meditation (15 min)", "Full relaxation response beginning"),
    _R.MEDITATION_20MIN: RecoveryBoost(0.10, "Meditation (20 min)", "Full relaxation response activation"),
    _R.YOGA_NIDRA_30MIN: RecoveryBoost(0.14, "Yoga Nidra (30 min)", "Non-sleep deep rest"),
    # Nature (attention restoration)
    _R.NATURE_WALK_15MIN: RecoveryBoost(0.04, "Nature walk (15 min)", "Soft fascination, attention restoration", _GREEN),
    _R.NATURE_WALK_30MIN: RecoveryBoost(0.07, "Nature walk (30 min)", "Meaningful exposure", _GREEN),
    _R.FOREST_BATHING_1HR: RecoveryBoost(0.11, "Forest bathing (1 hr)", "Immersive nature exposure", _FOREST),
    _R.FOREST_BATHING_2HR: RecoveryBoost(0.15, "Forest bathing (2 hr)", "Full shinrin-yoku protocol", _FOREST),
    # Social connection
    _R.SOCIAL_INPERSON_15MIN: RecoveryBoost(0.04, "In-person social (15 min)", "Dopamine-oxytocin synergy", _IN_PERSON),
    _R.SOCIAL_INPERSON_30MIN: RecoveryBoost(0.07, "In-person social (30 min)", "Quality conversation", _IN_PERSON),
    _R.SOCIAL_DEEP_CONVERSATION: RecoveryBoost(
        0.10, "Deep conversation (1 hr)", "Meaningful connection", {"type": "Vulnerable, authentic exchange"}
    ),
    _R.SOCIAL_DIGITAL: RecoveryBoost(
        0.02, "Digital social (30 min)", "Reduced effect without physical presence cues", {"note": "Video call or text-based"}
    ),
    # Deliberate boredom
    _R.BOREDOM_15MIN: RecoveryBoost(0.04, "Deliberate boredom (15 min)", "Receptor upregulation, sensitivity recalibration", _NO_INPUT),
    _R.BOREDOM_30MIN: RecoveryBoost(0.06, "Deliberate boredom (30 min)", "Extended receptor reset", _NO_INPUT),
    # Exercise as daily charging (capacity growth is modelled separately)
    _R.EXERCISE_WALK_30MIN: RecoveryBoost(0.05, "Walking (30 min)", "Light movement", {"intensity": "Low"}),
    _R.EXERCISE_MODERATE_30MIN: RecoveryBoost(
        0.07, "Moderate cardio (30 min)", "Sustained heart rate elevation", {"intensity": "65-70% max heart rate"}
    ),
    _R.EXERCISE_HIIT_20MIN: RecoveryBoost(
        0.10, "HIIT (20-30 min)", "Acute catecholamine surge", {"intensity": "80-90% max heart rate"}
    ),
    _R.EXERCISE_STRENGTH_30MIN: RecoveryBoost(
        0.07, "Strength training (30 min)", "Resistance exercise benefits", {"intensity": "Moderate-high"}
    ),
    _R.EXERCISE_SKILLED_30MIN: RecoveryBoost(
        0.09, "Skilled exercise (30 min)", "Enhanced frontal-striatal activation", {"examples": "Dance, martial arts, climbing"}
    ),
}

LEGACY_RECHARGE: dict[tuple[str, str], LegacyRecharge] = {
    ("exercise", "light"): LegacyRecharge(15, 0.05, "Light exercise"),
    ("exercise", "moderate"): LegacyRecharge(30, 0.07, "Moderate workout"),
    ("exercise", "intense"): LegacyRecharge(45, 0.10, "Intense workout"),
    ("meditation", "short"): LegacyRecharge(5, 0.04, "Quick meditation"),
    ("meditation", "standard"): LegacyRecharge(15, 0.08, "Full meditation"),
    ("outdoors", "walk"): LegacyRecharge(20, 0.05, "Walk outside"),
    ("outdoors", "sunlight"): LegacyRecharge(15, 0.07, "Morning sunlight"),
    ("social", "inperson"): LegacyRecharge(30, 0.07, "In-person time"),
    ("social", "deepconversation"): LegacyRecharge(60, 0.10, "Deep conversation"),
    ("coldexposure", "shower"): LegacyRecharge(2, 0.10, "Cold exposure"),
    ("sleep", "good"): LegacyRecharge(7 * 60, 0.25, "7+ hours sleep"),
    ("sleep", "great"): LegacyRecharge(8 * 60, 0.30, "8+ hours sleep"),
}

_KEYS: dict[str, RecoveryActivity] = {a.value: a for a in RecoveryActivity}


def recovery_from_key(key: str | RecoveryActivity | None) -> RecoveryActivity | None:
    """Look up a RecoveryActivity by type key; None if unknown."""
    if isinstance(key, RecoveryActivity):
        return key
    if key is None:
        return None
    return _KEYS.get(str(key).strip().lower())


def legacy_key(category: str | None, intensity: str | None) -> tuple[str, str] | None:
    """Normalize a legacy pair. Keys are compared lowercased ("inPerson" → "inperson")."""
    if not category or not intensity:
        return None
    return (str(category).strip().lower(), str(intensity).strip().lower())
