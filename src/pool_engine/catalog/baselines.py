"""Baseline tables: sleep fill, circadian windows, tier modifiers, capacity steps.

Sleep fill follows the restriction literature: one bad night measurably
impairs next-day reward sensitivity and the deficit is non-linear below six
hours. Circadian modifiers are additive: a morning surge, a mid-afternoon
trough and an evening decline.
"""

from __future__ import annotations

from dataclasses import dataclass

from pool_engine.exceptions import ConfigError
from pool_engine.models.enums import DysregulationTier, PoolStatus, SleepQuality


@dataclass(frozen=True)
class CircadianWindow:
    """A time-of-day window. ``start > end`` means the window wraps past midnight."""

    start: int
    end: int
    modifier: float
    label: str

    @property
    def wraps_midnight(self) -> bool:
        return self.start > self.end

    def contains(self, hour: int) -> bool:
        if self.wraps_midnight:
            return hour >= self.start or hour < self.end
        return self.start <= hour < self.end


@dataclass(frozen=True)
class TierModifiers:
    """Multipliers a dysregulation tier applies to the other components."""

    depletion: float
    recovery: float
    capacity: float
    indicators: tuple[str, ...] = ()


@dataclass(frozen=True)
class StatusBand:
    """Advisory status band with its lower bound (fraction) and copy."""

    status: PoolStatus
    minimum: float
    message: str
    suggestion: str
    show_professional_help: bool = False


# Hours of sleep (bucketed) → fraction of pool restored
SLEEP_FILL_RATES: dict[int, float] = {
    9: 1.00,
    8: 0.92,
    7: 0.80,
    6: 0.65,
    5: 0.45,
    4: 0.30,
    3: 0.15,
}

SLEEP_QUALITY_MULTIPLIERS: dict[SleepQuality, float] = {
    SleepQuality.HIGH_REM: 1.10,  # >22% REM
    SleepQuality.NORMAL_REM: 1.00,  # 18-22% REM
    SleepQuality.LOW_REM: 0.85,  # <18% REM
    SleepQuality.FRAGMENTED: 0.75,  # >3 wake episodes
    SleepQuality.CONSOLIDATED: 1.00,
}

CIRCADIAN_WINDOWS: tuple[CircadianWindow, ...] = (
    CircadianWindow(6, 9, 0.12, "Morning surge"),
    CircadianWindow(9, 12, 0.05, "Sustained peak"),
    CircadianWindow(12, 14, -0.05, "Early afternoon dip"),
    CircadianWindow(14, 16, -0.18, "Afternoon trough"),
    CircadianWindow(16, 19, -0.08, "Partial recovery"),
    CircadianWindow(19, 22, -0.20, "Evening decline"),
    CircadianWindow(22, 6, -0.25, "Night (should be sleeping)"),
)

DYSREGULATION_TIERS: dict[DysregulationTier, TierModifiers] = {
    DysregulationTier.HEALTHY: TierModifiers(
        1.0, 1.0, 1.0, ("Normal pleasure from everyday activities",)
    ),
    DysregulationTier.MILD: TierModifiers(
        1.2, 0.9, 1.0, ("Some tolerance", "Needs more stimulation for same effect")
    ),
    DysregulationTier.MODERATE: TierModifiers(
        1.4,
        0.75,
        0.9,
        ("Clear tolerance", "Reduced pleasure from activities", "Difficulty with boredom"),
    ),
    DysregulationTier.SEVERE: TierModifiers(
        1.6,
        0.6,
        0.8,
        ("Anhedonia present", "Functional impairment", "Compulsive use despite consequences"),
    ),
}

# (minimum consecutive qualifying weeks, expansion fraction), highest first.
# Consistency beats intensity: the steps reward unbroken weeks, not volume.
CAPACITY_STEPS: tuple[tuple[int, float], ...] = (
    (8, 0.20),
    (6, 0.16),
    (4, 0.12),
    (2, 0.08),
    (1, 0.05),
)

STATUS_BANDS: tuple[StatusBand, ...] = (
    StatusBand(
        PoolStatus.HEALTHY, 0.70,
        "Full reserves. Prime time for challenging work.",
        "Tackle your hardest habit now.",
    ),
    StatusBand(
        PoolStatus.CAUTION, 0.50,
        "Solid reserves. Good for focused work.",
        "Good time for any habit.",
    ),
    StatusBand(
        PoolStatus.WARNING, 0.30,
        "Moderate reserves. Use 2-minute versions.",
        "Keep it simple today.",
    ),
    StatusBand(
        PoolStatus.CRITICAL, 0.20,
        "Low reserves. Recovery time.",
        "Consider a cold shower or walk outside.",
    ),
    StatusBand(
        PoolStatus.DANGER, 0.00,
        "Reserves depleted. Rest and recharge.",
        "No habits today. Focus on sleep and recovery.",
        show_professional_help=True,
    ),
)


def validate_windows(windows: tuple[CircadianWindow, ...]) -> None:
    """Check that *windows* partition the day: every hour 0-23 matches exactly once.

    Raises:
        ConfigError: Naming the first hour with zero or multiple matches.
    """
    for hour in range(24):
        matches = [w.label for w in windows if w.contains(hour)]
        if len(matches) != 1:
            raise ConfigError(
                f"Circadian windows must cover hour {hour} exactly once, "
                f"matched {len(matches)}: {matches}"
            )
