"""Injectable configuration for the pool engine.

PoolConfig bundles every catalog table and tuning scalar so scenarios can be
tested or tuned without code changes. DEFAULT_CONFIG mirrors the module
constants in ``models/enums.py`` and the tables in ``catalog/``.

Overrides come from a JSON file named by the POOL_ENGINE_CONFIG environment
variable (or passed explicitly to ``load_config``)::

    {
        "crash_fraction": 0.30,
        "depletion_rates": {"tiktok": 0.16},
        "recovery_boosts": {"cold_shower_2min": 0.12},
        "dysregulation_tiers": {"mild": {"depletion": 1.25}},
        "sleep_fill_rates": {"6": 0.60},
        "circadian_windows": [{"start": 6, "end": 9, "modifier": 0.1, "label": "..."}, ...]
    }
"""

from __future__ import annotations

import dataclasses
import json
import logging
import math
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from pool_engine.catalog.activities import (
    DEPLETION_PATTERNS,
    DEPLETION_RATES,
    DepletionRate,
    activity_from_key,
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
    validate_windows,
)
from pool_engine.catalog.recovery import (
    LEGACY_RECHARGE,
    RECOVERY_ACTIVITIES,
    LegacyRecharge,
    RecoveryBoost,
    recovery_from_key,
)
from pool_engine.exceptions import ConfigError
from pool_engine.models.enums import (
    CAPACITY_LOOKBACK_WEEKS,
    CAPACITY_MAX_CEILING,
    CRASH_FRACTION,
    CRASH_RECOVERY_MINUTES,
    MICRO_RECOVERY_PER_HOUR,
    MIN_SESSIONS_PER_WEEK,
    MORNING_FLOOR,
    REPETITION_AMPLIFICATION,
    STREAK_BONUS_PER_THRESHOLD,
    STREAK_BONUS_THRESHOLDS,
    YESTERDAY_COMPLETE_BONUS,
    DrainActivity,
    DysregulationTier,
    RecoveryActivity,
    SleepQuality,
)

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = "POOL_ENGINE_CONFIG"
LOG_LEVEL: str = os.environ.get("POOL_ENGINE_LOG_LEVEL", "INFO")

_SCALAR_FIELDS = (
    "crash_fraction",
    "crash_recovery_minutes",
    "repetition_amplification",
    "micro_recovery_per_hour",
    "morning_floor",
    "yesterday_complete_bonus",
    "streak_bonus_per_threshold",
    "min_sessions_per_week",
    "capacity_lookback_weeks",
    "capacity_max_ceiling",
)
_INT_FIELDS = frozenset({"min_sessions_per_week", "capacity_lookback_weeks"})


@dataclass(frozen=True)
class PoolConfig:
    """Every tunable table and scalar the calculations read."""

    sleep_fill_rates: Mapping[int, float] = field(default_factory=lambda: dict(SLEEP_FILL_RATES))
    sleep_quality_multipliers: Mapping[SleepQuality, float] = field(
        default_factory=lambda: dict(SLEEP_QUALITY_MULTIPLIERS)
    )
    circadian_windows: tuple[CircadianWindow, ...] = CIRCADIAN_WINDOWS
    depletion_rates: Mapping[DrainActivity, DepletionRate] = field(
        default_factory=lambda: dict(DEPLETION_RATES)
    )
    depletion_patterns: tuple[tuple[DrainActivity, tuple[str, ...]], ...] = DEPLETION_PATTERNS
    recovery_activities: Mapping[RecoveryActivity, RecoveryBoost] = field(
        default_factory=lambda: dict(RECOVERY_ACTIVITIES)
    )
    legacy_recharge: Mapping[tuple[str, str], LegacyRecharge] = field(
        default_factory=lambda: dict(LEGACY_RECHARGE)
    )
    dysregulation_tiers: Mapping[DysregulationTier, TierModifiers] = field(
        default_factory=lambda: dict(DYSREGULATION_TIERS)
    )
    capacity_steps: tuple[tuple[int, float], ...] = CAPACITY_STEPS
    status_bands: tuple[StatusBand, ...] = STATUS_BANDS

    crash_fraction: float = CRASH_FRACTION
    crash_recovery_minutes: float = CRASH_RECOVERY_MINUTES
    repetition_amplification: float = REPETITION_AMPLIFICATION
    micro_recovery_per_hour: float = MICRO_RECOVERY_PER_HOUR
    morning_floor: float = MORNING_FLOOR
    yesterday_complete_bonus: float = YESTERDAY_COMPLETE_BONUS
    streak_bonus_thresholds: tuple[int, ...] = STREAK_BONUS_THRESHOLDS
    streak_bonus_per_threshold: float = STREAK_BONUS_PER_THRESHOLD
    min_sessions_per_week: int = MIN_SESSIONS_PER_WEEK
    capacity_lookback_weeks: int = CAPACITY_LOOKBACK_WEEKS
    capacity_max_ceiling: float = CAPACITY_MAX_CEILING

    def tier(self, tier: DysregulationTier) -> TierModifiers:
        """Modifiers for *tier*, falling back to HEALTHY for unknown tiers."""
        return self.dysregulation_tiers.get(
            tier, self.dysregulation_tiers[DysregulationTier.HEALTHY]
        )

    def depletion_rate(self, activity: DrainActivity) -> DepletionRate:
        return self.depletion_rates.get(activity, self.depletion_rates[DrainActivity.UTILITY])

    def with_overrides(self, overrides: Mapping[str, Any]) -> PoolConfig:
        """Return a copy with *overrides* applied.

        Raises:
            ConfigError: On unknown keys, unknown catalog keys or invalid values.
        """
        changes: dict[str, Any] = {}
        for key, value in overrides.items():
            if key in _SCALAR_FIELDS:
                changes[key] = _number(key, value, integer=key in _INT_FIELDS)
            elif key == "depletion_rates":
                changes[key] = self._override_depletion(value)
            elif key == "recovery_boosts":
                changes["recovery_activities"] = self._override_recovery(value)
            elif key == "dysregulation_tiers":
                changes[key] = self._override_tiers(value)
            elif key == "sleep_fill_rates":
                changes[key] = self._override_sleep(value)
            elif key == "circadian_windows":
                changes[key] = _parse_windows(value)
            else:
                raise ConfigError(f"Unknown config key: {key!r}")
        return dataclasses.replace(self, **changes)

    def _override_depletion(self, value: Any) -> dict[DrainActivity, DepletionRate]:
        rates = dict(self.depletion_rates)
        for key, rate in _mapping("depletion_rates", value).items():
            activity = activity_from_key(key)
            if activity is None:
                raise ConfigError(f"Unknown depletion activity: {key!r}")
            rates[activity] = dataclasses.replace(
                rates[activity], rate=_number(f"depletion_rates.{key}", rate)
            )
        return rates

    def _override_recovery(self, value: Any) -> dict[RecoveryActivity, RecoveryBoost]:
        boosts = dict(self.recovery_activities)
        for key, boost in _mapping("recovery_boosts", value).items():
            activity = recovery_from_key(key)
            if activity is None:
                raise ConfigError(f"Unknown recovery activity: {key!r}")
            boosts[activity] = dataclasses.replace(
                boosts[activity], boost=_number(f"recovery_boosts.{key}", boost)
            )
        return boosts

    def _override_tiers(self, value: Any) -> dict[DysregulationTier, TierModifiers]:
        tiers = dict(self.dysregulation_tiers)
        for key, mods in _mapping("dysregulation_tiers", value).items():
            try:
                tier = DysregulationTier[str(key).upper()]
            except KeyError:
                raise ConfigError(f"Unknown dysregulation tier: {key!r}") from None
            updates = {}
            for name, number in _mapping(f"dysregulation_tiers.{key}", mods).items():
                if name not in ("depletion", "recovery", "capacity"):
                    raise ConfigError(f"Unknown tier modifier: {key}.{name}")
                updates[name] = _number(f"dysregulation_tiers.{key}.{name}", number)
            tiers[tier] = dataclasses.replace(tiers[tier], **updates)
        return tiers

    def _override_sleep(self, value: Any) -> dict[int, float]:
        fill = dict(self.sleep_fill_rates)
        for key, rate in _mapping("sleep_fill_rates", value).items():
            try:
                bucket = int(key)
            except (TypeError, ValueError):
                raise ConfigError(f"Sleep bucket must be an integer, got {key!r}") from None
            if bucket not in fill:
                raise ConfigError(f"Sleep bucket out of range: {bucket}")
            fill[bucket] = _number(f"sleep_fill_rates.{key}", rate)
        return fill


DEFAULT_CONFIG = PoolConfig()


def load_config(path: str | Path | None = None) -> PoolConfig:
    """Build a PoolConfig from a JSON override file.

    Args:
        path: Override file. Falls back to $POOL_ENGINE_CONFIG; with neither
            set, DEFAULT_CONFIG is returned.

    Raises:
        ConfigError: If the file is missing, is not valid JSON or holds
            invalid overrides.
    """
    if path is None:
        env_path = os.environ.get(CONFIG_PATH_ENV, "")
        if not env_path:
            return DEFAULT_CONFIG
        path = env_path

    config_path = Path(path).expanduser()
    try:
        with open(config_path) as f:
            overrides = json.load(f)
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {config_path}") from None
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Config file {config_path} is not valid JSON: {exc}") from exc

    config = DEFAULT_CONFIG.with_overrides(_mapping("config", overrides))
    logger.info("Loaded pool config overrides from %s", config_path)
    return config


# ---------------------------------------------------------------------------
# Internal validators
# ---------------------------------------------------------------------------


def _mapping(name: str, value: Any) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigError(f"{name} must be an object, got {type(value).__name__}")
    return value


def _number(name: str, value: Any, integer: bool = False) -> Any:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value) or value < 0:
        raise ConfigError(f"{name} must be a finite non-negative number, got {value!r}")
    if integer:
        if int(value) != value:
            raise ConfigError(f"{name} must be an integer, got {value!r}")
        return int(value)
    return float(value)


def _parse_windows(value: Any) -> tuple[CircadianWindow, ...]:
    if not isinstance(value, list) or not value:
        raise ConfigError("circadian_windows must be a non-empty list")
    windows = []
    for i, raw in enumerate(value):
        item = _mapping(f"circadian_windows[{i}]", raw)
        try:
            start, end = int(item["start"]), int(item["end"])
            modifier = float(item["modifier"])
        except (KeyError, TypeError, ValueError) as exc:
            raise ConfigError(f"circadian_windows[{i}] is malformed: {exc}") from exc
        if not (0 <= start <= 23 and 0 <= end <= 24) or not math.isfinite(modifier):
            raise ConfigError(f"circadian_windows[{i}] is out of range")
        windows.append(CircadianWindow(start, end, modifier, str(item.get("label", ""))))
    result = tuple(windows)
    validate_windows(result)
    return result
