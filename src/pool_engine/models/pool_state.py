"""The day's working record and the events appended to it.

PoolState is append-only intraday: logging an event returns a new PoolState
rather than mutating the existing one, so concurrent readers always see a
consistent snapshot. The host app owns persistence and day rollover.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Mapping

from pool_engine.models.enums import (
    ActivityCategory,
    DrainActivity,
    DysregulationTier,
    RecoveryActivity,
    Resolution,
    SleepQuality,
)
from pool_engine.models.clock import local_naive
from pool_engine.models.level import to_percent


@dataclass(frozen=True)
class Crash:
    """Temporary post-activity dip that decays linearly to zero.

    Attributes:
        amount: Full dip as a fraction, applied at ``started_at``.
        recovery_minutes: Length of the linear decay window.
        started_at: When the draining activity was logged.
        expires_at: ``started_at + recovery_minutes``.
    """

    amount: float
    recovery_minutes: float
    started_at: datetime
    expires_at: datetime

    def remaining(self, now: datetime) -> float:
        """Fraction of pool still suppressed by this crash at *now*."""
        if self.recovery_minutes <= 0:
            return 0.0
        elapsed = local_naive(now) - local_naive(self.started_at)
        elapsed_min = elapsed.total_seconds() / 60.0
        if elapsed_min <= 0:
            return self.amount
        if elapsed_min >= self.recovery_minutes:
            return 0.0
        return self.amount * (1.0 - elapsed_min / self.recovery_minutes)

    @property
    def percent(self) -> int:
        return to_percent(self.amount)


@dataclass(frozen=True)
class DrainEvent:
    """A logged draining activity with its resolved impact."""

    app: str
    minutes: float
    activity: DrainActivity
    category: ActivityCategory
    mechanism: str
    resolution: Resolution
    base_rate: float  # fraction per 30 minutes
    base_impact: float  # rate scaled by duration
    session_multiplier: float  # 1 + 0.3 * prior sessions today
    depletion_modifier: float  # dysregulation tier multiplier, baked in
    magnitude: float  # final fraction subtracted from the pool
    crash: Crash
    logged_at: datetime

    @property
    def base_impact_percent(self) -> int:
        return to_percent(self.base_impact)

    @property
    def impact_percent(self) -> int:
        return to_percent(self.magnitude)

    @property
    def crash_percent(self) -> int:
        return self.crash.percent


@dataclass(frozen=True)
class RechargeEvent:
    """A logged recharging activity.

    An unresolved activity still produces an event: ``magnitude`` is 0 and
    ``error`` says why. Callers check ``is_resolved`` rather than catching.
    """

    activity: str
    intensity: str | None
    kind: RecoveryActivity | None
    label: str
    mechanism: str
    requirements: Mapping[str, str]
    base_boost: float
    recovery_modifier: float
    magnitude: float
    resolution: Resolution
    logged_at: datetime
    error: str | None = None

    @property
    def boost_percent(self) -> int:
        return to_percent(self.magnitude)

    @property
    def is_resolved(self) -> bool:
        return self.resolution != Resolution.UNRESOLVED


@dataclass(frozen=True)
class PoolMetadata:
    """Inputs in effect for the whole day."""

    sleep_hours: float | None = None
    sleep_quality: SleepQuality = SleepQuality.NORMAL_REM
    dysregulation_tier: DysregulationTier = DysregulationTier.HEALTHY
    capacity_expansion: float = 0.0


@dataclass(frozen=True)
class PoolState:
    """Immutable snapshot of one calendar day's pool.

    ``current_level`` is a cache of the last calculation; the truth is always
    morning level + events + elapsed time + circadian modifier.
    """

    date: date
    morning_level: int
    current_level: int
    drain_activities: tuple[DrainEvent, ...] = field(default_factory=tuple)
    recharge_activities: tuple[RechargeEvent, ...] = field(default_factory=tuple)
    pending_crash: Crash | None = None
    metadata: PoolMetadata = field(default_factory=PoolMetadata)
    woke_at: datetime | None = None
    last_updated: datetime | None = None

    def with_drain(self, event: DrainEvent) -> PoolState:
        """Append a drain event and fold its crash into the pending crash.

        Whatever the previous crash still suppresses is carried into the new
        one, so logging another drain never lifts the pool.
        """
        return dataclasses.replace(
            self,
            drain_activities=self.drain_activities + (event,),
            pending_crash=combine_crashes(self.pending_crash, event.crash),
            last_updated=event.logged_at,
        )

    def with_recharge(self, event: RechargeEvent) -> PoolState:
        return dataclasses.replace(
            self,
            recharge_activities=self.recharge_activities + (event,),
            last_updated=event.logged_at,
        )

    def with_current_level(self, level: int, now: datetime) -> PoolState:
        return dataclasses.replace(self, current_level=level, last_updated=now)

    def sessions_today(self, app_name: str) -> int:
        """How many times *app_name* (case-insensitive) was already logged today."""
        key = normalize_app_name(app_name)
        return sum(1 for e in self.drain_activities if normalize_app_name(e.app) == key)


def normalize_app_name(name: str | None) -> str:
    return (name or "").strip().lower()


def combine_crashes(pending: Crash | None, new: Crash) -> Crash:
    """Merge two crashes into one that starts at the later start time.

    Its amount is the sum of what each crash still suppresses at that
    moment. The merged crash is never below either input at any later time.
    """
    if pending is None:
        return new
    start = max(local_naive(pending.started_at), local_naive(new.started_at))
    amount = pending.remaining(start) + new.remaining(start)
    if amount <= 0:
        return new
    recovery_minutes = max(pending.recovery_minutes, new.recovery_minutes)
    return Crash(
        amount=amount,
        recovery_minutes=recovery_minutes,
        started_at=start,
        expires_at=start + timedelta(minutes=recovery_minutes),
    )
