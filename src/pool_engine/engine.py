"""PoolEngine: the orchestrator that runs a day's pool from morning to night."""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Mapping, Sequence

from pool_engine.config import DEFAULT_CONFIG, PoolConfig
from pool_engine.history.summary import DailySummary, generate_daily_summary
from pool_engine.math.depletion import log_drain_activity
from pool_engine.math.pool import (
    PoolStatusReading,
    get_pool_status,
    initialize_daily_pool,
    trace_current_pool,
)
from pool_engine.math.recovery import log_recharge_activity
from pool_engine.models.clock import local_naive
from pool_engine.models.enums import DrainActivity, RecoveryActivity
from pool_engine.models.habit import Habit, RankedHabit
from pool_engine.models.inputs import SleepInputs
from pool_engine.models.pool_state import DrainEvent, PoolState, RechargeEvent
from pool_engine.models.trace import PoolTrace
from pool_engine.recommendations.habit_order import get_recommended_habit_order
from pool_engine.recommendations.recovery_suggestions import (
    RecoverySuggestion,
    get_recovery_suggestions,
)

logger = logging.getLogger(__name__)


def _resolve_now(now: datetime | None) -> datetime:
    return local_naive(now) if now is not None else datetime.now()


class PoolEngine:
    """Binds a PoolConfig to the day's calculations.

    Every method takes the current PoolState and returns a new one where the
    state changes; nothing is mutated in place.

    Usage:
        engine = PoolEngine()
        state = engine.start_day(SleepInputs(sleep_hours=8), woke_at=wake)
        state, event = engine.log_drain(state, "TikTok", 30, now=wake)
        level = engine.current_level(state, now=later)
    """

    def __init__(self, config: PoolConfig | None = None) -> None:
        self.config = config or DEFAULT_CONFIG

    def start_day(
        self,
        inputs: SleepInputs,
        day: date | None = None,
        woke_at: datetime | None = None,
    ) -> PoolState:
        """Compute the morning level and open a fresh PoolState."""
        state = initialize_daily_pool(inputs, day, woke_at, self.config)
        logger.info(
            "Started day %s at %d%% (sleep %.1fh %s, tier %s)",
            state.date,
            state.morning_level,
            inputs.sleep_hours,
            inputs.sleep_quality.value,
            inputs.dysregulation_tier.name,
        )
        return state

    def log_drain(
        self,
        state: PoolState,
        app: str,
        minutes: float,
        now: datetime | None = None,
        custom_mappings: Mapping[str, str | DrainActivity] | None = None,
    ) -> tuple[PoolState, DrainEvent]:
        """Log a draining session using the day's session count and tier.

        Returns:
            A tuple of (updated PoolState, DrainEvent).
        """
        now = _resolve_now(now)
        event = log_drain_activity(
            app,
            minutes,
            prior_sessions_today=state.sessions_today(app),
            tier=state.metadata.dysregulation_tier,
            now=now,
            custom_mappings=custom_mappings,
            config=self.config,
        )
        new_state = self.refresh(state.with_drain(event), now)
        logger.info(
            "Drain %s %.0f min: -%d%% (crash %d%%), pool now %d%%",
            event.activity.value,
            event.minutes,
            event.impact_percent,
            event.crash_percent,
            new_state.current_level,
        )
        return new_state, event

    def log_recharge(
        self,
        state: PoolState,
        activity: str | RecoveryActivity,
        intensity: str | None = None,
        now: datetime | None = None,
        boost_override: float | None = None,
    ) -> tuple[PoolState, RechargeEvent]:
        """Log a recharging activity with the day's recovery multiplier.

        Unresolved activities are still recorded with zero boost so the
        caller can surface ``event.error``.

        Returns:
            A tuple of (updated PoolState, RechargeEvent).
        """
        now = _resolve_now(now)
        event = log_recharge_activity(
            activity,
            intensity,
            tier=state.metadata.dysregulation_tier,
            now=now,
            boost_override=boost_override,
            config=self.config,
        )
        new_state = self.refresh(state.with_recharge(event), now)
        if event.is_resolved:
            logger.info(
                "Recharge %s: +%d%%, pool now %d%%",
                event.activity,
                event.boost_percent,
                new_state.current_level,
            )
        return new_state, event

    def trace(self, state: PoolState, now: datetime | None = None) -> PoolTrace:
        return trace_current_pool(state, _resolve_now(now), self.config)

    def current_level(self, state: PoolState, now: datetime | None = None) -> int:
        return self.trace(state, now).level

    def refresh(self, state: PoolState, now: datetime | None = None) -> PoolState:
        """Recompute the cached ``current_level`` at *now*."""
        now = _resolve_now(now)
        trace = self.trace(state, now)
        logger.debug(
            "Pool %s: morning %.3f - drains %.3f + recharges %.3f - crash %.3f"
            " + circadian %.3f (%s) + micro %.3f = %.3f -> %d%%",
            state.date,
            trace.morning,
            trace.drain_total,
            trace.recharge_total,
            trace.crash_remaining,
            trace.circadian_modifier,
            trace.circadian_label,
            trace.micro_recovery,
            trace.unclamped,
            trace.level,
        )
        return state.with_current_level(trace.level, now)

    def status(self, state: PoolState, now: datetime | None = None) -> PoolStatusReading:
        return get_pool_status(self.current_level(state, now), self.config)

    def recommend(
        self,
        state: PoolState,
        habits: Sequence[Habit],
        now: datetime | None = None,
    ) -> list[RankedHabit]:
        """Order *habits* for the pool level at *now*."""
        return get_recommended_habit_order(habits, self.current_level(state, now))

    def suggest_recovery(
        self,
        state: PoolState,
        now: datetime | None = None,
    ) -> list[RecoverySuggestion]:
        """Recovery suggestions for the level and hour at *now*, skipping today's repeats."""
        now = _resolve_now(now)
        return get_recovery_suggestions(
            self.current_level(state, now),
            now.hour,
            state.recharge_activities,
        )

    def summarize(self, history: Sequence[PoolState]) -> DailySummary | None:
        return generate_daily_summary(history)
