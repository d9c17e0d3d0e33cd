"""Pool state calculator: fold a day's events into the current level.

current = morning − drains + recharges − remaining crash + circadian
          + micro-recovery, clamped to [0, 1 + capacity expansion].

Drain and recharge magnitudes already carry the dysregulation multipliers
applied at logging time; they are not applied again here.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from pool_engine.config import DEFAULT_CONFIG, PoolConfig
from pool_engine.math.capacity import pool_ceiling
from pool_engine.math.circadian import get_circadian_modifier
from pool_engine.math.depletion import crash_remaining
from pool_engine.math.sleep import calculate_morning_pool
from pool_engine.models.clock import local_naive
from pool_engine.models.enums import POOL_FLOOR, PoolStatus
from pool_engine.models.inputs import SleepInputs
from pool_engine.models.level import clamp, to_fraction, to_percent
from pool_engine.models.pool_state import PoolMetadata, PoolState
from pool_engine.models.trace import PoolTrace


def hours_since_wake(state: PoolState, now: datetime) -> float:
    """Hours elapsed since ``state.woke_at``; 0 when unknown or in the future."""
    if state.woke_at is None:
        return 0.0
    elapsed = local_naive(now) - local_naive(state.woke_at)
    return max(0.0, elapsed.total_seconds() / 3600.0)


def trace_current_pool(
    state: PoolState,
    now: datetime | None = None,
    config: PoolConfig | None = None,
) -> PoolTrace:
    """Compute the current level and return every contributing component."""
    config = config or DEFAULT_CONFIG
    now = datetime.now() if now is None else local_naive(now)

    morning = to_fraction(state.morning_level)
    drain_total = sum(e.magnitude for e in state.drain_activities)
    recharge_total = sum(e.magnitude for e in state.recharge_activities)
    crash = crash_remaining(state.pending_crash, now)
    circadian = get_circadian_modifier(now.hour, config.circadian_windows)
    hours = hours_since_wake(state, now)
    micro = hours * config.micro_recovery_per_hour

    unclamped = morning - drain_total + recharge_total - crash + circadian.modifier + micro
    ceiling = pool_ceiling(state.metadata.capacity_expansion, config)
    level = to_percent(clamp(unclamped, POOL_FLOOR, ceiling))

    return PoolTrace(
        morning=morning,
        drain_total=drain_total,
        recharge_total=recharge_total,
        crash_remaining=crash,
        circadian_modifier=circadian.modifier,
        circadian_label=circadian.label,
        micro_recovery=micro,
        hours_since_wake=hours,
        ceiling=ceiling,
        unclamped=unclamped,
        level=level,
    )


def calculate_current_pool(
    state: PoolState,
    now: datetime | None = None,
    config: PoolConfig | None = None,
) -> int:
    """Current pool level as an integer percentage.

    Reproducible for a given *now*: crash decay is computed from stored
    timestamps, never from a live timer.

    Args:
        state: The day's snapshot.
        now: Evaluation time (None → datetime.now()).
        config: Optional tuning; defaults to DEFAULT_CONFIG.

    Returns:
        Percentage in [0, 100 × (1 + capacity expansion)].
    """
    return trace_current_pool(state, now, config).level


def initialize_daily_pool(
    inputs: SleepInputs,
    day: date | None = None,
    woke_at: datetime | None = None,
    config: PoolConfig | None = None,
) -> PoolState:
    """Build a fresh PoolState for a new calendar day.

    Args:
        inputs: Sleep and yesterday's completion for the morning calculation.
        day: Calendar day (None → woke_at's date, else today).
        woke_at: Wake time; micro-recovery counts from here.
        config: Optional tuning; defaults to DEFAULT_CONFIG.
    """
    morning = calculate_morning_pool(inputs, config)
    if day is None:
        day = woke_at.date() if woke_at is not None else date.today()
    return PoolState(
        date=day,
        morning_level=morning,
        current_level=morning,
        metadata=PoolMetadata(
            sleep_hours=inputs.sleep_hours,
            sleep_quality=inputs.sleep_quality,
            dysregulation_tier=inputs.dysregulation_tier,
            capacity_expansion=inputs.capacity_expansion,
        ),
        woke_at=woke_at,
        last_updated=woke_at,
    )


# ---------------------------------------------------------------------------
# Advisory status bands
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PoolStatusReading:
    status: PoolStatus
    threshold: int  # lower bound of the band, percent
    message: str
    suggestion: str
    show_professional_help: bool = False


def get_pool_status(level: int, config: PoolConfig | None = None) -> PoolStatusReading:
    """Map an integer pool percentage to its advisory band."""
    config = config or DEFAULT_CONFIG
    fraction = to_fraction(level)
    bands = sorted(config.status_bands, key=lambda b: b.minimum, reverse=True)
    for band in bands:
        if fraction >= band.minimum:
            break
    else:
        band = bands[-1]
    return PoolStatusReading(
        status=band.status,
        threshold=to_percent(band.minimum),
        message=band.message,
        suggestion=band.suggestion,
        show_professional_help=band.show_professional_help,
    )
