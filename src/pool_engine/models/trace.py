"""Pool trace: the audit trail of how a current level was reached."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PoolTrace:
    """Every additive component of a current-level calculation, as fractions.

    ``unclamped`` is the plain sum; ``level`` is the clamped, rounded
    percentage actually returned to callers.
    """

    morning: float
    drain_total: float
    recharge_total: float
    crash_remaining: float
    circadian_modifier: float
    circadian_label: str
    micro_recovery: float
    hours_since_wake: float
    ceiling: float
    unclamped: float
    level: int

    @property
    def was_clamped(self) -> bool:
        return not (0.0 <= self.unclamped <= self.ceiling)
