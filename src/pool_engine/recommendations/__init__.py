"""Consumers of the pool level: habit ordering and recovery suggestions."""

from pool_engine.recommendations.habit_order import get_recommended_habit_order
from pool_engine.recommendations.recovery_suggestions import (
    RecoverySuggestion,
    get_recovery_suggestions,
)

__all__ = ["RecoverySuggestion", "get_recommended_habit_order", "get_recovery_suggestions"]
