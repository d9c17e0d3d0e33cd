"""Motivation pool engine: a deterministic model of a day's available drive."""

from pool_engine.config import DEFAULT_CONFIG, PoolConfig, load_config
from pool_engine.engine import PoolEngine
from pool_engine.exceptions import ConfigError, PoolEngineError, PoolStateError
from pool_engine.math.capacity import calculate_capacity_expansion
from pool_engine.math.depletion import log_drain_activity
from pool_engine.math.dysregulation import assess_dysregulation_tier
from pool_engine.math.pool import calculate_current_pool, get_pool_status, initialize_daily_pool
from pool_engine.math.recovery import log_recharge_activity
from pool_engine.math.sleep import calculate_morning_pool
from pool_engine.recommendations import get_recommended_habit_order, get_recovery_suggestions

__all__ = [
    "DEFAULT_CONFIG",
    "ConfigError",
    "PoolConfig",
    "PoolEngine",
    "PoolEngineError",
    "PoolStateError",
    "assess_dysregulation_tier",
    "calculate_capacity_expansion",
    "calculate_current_pool",
    "calculate_morning_pool",
    "get_pool_status",
    "get_recommended_habit_order",
    "get_recovery_suggestions",
    "initialize_daily_pool",
    "load_config",
    "log_drain_activity",
    "log_recharge_activity",
]
