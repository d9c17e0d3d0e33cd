"""Multi-day views over stored PoolStates."""

from pool_engine.history.summary import DailySummary, Insight, generate_daily_summary

__all__ = ["DailySummary", "Insight", "generate_daily_summary"]
