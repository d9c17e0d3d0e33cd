"""Exception hierarchy for the pool engine.

Calculations never raise: they degrade to safe defaults. These exceptions
are reserved for the configuration and serialization edges.
"""

from __future__ import annotations


class PoolEngineError(Exception):
    """Base exception for all pool_engine errors."""


class ConfigError(PoolEngineError):
    """A configuration override is invalid (unknown key, bad value, gappy windows)."""


class PoolStateError(PoolEngineError):
    """A serialized PoolState could not be decoded."""

    def __init__(self, message: str, field_name: str | None = None) -> None:
        super().__init__(message)
        self.field_name = field_name
