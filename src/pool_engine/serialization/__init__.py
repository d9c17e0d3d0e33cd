"""Serialization of pool engine records."""

from pool_engine.serialization.pool_state import (
    from_json_string,
    pool_state_from_dict,
    pool_state_to_dict,
    to_json_string,
)

__all__ = ["from_json_string", "pool_state_from_dict", "pool_state_to_dict", "to_json_string"]
