"""JSON serialization for PoolState.

Keys are camelCase to match the host app's stored day records; timestamps
are ISO-8601 strings; enum tags are written as their catalog keys (string
enums) or lowercase member names (ordered IntEnums).

All functions are pure (no I/O).
"""

from __future__ import annotations

import json
from datetime import date, datetime
from typing import Any, Callable, Mapping, TypeVar

from pool_engine.exceptions import PoolStateError
from pool_engine.models.clock import parse_timestamp
from pool_engine.models.enums import (
    ActivityCategory,
    DrainActivity,
    DysregulationTier,
    RecoveryActivity,
    Resolution,
    SleepQuality,
)
from pool_engine.models.pool_state import (
    Crash,
    DrainEvent,
    PoolMetadata,
    PoolState,
    RechargeEvent,
)

T = TypeVar("T")


def pool_state_to_dict(state: PoolState) -> dict:
    """Convert a PoolState to a JSON-compatible dict."""
    return {
        "date": state.date.isoformat(),
        "morningLevel": state.morning_level,
        "currentLevel": state.current_level,
        "drainActivities": [_drain_to_dict(e) for e in state.drain_activities],
        "rechargeActivities": [_recharge_to_dict(e) for e in state.recharge_activities],
        "pendingCrash": _crash_to_dict(state.pending_crash) if state.pending_crash else None,
        "metadata": {
            "sleepHours": state.metadata.sleep_hours,
            "sleepQuality": state.metadata.sleep_quality.value,
            "dysregulationTier": state.metadata.dysregulation_tier.name.lower(),
            "capacityExpansion": state.metadata.capacity_expansion,
        },
        "wokeAt": _iso(state.woke_at),
        "lastUpdated": _iso(state.last_updated),
    }


def to_json_string(state: PoolState, indent: int = 2) -> str:
    """Convert a PoolState to a JSON string."""
    return json.dumps(pool_state_to_dict(state), indent=indent)


def pool_state_from_dict(data: Mapping[str, Any]) -> PoolState:
    """Rebuild a PoolState from its dict form.

    Raises:
        PoolStateError: If a required field is missing or malformed.
    """
    if not isinstance(data, Mapping):
        raise PoolStateError(f"PoolState must be an object, got {type(data).__name__}")

    metadata = data.get("metadata") or {}
    if not isinstance(metadata, Mapping):
        raise PoolStateError("metadata must be an object", "metadata")

    crash_data = data.get("pendingCrash")
    return PoolState(
        date=_field(data, "date", date.fromisoformat),
        morning_level=_field(data, "morningLevel", int),
        current_level=_field(data, "currentLevel", int),
        drain_activities=tuple(
            _drain_from_dict(item) for item in _list(data, "drainActivities")
        ),
        recharge_activities=tuple(
            _recharge_from_dict(item) for item in _list(data, "rechargeActivities")
        ),
        pending_crash=_crash_from_dict(crash_data) if crash_data else None,
        metadata=PoolMetadata(
            sleep_hours=_optional(metadata, "sleepHours", float),
            sleep_quality=_optional(metadata, "sleepQuality", SleepQuality)
            or SleepQuality.NORMAL_REM,
            dysregulation_tier=_optional(metadata, "dysregulationTier", _tier)
            or DysregulationTier.HEALTHY,
            capacity_expansion=_optional(metadata, "capacityExpansion", float) or 0.0,
        ),
        woke_at=_optional(data, "wokeAt", parse_timestamp),
        last_updated=_optional(data, "lastUpdated", parse_timestamp),
    )


def from_json_string(text: str) -> PoolState:
    """Parse a PoolState from a JSON string.

    Raises:
        PoolStateError: If *text* is not valid JSON or not a PoolState.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise PoolStateError(f"Invalid PoolState JSON: {exc}") from exc
    return pool_state_from_dict(data)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _crash_to_dict(crash: Crash) -> dict:
    return {
        "amount": crash.amount,
        "recoveryMinutes": crash.recovery_minutes,
        "startedAt": crash.started_at.isoformat(),
        "expiresAt": crash.expires_at.isoformat(),
    }


def _drain_to_dict(event: DrainEvent) -> dict:
    return {
        "app": event.app,
        "minutes": event.minutes,
        "activity": event.activity.value,
        "category": event.category.value,
        "mechanism": event.mechanism,
        "resolution": event.resolution.name.lower(),
        "baseRate": event.base_rate,
        "baseImpact": event.base_impact,
        "sessionMultiplier": event.session_multiplier,
        "depletionModifier": event.depletion_modifier,
        "magnitude": event.magnitude,
        "impact": event.impact_percent,
        "crash": _crash_to_dict(event.crash),
        "loggedAt": event.logged_at.isoformat(),
    }


def _recharge_to_dict(event: RechargeEvent) -> dict:
    return {
        "activity": event.activity,
        "intensity": event.intensity,
        "type": event.kind.value if event.kind is not None else None,
        "label": event.label,
        "mechanism": event.mechanism,
        "requirements": dict(event.requirements),
        "baseBoost": event.base_boost,
        "recoveryModifier": event.recovery_modifier,
        "magnitude": event.magnitude,
        "boost": event.boost_percent,
        "resolution": event.resolution.name.lower(),
        "loggedAt": event.logged_at.isoformat(),
        "error": event.error,
    }


def _tier(value: str) -> DysregulationTier:
    return DysregulationTier[str(value).upper()]


def _resolution(value: str) -> Resolution:
    return Resolution[str(value).upper()]


def _field(data: Mapping[str, Any], key: str, parse: Callable[[Any], T]) -> T:
    if key not in data or data[key] is None:
        raise PoolStateError(f"Missing required field {key!r}", key)
    try:
        return parse(data[key])
    except (KeyError, TypeError, ValueError) as exc:
        raise PoolStateError(f"Invalid value for {key!r}: {data[key]!r}", key) from exc


def _optional(data: Mapping[str, Any], key: str, parse: Callable[[Any], T]) -> T | None:
    if data.get(key) is None:
        return None
    return _field(data, key, parse)


def _list(data: Mapping[str, Any], key: str) -> list:
    value = data.get(key) or []
    if not isinstance(value, list):
        raise PoolStateError(f"{key!r} must be a list", key)
    return value


def _object(value: Any, name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise PoolStateError(f"{name} must be an object, got {type(value).__name__}", name)
    return value


def _crash_from_dict(value: Any) -> Crash:
    data = _object(value, "crash")
    return Crash(
        amount=_field(data, "amount", float),
        recovery_minutes=_field(data, "recoveryMinutes", float),
        started_at=_field(data, "startedAt", parse_timestamp),
        expires_at=_field(data, "expiresAt", parse_timestamp),
    )


def _drain_from_dict(value: Any) -> DrainEvent:
    data = _object(value, "drainActivities[]")
    return DrainEvent(
        app=_field(data, "app", str),
        minutes=_field(data, "minutes", float),
        activity=_field(data, "activity", DrainActivity),
        category=_field(data, "category", ActivityCategory),
        mechanism=str(data.get("mechanism", "")),
        resolution=_field(data, "resolution", _resolution),
        base_rate=_field(data, "baseRate", float),
        base_impact=_field(data, "baseImpact", float),
        session_multiplier=_field(data, "sessionMultiplier", float),
        depletion_modifier=_field(data, "depletionModifier", float),
        magnitude=_field(data, "magnitude", float),
        crash=_crash_from_dict(data.get("crash")),
        logged_at=_field(data, "loggedAt", parse_timestamp),
    )


def _recharge_from_dict(value: Any) -> RechargeEvent:
    data = _object(value, "rechargeActivities[]")
    requirements = data.get("requirements") or {}
    return RechargeEvent(
        activity=_field(data, "activity", str),
        intensity=_optional(data, "intensity", str),
        kind=_optional(data, "type", RecoveryActivity),
        label=str(data.get("label", "")),
        mechanism=str(data.get("mechanism", "")),
        requirements=dict(_object(requirements, "requirements")),
        base_boost=_field(data, "baseBoost", float),
        recovery_modifier=_field(data, "recoveryModifier", float),
        magnitude=_field(data, "magnitude", float),
        resolution=_field(data, "resolution", _resolution),
        logged_at=_field(data, "loggedAt", parse_timestamp),
        error=_optional(data, "error", str),
    )
