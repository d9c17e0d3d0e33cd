"""Tests for PoolState JSON serialization."""

from __future__ import annotations

import json
from datetime import datetime, timezone

import pytest

from pool_engine.exceptions import PoolStateError
from pool_engine.math.depletion import log_drain_activity
from pool_engine.math.pool import calculate_current_pool, initialize_daily_pool
from pool_engine.math.recovery import log_recharge_activity
from pool_engine.models.clock import local_naive
from pool_engine.models.enums import DysregulationTier, SleepQuality
from pool_engine.models.inputs import SleepInputs
from pool_engine.models.pool_state import PoolState
from pool_engine.serialization.pool_state import (
    from_json_string,
    pool_state_from_dict,
    pool_state_to_dict,
    to_json_string,
)


@pytest.fixture
def busy_day() -> PoolState:
    """A day with a drain, a resolved recharge and an unresolved one."""
    woke = datetime(2026, 3, 2, 6, 30)
    state = initialize_daily_pool(
        SleepInputs(
            sleep_hours=6.5,
            sleep_quality=SleepQuality.LOW_REM,
            dysregulation_tier=DysregulationTier.MILD,
            capacity_expansion=0.08,
        ),
        woke_at=woke,
    )
    state = state.with_drain(
        log_drain_activity(
            "Instagram", 25, tier=DysregulationTier.MILD, now=datetime(2026, 3, 2, 8, 10)
        )
    )
    state = state.with_recharge(
        log_recharge_activity("social", "inPerson", now=datetime(2026, 3, 2, 12, 0))
    )
    return state.with_recharge(
        log_recharge_activity("sunlight_sunny_10min", now=datetime(2026, 3, 2, 7, 0))
    )


class TestToDict:
    def test_camel_case_keys(self, busy_day: PoolState) -> None:
        data = pool_state_to_dict(busy_day)
        assert {"morningLevel", "currentLevel", "drainActivities", "pendingCrash"} <= set(data)
        assert data["metadata"]["sleepQuality"] == "lowREM"
        assert data["metadata"]["dysregulationTier"] == "mild"

    def test_timestamps_are_iso(self, busy_day: PoolState) -> None:
        data = pool_state_to_dict(busy_day)
        assert data["date"] == "2026-03-02"
        assert data["wokeAt"] == "2026-03-02T06:30:00"
        assert data["drainActivities"][0]["loggedAt"] == "2026-03-02T08:10:00"

    def test_event_tags(self, busy_day: PoolState) -> None:
        data = pool_state_to_dict(busy_day)
        drain = data["drainActivities"][0]
        assert drain["activity"] == "instagram"
        assert drain["resolution"] == "exact"
        assert drain["impact"] == busy_day.drain_activities[0].impact_percent
        legacy = data["rechargeActivities"][0]
        assert legacy["type"] is None
        assert legacy["resolution"] == "legacy"

    def test_json_string_is_valid(self, busy_day: PoolState) -> None:
        assert json.loads(to_json_string(busy_day))["morningLevel"] == busy_day.morning_level


class TestFromDict:
    def test_round_trip(self, busy_day: PoolState) -> None:
        assert from_json_string(to_json_string(busy_day)) == busy_day

    def test_minimal_record(self) -> None:
        state = pool_state_from_dict(
            {"date": "2026-03-02", "morningLevel": 72, "currentLevel": 64}
        )
        assert state.morning_level == 72
        assert state.drain_activities == ()
        assert state.pending_crash is None
        assert state.metadata.sleep_quality == SleepQuality.NORMAL_REM
        assert state.metadata.dysregulation_tier == DysregulationTier.HEALTHY

    def test_missing_field(self) -> None:
        with pytest.raises(PoolStateError) as exc_info:
            pool_state_from_dict({"date": "2026-03-02", "currentLevel": 64})
        assert exc_info.value.field_name == "morningLevel"

    def test_bad_date(self) -> None:
        with pytest.raises(PoolStateError, match="date"):
            pool_state_from_dict({"date": "yesterday", "morningLevel": 1, "currentLevel": 1})

    def test_unknown_activity_tag(self, busy_day: PoolState) -> None:
        data = pool_state_to_dict(busy_day)
        data["drainActivities"][0]["activity"] = "myspace"
        with pytest.raises(PoolStateError) as exc_info:
            pool_state_from_dict(data)
        assert exc_info.value.field_name == "activity"

    def test_unknown_tier(self, busy_day: PoolState) -> None:
        data = pool_state_to_dict(busy_day)
        data["metadata"]["dysregulationTier"] = "extreme"
        with pytest.raises(PoolStateError):
            pool_state_from_dict(data)

    def test_not_an_object(self) -> None:
        with pytest.raises(PoolStateError):
            pool_state_from_dict(["2026-03-02"])

    def test_invalid_json(self) -> None:
        with pytest.raises(PoolStateError, match="Invalid PoolState JSON"):
            from_json_string("{not json")


class TestOffsetTimestamps:
    @pytest.fixture
    def utc_record(self, busy_day: PoolState) -> dict:
        """busy_day as the host app stores it: UTC timestamps with a Z suffix."""
        data = pool_state_to_dict(busy_day)
        data["wokeAt"] = "2026-03-02T06:30:00.000Z"
        data["pendingCrash"]["startedAt"] = "2026-03-02T08:10:00.000Z"
        data["pendingCrash"]["expiresAt"] = "2026-03-02T09:10:00+00:00"
        data["drainActivities"][0]["loggedAt"] = "2026-03-02T08:10:00Z"
        return data

    def test_parsed_as_naive_local(self, utc_record: dict) -> None:
        state = pool_state_from_dict(utc_record)
        assert state.woke_at.tzinfo is None
        assert state.pending_crash.started_at.tzinfo is None
        assert state.woke_at == local_naive(datetime(2026, 3, 2, 6, 30, tzinfo=timezone.utc))

    def test_calculation_with_default_now(self, utc_record: dict) -> None:
        state = from_json_string(json.dumps(utc_record))
        assert 0 <= calculate_current_pool(state) <= 108
