"""Tests for the recovery model: type keys, legacy pairs, overrides and tiers."""

from __future__ import annotations

from datetime import datetime

import pytest

from pool_engine.math.recovery import (
    UNKNOWN_ACTIVITY_ERROR,
    log_recharge_activity,
    resolve_recharge,
)
from pool_engine.models.enums import DysregulationTier, RecoveryActivity, Resolution

NOON = datetime(2026, 3, 2, 12, 0)


class TestResolveRecharge:
    def test_type_key(self) -> None:
        resolved = resolve_recharge("cold_shower_2min")
        assert resolved.kind == RecoveryActivity.COLD_SHOWER_2MIN
        assert resolved.boost == pytest.approx(0.10)
        assert resolved.resolution == Resolution.EXACT

    def test_enum_member(self) -> None:
        resolved = resolve_recharge(RecoveryActivity.YOGA_NIDRA_30MIN)
        assert resolved.boost == pytest.approx(0.14)

    def test_legacy_pair(self) -> None:
        resolved = resolve_recharge("exercise", "moderate")
        assert resolved.resolution == Resolution.LEGACY
        assert resolved.boost == pytest.approx(0.07)
        assert resolved.kind is None

    def test_legacy_pair_case_insensitive(self) -> None:
        assert resolve_recharge("social", "inPerson").boost == pytest.approx(0.07)

    def test_type_key_wins_over_legacy(self) -> None:
        # An intensity alongside a detailed key is ignored
        resolved = resolve_recharge("meditation_20min", "short")
        assert resolved.resolution == Resolution.EXACT
        assert resolved.boost == pytest.approx(0.10)

    def test_unknown_activity(self) -> None:
        resolved = resolve_recharge("juggling", "light")
        assert resolved.resolution == Resolution.UNRESOLVED
        assert resolved.boost == 0.0
        assert resolved.error == UNKNOWN_ACTIVITY_ERROR

    def test_category_without_intensity_unresolved(self) -> None:
        assert resolve_recharge("exercise").resolution == Resolution.UNRESOLVED


class TestLogRechargeActivity:
    def test_healthy_boost(self) -> None:
        event = log_recharge_activity("cold_shower_2min", now=NOON)
        assert event.magnitude == pytest.approx(0.10)
        assert event.boost_percent == 10
        assert event.is_resolved
        assert event.error is None
        assert event.requirements["temperature"].startswith("50-60")

    def test_tier_dampens_recovery(self) -> None:
        event = log_recharge_activity(
            "cold_shower_2min", tier=DysregulationTier.MODERATE, now=NOON
        )
        assert event.recovery_modifier == pytest.approx(0.75)
        assert event.magnitude == pytest.approx(0.075)

    def test_unknown_still_produces_event(self) -> None:
        event = log_recharge_activity("juggling", now=NOON)
        assert not event.is_resolved
        assert event.magnitude == 0.0
        assert event.error == UNKNOWN_ACTIVITY_ERROR
        assert event.activity == "juggling"

    def test_override_fraction(self) -> None:
        event = log_recharge_activity("juggling", boost_override=0.05, now=NOON)
        assert event.resolution == Resolution.OVERRIDE
        assert event.magnitude == pytest.approx(0.05)
        assert event.error is None

    def test_override_percentage(self) -> None:
        event = log_recharge_activity("cold_shower_1min", boost_override=12, now=NOON)
        assert event.magnitude == pytest.approx(0.12)
        assert event.label == "Cold shower (1 min)"

    def test_negative_override_ignored(self) -> None:
        event = log_recharge_activity("cold_shower_1min", boost_override=-5, now=NOON)
        assert event.resolution == Resolution.EXACT
        assert event.magnitude == pytest.approx(0.08)
