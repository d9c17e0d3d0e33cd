"""Tests for dysregulation scoring and tier classification."""

from __future__ import annotations

import pytest

from pool_engine.math.dysregulation import (
    assess_dysregulation_tier,
    dysregulation_score,
    screen_time_points,
    tier_modifiers,
)
from pool_engine.models.enums import (
    ActivityCategory,
    DrainActivity,
    DysregulationTier,
    ScreenTimeTrend,
)
from pool_engine.models.inputs import UsageSignals


class TestScreenTimePoints:
    @pytest.mark.parametrize(
        "minutes, points",
        [(0, 0), (120, 0), (121, 1), (240, 1), (241, 2), (360, 2), (361, 3), (900, 3)],
    )
    def test_bands_strictly_above(self, minutes: float, points: int) -> None:
        assert screen_time_points(minutes) == points


class TestAssessTier:
    def test_defaults_are_healthy(self) -> None:
        # Social primary category alone is one point
        assert dysregulation_score(UsageSignals()) == 1
        assert assess_dysregulation_tier(UsageSignals()) == DysregulationTier.HEALTHY

    def test_mild(self) -> None:
        signals = UsageSignals(
            avg_daily_screen_time_min=250,
            primary_app_category="work",
            difficulty_with_boredom=True,
        )
        assert dysregulation_score(signals) == 3
        assert assess_dysregulation_tier(signals) == DysregulationTier.MILD

    def test_moderate(self) -> None:
        signals = UsageSignals(avg_daily_screen_time_min=130, compulsive_use=True)
        assert dysregulation_score(signals) == 4
        assert assess_dysregulation_tier(signals) == DysregulationTier.MODERATE

    def test_severe(self) -> None:
        signals = UsageSignals(avg_daily_screen_time_min=400, reported_anhedonia=True)
        assert dysregulation_score(signals) == 7
        assert assess_dysregulation_tier(signals) == DysregulationTier.SEVERE

    def test_trend_moves_score(self) -> None:
        base = UsageSignals(avg_daily_screen_time_min=130)
        rising = UsageSignals(
            avg_daily_screen_time_min=130, screen_time_trend=ScreenTimeTrend.INCREASING
        )
        falling = UsageSignals(
            avg_daily_screen_time_min=130, screen_time_trend=ScreenTimeTrend.DECREASING
        )
        assert assess_dysregulation_tier(base) == DysregulationTier.MILD
        assert dysregulation_score(rising) == 3
        assert assess_dysregulation_tier(falling) == DysregulationTier.HEALTHY

    def test_category_accepts_enum_members(self) -> None:
        social = UsageSignals(primary_app_category=ActivityCategory.SOCIAL)
        gacha = UsageSignals(primary_app_category=DrainActivity.GAMING_GACHA)
        video = UsageSignals(primary_app_category=ActivityCategory.VIDEO)
        assert dysregulation_score(social) == 1
        assert dysregulation_score(gacha) == 1
        assert dysregulation_score(video) == 0

    def test_tiers_are_ordered(self) -> None:
        assert DysregulationTier.HEALTHY < DysregulationTier.MILD < DysregulationTier.SEVERE


class TestTierModifiers:
    def test_severe(self) -> None:
        mods = tier_modifiers(DysregulationTier.SEVERE)
        assert mods.depletion == pytest.approx(1.6)
        assert mods.recovery == pytest.approx(0.6)
        assert mods.capacity == pytest.approx(0.8)

    def test_monotone_across_tiers(self) -> None:
        mods = [tier_modifiers(t) for t in DysregulationTier]
        assert [m.depletion for m in mods] == sorted(m.depletion for m in mods)
        assert [m.recovery for m in mods] == sorted((m.recovery for m in mods), reverse=True)
