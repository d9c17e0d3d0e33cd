"""Tests for the activity catalogs and free-text classification."""

from __future__ import annotations

import logging

import pytest

from pool_engine.catalog.activities import (
    DEPLETION_RATES,
    activity_from_key,
    classify_activity,
)
from pool_engine.catalog.recovery import LEGACY_RECHARGE, RECOVERY_ACTIVITIES, legacy_key
from pool_engine.models.enums import DrainActivity, RecoveryActivity, Resolution


class TestCatalogCompleteness:
    def test_every_drain_activity_has_a_rate(self) -> None:
        assert set(DEPLETION_RATES) == set(DrainActivity)

    def test_rates_within_range(self) -> None:
        for activity, entry in DEPLETION_RATES.items():
            assert 0.0 <= entry.rate <= 0.14, activity

    def test_tiktok_is_most_draining(self) -> None:
        assert max(DEPLETION_RATES.values(), key=lambda e: e.rate).label == "TikTok"

    def test_every_recovery_activity_has_a_boost(self) -> None:
        assert set(RECOVERY_ACTIVITIES) == set(RecoveryActivity)
        assert all(entry.boost > 0 for entry in RECOVERY_ACTIVITIES.values())

    def test_legacy_keys_are_lowercase(self) -> None:
        for category, intensity in LEGACY_RECHARGE:
            assert category == category.lower()
            assert intensity == intensity.lower()

    def test_legacy_key_normalization(self) -> None:
        assert legacy_key("Social", "deepConversation") == ("social", "deepconversation")
        assert legacy_key("exercise", None) is None


class TestActivityFromKey:
    def test_known_key(self) -> None:
        assert activity_from_key(" Gaming_MMO ") == DrainActivity.GAMING_MMO

    def test_unknown_key(self) -> None:
        assert activity_from_key("doomscrolling") is None


class TestClassifyActivity:
    @pytest.mark.parametrize(
        "name, activity",
        [
            ("tiktok", DrainActivity.TIKTOK),
            ("TikTok", DrainActivity.TIKTOK),
            ("instagram_reels", DrainActivity.INSTAGRAM_REELS),
            ("focused_work", DrainActivity.FOCUSED_WORK),
        ],
    )
    def test_exact_keys(self, name: str, activity: DrainActivity) -> None:
        result = classify_activity(name)
        assert result.activity == activity
        assert result.resolution == Resolution.EXACT

    @pytest.mark.parametrize(
        "name, activity",
        [
            ("YouTube Shorts", DrainActivity.YOUTUBE_SHORTS),
            ("YouTube Kids", DrainActivity.YOUTUBE),
            ("Reels", DrainActivity.INSTAGRAM_REELS),
            ("WhatsApp", DrainActivity.MESSAGES),
            ("Outlook", DrainActivity.EMAIL),
            ("Genshin Impact", DrainActivity.GAMING_GACHA),
            ("Valorant", DrainActivity.GAMING_COMPETITIVE),
            ("Wordle", DrainActivity.GAMING_PUZZLE),
        ],
    )
    def test_keyword_patterns(self, name: str, activity: DrainActivity) -> None:
        result = classify_activity(name)
        assert result.activity == activity
        assert result.resolution == Resolution.PATTERN

    @pytest.mark.parametrize("name", ["Calculator", "", "   ", None])
    def test_unrecognized_defaults_to_utility(self, name: str | None) -> None:
        result = classify_activity(name)
        assert result.activity == DrainActivity.UTILITY
        assert result.is_default

    def test_custom_mapping_beats_exact_key(self) -> None:
        result = classify_activity("TikTok", {"tiktok": "reading_book"})
        assert result.activity == DrainActivity.READING_BOOK
        assert result.resolution == Resolution.CUSTOM_MAPPING

    def test_custom_mapping_accepts_enum(self) -> None:
        result = classify_activity("Clash Royale", {"Clash Royale": DrainActivity.GAMING_GACHA})
        assert result.activity == DrainActivity.GAMING_GACHA

    def test_custom_mapping_to_unknown_key(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="pool_engine.catalog.activities"):
            result = classify_activity("My App", {"my app": "not_a_key"})
        assert result.activity == DrainActivity.UTILITY
        assert result.resolution == Resolution.CUSTOM_MAPPING
        assert "not_a_key" in caplog.text

    def test_injected_patterns(self) -> None:
        patterns = ((DrainActivity.NETFLIX, ("plex",)),)
        assert classify_activity("Plex", patterns=patterns).activity == DrainActivity.NETFLIX
        assert classify_activity("Netflix Kids", patterns=patterns).is_default
