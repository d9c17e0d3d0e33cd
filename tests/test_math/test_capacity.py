"""Tests for capacity expansion from exercise consistency."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import numpy as np
import pytest

from pool_engine.config import DEFAULT_CONFIG
from pool_engine.math.capacity import (
    calculate_capacity_expansion,
    consecutive_qualifying_weeks,
    expansion_for_weeks,
    pool_ceiling,
    weekly_session_counts,
)
from pool_engine.models.inputs import ExerciseSession

NOW = datetime(2026, 3, 2, 12, 0)


def _sessions(per_week: list[int]) -> list[ExerciseSession]:
    """Sessions spread inside each trailing week; index 0 is the most recent week."""
    sessions = []
    for week, count in enumerate(per_week):
        for i in range(count):
            sessions.append(ExerciseSession(NOW - timedelta(days=7 * week + i, hours=1)))
    return sessions


class TestWeeklyCounts:
    def test_bins_by_trailing_week(self) -> None:
        counts = weekly_session_counts(_sessions([3, 1, 0, 2]), NOW, 4)
        np.testing.assert_array_equal(counts, [3, 1, 0, 2])

    def test_length_matches_lookback(self) -> None:
        assert len(weekly_session_counts(_sessions([3]), NOW, 8)) == 8
        assert len(weekly_session_counts([], NOW, 8)) == 8

    def test_ignores_future_and_out_of_window(self) -> None:
        history = [
            ExerciseSession(NOW + timedelta(hours=1)),
            ExerciseSession(NOW),
            ExerciseSession(NOW - timedelta(days=60)),
        ]
        assert weekly_session_counts(history, NOW, 8).sum() == 0

    def test_week_start_is_inclusive(self) -> None:
        counts = weekly_session_counts([ExerciseSession(NOW - timedelta(days=7))], NOW, 2)
        np.testing.assert_array_equal(counts, [1, 0])
        counts = weekly_session_counts(
            [ExerciseSession(NOW - timedelta(days=7, seconds=1))], NOW, 2
        )
        np.testing.assert_array_equal(counts, [0, 1])


class TestConsecutiveWeeks:
    def test_counts_from_most_recent(self) -> None:
        assert consecutive_qualifying_weeks([3, 4, 3, 1, 5], 3) == 3

    def test_recent_shortfall_breaks_streak(self) -> None:
        assert consecutive_qualifying_weeks([2, 5, 5, 5], 3) == 0

    def test_all_qualifying(self) -> None:
        assert consecutive_qualifying_weeks([3, 3, 3], 3) == 3


class TestExpansionSteps:
    @pytest.mark.parametrize(
        "weeks, expected",
        [(0, 0.0), (1, 0.05), (2, 0.08), (3, 0.08), (4, 0.12), (5, 0.12), (6, 0.16), (8, 0.20)],
    )
    def test_step_table(self, weeks: int, expected: float) -> None:
        assert expansion_for_weeks(weeks) == pytest.approx(expected)

    def test_beyond_top_step_reaches_ceiling(self) -> None:
        assert expansion_for_weeks(9) == pytest.approx(0.25)


class TestCalculateCapacityExpansion:
    def test_no_history(self) -> None:
        assert calculate_capacity_expansion([], now=NOW) == 0.0

    def test_six_consistent_weeks(self) -> None:
        assert calculate_capacity_expansion(_sessions([3] * 6), now=NOW) == pytest.approx(0.16)

    def test_below_minimum_frequency(self) -> None:
        assert calculate_capacity_expansion(_sessions([2] * 8), now=NOW) == 0.0

    def test_broken_streak_counts_only_recent_run(self) -> None:
        history = _sessions([3, 2, 3, 3, 3, 3])
        assert calculate_capacity_expansion(history, now=NOW) == pytest.approx(0.05)

    def test_full_lookback(self) -> None:
        assert calculate_capacity_expansion(_sessions([4] * 8), now=NOW) == pytest.approx(0.20)

    def test_longer_lookback_reaches_absolute_ceiling(self) -> None:
        config = DEFAULT_CONFIG.with_overrides({"capacity_lookback_weeks": 10})
        history = _sessions([3] * 10)
        assert calculate_capacity_expansion(history, now=NOW, config=config) == pytest.approx(0.25)

    def test_never_exceeds_ceiling(self) -> None:
        history = _sessions([6] * 8)
        assert 0.0 <= calculate_capacity_expansion(history, now=NOW) <= 0.25

    def test_offset_aware_sessions(self) -> None:
        history = [ExerciseSession(s.timestamp.astimezone()) for s in _sessions([3] * 6)]
        assert calculate_capacity_expansion(history, now=NOW) == pytest.approx(0.16)

    def test_offset_aware_sessions_with_default_now(self) -> None:
        recent = datetime.now(timezone.utc) - timedelta(days=1)
        assert calculate_capacity_expansion([ExerciseSession(recent)]) == 0.0


class TestPoolCeiling:
    def test_nominal(self) -> None:
        assert pool_ceiling(0.0) == 1.0

    def test_bounded(self) -> None:
        assert pool_ceiling(0.16) == pytest.approx(1.16)
        assert pool_ceiling(0.9) == pytest.approx(1.25)
        assert pool_ceiling(-0.3) == 1.0
