"""Tests for timestamp normalization."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from pool_engine.models.clock import local_naive, parse_timestamp

UTC_NINE = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)


class TestLocalNaive:
    def test_naive_unchanged(self) -> None:
        value = datetime(2026, 3, 2, 9, 0)
        assert local_naive(value) is value

    def test_aware_converted_to_local(self) -> None:
        converted = local_naive(UTC_NINE)
        assert converted.tzinfo is None
        assert converted == UTC_NINE.astimezone().replace(tzinfo=None)


class TestParseTimestamp:
    def test_naive(self) -> None:
        assert parse_timestamp("2026-03-02T09:00:00") == datetime(2026, 3, 2, 9, 0)

    @pytest.mark.parametrize(
        "text",
        ["2026-03-02T09:00:00Z", "2026-03-02T09:00:00.000Z", "2026-03-02T09:00:00+00:00"],
    )
    def test_utc_forms(self, text: str) -> None:
        assert parse_timestamp(text) == local_naive(UTC_NINE)

    def test_offset(self) -> None:
        eastern = timezone(timedelta(hours=-5))
        expected = local_naive(datetime(2026, 3, 2, 4, 0, tzinfo=eastern))
        assert parse_timestamp("2026-03-02T04:00:00-05:00") == expected

    @pytest.mark.parametrize("text", ["soon", "", "2026-13-01T00:00"])
    def test_invalid(self, text: str) -> None:
        with pytest.raises(ValueError):
            parse_timestamp(text)
