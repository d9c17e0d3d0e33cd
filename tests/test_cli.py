"""Tests for the pool-engine command line."""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path

import pytest

from pool_engine.cli import main
from pool_engine.math.pool import initialize_daily_pool
from pool_engine.models.inputs import SleepInputs
from pool_engine.serialization.pool_state import from_json_string, to_json_string


@pytest.fixture
def state_file(tmp_path: Path) -> Path:
    state = initialize_daily_pool(
        SleepInputs(sleep_hours=8, yesterday_complete=True, streak_days=10),
        day=date(2026, 3, 2),
    )
    path = tmp_path / "day.json"
    path.write_text(to_json_string(state))
    return path


class TestCli:
    def test_morning(self, capsys: pytest.CaptureFixture[str]) -> None:
        code = main(["morning", "--sleep-hours", "8", "--yesterday-complete", "--streak", "10"])
        assert code == 0
        assert capsys.readouterr().out.strip() == "100"

    def test_morning_with_tier(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["morning", "--sleep-hours", "8", "--tier", "severe"]) == 0
        assert capsys.readouterr().out.strip() == "74"

    def test_classify(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["classify", "YouTube Shorts"]) == 0
        out = capsys.readouterr().out
        assert "youtube_shorts (pattern)" in out
        assert "13% per 30 min" in out

    def test_drain_then_current(
        self, state_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        code = main([
            "drain", "--state", str(state_file), "--app", "TikTok",
            "--minutes", "30", "--now", "2026-03-02T09:00", "--write",
        ])
        assert code == 0
        assert "-14%" in capsys.readouterr().out
        assert len(from_json_string(state_file.read_text()).drain_activities) == 1

        assert main(["current", "--state", str(state_file), "--now", "2026-03-02T10:00"]) == 0
        assert capsys.readouterr().out.startswith("Pool: 91%")

    def test_drain_without_write_leaves_file(self, state_file: Path) -> None:
        before = state_file.read_text()
        assert main([
            "drain", "--state", str(state_file), "--app", "Reddit", "--minutes", "15",
            "--now", "2026-03-02T09:00",
        ]) == 0
        assert state_file.read_text() == before

    def test_missing_state_file(self, tmp_path: Path) -> None:
        assert main(["current", "--state", str(tmp_path / "nope.json")]) == 1

    def test_bad_timestamp(self, state_file: Path) -> None:
        assert main(["current", "--state", str(state_file), "--now", "soon"]) == 2

    def test_bad_config(self, tmp_path: Path) -> None:
        config = tmp_path / "pool.json"
        config.write_text('{"crash_fraction": -1}')
        assert main(["--config", str(config), "classify", "tiktok"]) == 1

    def test_current_with_utc_timestamps(
        self, state_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main([
            "drain", "--state", str(state_file), "--app", "TikTok",
            "--minutes", "30", "--now", "2026-03-02T09:00:00Z", "--write",
        ]) == 0
        data = json.loads(state_file.read_text())
        data["pendingCrash"]["startedAt"] = "2026-03-02T09:00:00+00:00"
        data["pendingCrash"]["expiresAt"] = "2026-03-02T10:00:00+00:00"
        state_file.write_text(json.dumps(data))
        capsys.readouterr()

        assert main(["current", "--state", str(state_file)]) == 0
        assert capsys.readouterr().out.startswith("Pool: ")
        assert main(["current", "--state", str(state_file), "--now", "2026-03-02T10:00Z"]) == 0
