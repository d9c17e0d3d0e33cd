"""Command-line access to the pool engine.

Usage:
    pool-engine morning --sleep-hours 8 --quality normalREM --yesterday-complete --streak 10
    pool-engine current --state day.json [--now 2026-03-02T10:00]
    pool-engine drain --state day.json --app TikTok --minutes 30 [--now ...] [--write]
    pool-engine classify "Clash Royale"
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Sequence

from pool_engine.catalog.activities import classify_activity
from pool_engine.config import LOG_LEVEL, PoolConfig, load_config
from pool_engine.engine import PoolEngine
from pool_engine.exceptions import PoolEngineError, PoolStateError
from pool_engine.math.sleep import calculate_morning_pool
from pool_engine.models.clock import parse_timestamp
from pool_engine.models.enums import DysregulationTier, SleepQuality
from pool_engine.models.inputs import SleepInputs
from pool_engine.models.level import to_percent
from pool_engine.models.pool_state import PoolState
from pool_engine.serialization.pool_state import from_json_string, to_json_string

logger = logging.getLogger(__name__)


def _parse_now(value: str | None) -> datetime | None:
    if value is None:
        return None
    try:
        return parse_timestamp(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an ISO-8601 timestamp: {value!r}") from None


def _read_state(path: Path) -> PoolState:
    try:
        text = path.read_text()
    except FileNotFoundError:
        raise PoolStateError(f"State file not found: {path}") from None
    return from_json_string(text)


def _cmd_morning(args: argparse.Namespace, config: PoolConfig) -> int:
    inputs = SleepInputs(
        sleep_hours=args.sleep_hours,
        sleep_quality=SleepQuality(args.quality),
        yesterday_complete=args.yesterday_complete,
        streak_days=args.streak,
        dysregulation_tier=DysregulationTier[args.tier.upper()],
        capacity_expansion=args.capacity,
    )
    print(calculate_morning_pool(inputs, config))
    return 0


def _cmd_current(args: argparse.Namespace, config: PoolConfig) -> int:
    state = _read_state(args.state)
    trace = PoolEngine(config).trace(state, _parse_now(args.now))
    print(f"Pool: {trace.level}%")
    print(f"  morning      {to_percent(trace.morning):>4d}%")
    print(f"  drains       {-to_percent(trace.drain_total):>4d}%")
    print(f"  recharges    {to_percent(trace.recharge_total):>4d}%")
    print(f"  crash        {-to_percent(trace.crash_remaining):>4d}%")
    print(f"  circadian    {to_percent(trace.circadian_modifier):>4d}%  ({trace.circadian_label})")
    print(f"  micro        {to_percent(trace.micro_recovery):>4d}%")
    return 0


def _cmd_drain(args: argparse.Namespace, config: PoolConfig) -> int:
    state = _read_state(args.state)
    new_state, event = PoolEngine(config).log_drain(
        state, args.app, args.minutes, now=_parse_now(args.now)
    )
    print(
        f"{event.app} -> {event.activity.value} ({event.resolution.name.lower()}): "
        f"-{event.impact_percent}%, crash {event.crash_percent}%, "
        f"pool {new_state.current_level}%"
    )
    if args.write:
        args.state.write_text(to_json_string(new_state))
        logger.info("Wrote updated state to %s", args.state)
    return 0


def _cmd_classify(args: argparse.Namespace, config: PoolConfig) -> int:
    classification = classify_activity(args.name, patterns=config.depletion_patterns)
    rate = config.depletion_rate(classification.activity)
    print(
        f"{args.name} -> {classification.activity.value} "
        f"({classification.resolution.name.lower()}): "
        f"{rate.label}, {to_percent(rate.rate)}% per 30 min"
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pool-engine", description="Motivation pool calculator")
    parser.add_argument("--config", type=Path, default=None, help="JSON config override file")
    sub = parser.add_subparsers(dest="command", required=True)

    morning = sub.add_parser("morning", help="Morning pool level from last night's sleep")
    morning.add_argument("--sleep-hours", type=float, default=7.0)
    morning.add_argument(
        "--quality", choices=[q.value for q in SleepQuality], default=SleepQuality.NORMAL_REM.value
    )
    morning.add_argument("--yesterday-complete", action="store_true")
    morning.add_argument("--streak", type=int, default=0)
    morning.add_argument(
        "--tier", choices=[t.name.lower() for t in DysregulationTier], default="healthy"
    )
    morning.add_argument("--capacity", type=float, default=0.0, help="Capacity expansion fraction")
    morning.set_defaults(func=_cmd_morning)

    current = sub.add_parser("current", help="Current pool level for a stored day")
    current.add_argument("--state", type=Path, required=True)
    current.add_argument("--now", default=None, help="Evaluation time (ISO-8601)")
    current.set_defaults(func=_cmd_current)

    drain = sub.add_parser("drain", help="Log a draining session against a stored day")
    drain.add_argument("--state", type=Path, required=True)
    drain.add_argument("--app", required=True)
    drain.add_argument("--minutes", type=float, required=True)
    drain.add_argument("--now", default=None, help="Logging time (ISO-8601)")
    drain.add_argument("--write", action="store_true", help="Save the updated state back")
    drain.set_defaults(func=_cmd_drain)

    classify = sub.add_parser("classify", help="Show how an app name is classified")
    classify.add_argument("name")
    classify.set_defaults(func=_cmd_classify)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
        return args.func(args, config)
    except argparse.ArgumentTypeError as exc:
        logger.error("%s", exc)
        return 2
    except PoolEngineError as exc:
        logger.error("%s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
