"""Circadian modifier: an additive time-of-day adjustment to the pool."""

from __future__ import annotations

from dataclasses import dataclass

from pool_engine.catalog.baselines import CircadianWindow, validate_windows
from pool_engine.config import DEFAULT_CONFIG


@dataclass(frozen=True)
class CircadianReading:
    modifier: float
    label: str


def get_circadian_modifier(
    hour: int,
    windows: tuple[CircadianWindow, ...] | None = None,
) -> CircadianReading:
    """Return the modifier and label for the window containing *hour*.

    Hours outside 0-23 are reduced modulo 24. With well-formed windows
    exactly one matches; a gappy custom table yields a zero "Unknown" reading.
    """
    if windows is None:
        windows = DEFAULT_CONFIG.circadian_windows
    hour = int(hour) % 24
    for window in windows:
        if window.contains(hour):
            return CircadianReading(window.modifier, window.label)
    return CircadianReading(0.0, "Unknown")


__all__ = ["CircadianReading", "get_circadian_modifier", "validate_windows"]
