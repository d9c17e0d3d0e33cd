"""Timestamp normalization.

The engine compares timestamps from stored records, caller input and
``datetime.now()``. All of them are reduced to naive local time so the
arithmetic never mixes offset-aware and naive values.
"""

from __future__ import annotations

from datetime import datetime


def local_naive(value: datetime) -> datetime:
    """Convert an offset-aware datetime to naive local time; naive values pass through."""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp, accepting a trailing ``Z``, into naive local time.

    Raises:
        ValueError: If *value* is not an ISO-8601 timestamp.
    """
    text = str(value)
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    return local_naive(datetime.fromisoformat(text))
