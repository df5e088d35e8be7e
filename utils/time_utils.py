"""
Time utilities for tracking events.

Pure helpers shared by the validator, anomaly detector and timeline builder.
All reasoning uses timestamps from the events themselves, never the clock.
"""

import math
from datetime import datetime, timezone
from typing import Any, Iterable, Optional, TypeVar

T = TypeVar("T")


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves toward +infinity.

    Python's round() uses banker's rounding (round(2.5) == 2);
    delays and gaps are reported the conventional way:
    - 2.5 → 3
    - -2.5 → -2
    """
    return math.floor(value + 0.5)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse an ISO 8601 timestamp into an aware UTC datetime.

    Accepts a trailing "Z". Values without an offset are read as UTC.

    Args:
        value: Timestamp string (anything else yields None)

    Returns:
        datetime in UTC, or None if the value cannot be parsed
    """
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None

    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"

    try:
        parsed = datetime.fromisoformat(text)
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        # Offsets at the edges of the calendar can overflow on conversion
        return parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        return None


def is_utc_timestamp(value: Any) -> bool:
    """
    Check a timestamp is unambiguous UTC ISO 8601.

    Must have a date/time separator, end with the Z marker and parse:
    - "2024-11-15T08:30:00Z" → True
    - "2024-11-15T08:30:00" → False (no UTC marker)
    - "2024-11-15 08:30:00Z" → False (no T separator)
    """
    if not isinstance(value, str):
        return False
    if "T" not in value or not value.endswith("Z"):
        return False
    return parse_timestamp(value) is not None


def calculate_delay_minutes(actual: Any, expected: Any) -> Optional[int]:
    """
    Minutes between expected and actual time (positive = late).

    Args:
        actual: Actual timestamp (string or datetime)
        expected: Expected timestamp (string or datetime), may be missing

    Returns:
        Whole minutes, or None if either side is missing or unparseable
    """
    if not expected:
        return None

    actual_dt = actual if isinstance(actual, datetime) else parse_timestamp(actual)
    expected_dt = expected if isinstance(expected, datetime) else parse_timestamp(expected)
    if actual_dt is None or expected_dt is None:
        return None

    return round_half_up((actual_dt - expected_dt).total_seconds() / 60)


def calculate_gap_hours(earlier: datetime, later: datetime) -> float:
    """Signed hours from earlier to later."""
    return (later - earlier).total_seconds() / 3600


def sort_chronologically(events: Iterable[T]) -> list[T]:
    """
    Sort events by occurred_at, oldest first.

    Stable: events with the same timestamp keep their batch order.
    """
    return sorted(events, key=lambda event: event.occurred_at)
