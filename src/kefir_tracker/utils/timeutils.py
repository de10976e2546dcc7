"""
Module: timeutils.py
Description: UTC timestamp helpers shared by models and services.

All persisted timestamps are ISO 8601 strings in UTC with millisecond
precision and a ``Z`` suffix, e.g. ``2024-01-15T10:30:00.000Z``. Event
sort keys embed these strings, so lexicographic order equals time order.
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_iso(value: datetime) -> str:
    """Format a datetime as a millisecond-precision UTC ISO string."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def now_iso() -> str:
    return to_iso(utc_now())


def parse_iso(value: str) -> datetime:
    """
    Parse an ISO 8601 string into an aware UTC datetime.

    Naive values are interpreted as UTC.

    Raises:
        ValueError: If the value is not a valid ISO 8601 datetime
    """
    if not isinstance(value, str) or not value:
        raise ValueError("must be an ISO 8601 datetime string")

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"

    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)
