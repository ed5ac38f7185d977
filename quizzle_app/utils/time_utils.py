"""
Centralized Utilities for Time Handling in Quizzle.
Goal: consistent timezone-aware UTC everywhere, including values read back from SQLite.
"""
from datetime import datetime, timezone
from typing import Optional, Union


def utcnow() -> datetime:
    """
    Get the current timezone-aware UTC datetime.
    Always use this instead of datetime.utcnow() or datetime.now().
    """
    return datetime.now(timezone.utc)


def ensure_utc(value: Union[datetime, str, None]) -> Optional[datetime]:
    """
    Normalize a datetime (or ISO string) to an aware UTC datetime.

    SQLite drops tzinfo on round-trip, so naive values are treated as UTC.
    """
    if value is None:
        return None

    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace('Z', '+00:00'))

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_iso(value: Optional[datetime]) -> Optional[str]:
    """ISO-8601 string in UTC, or None."""
    value = ensure_utc(value)
    return value.isoformat() if value else None
