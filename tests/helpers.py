"""Helpers shared by test modules."""

from datetime import UTC, datetime


def utc(year: int, month: int, day: int, hour: int = 12, minute: int = 0) -> datetime:
    """Shorthand for an aware UTC datetime."""
    return datetime(year, month, day, hour, minute, tzinfo=UTC)
