"""Daily time series over lead and conversation events."""

from collections.abc import Iterable
from datetime import datetime
from typing import Protocol

from leadlens.core.dates import day_key, enumerate_days
from leadlens.core.models import DailyBucket, DateRange


class RangeNotResolvedError(ValueError):
    """Raised when a time series is requested without both range bounds."""


class TimedEvent(Protocol):
    """Anything carrying an ``occurred_at`` instant."""

    @property
    def occurred_at(self) -> datetime: ...


def _count_by_day(events: Iterable[TimedEvent], days: set[str]) -> dict[str, int]:
    counts: dict[str, int] = {}
    for event in events:
        key = day_key(event.occurred_at)
        # Events outside the enumerated days are dropped
        if key in days:
            counts[key] = counts.get(key, 0) + 1
    return counts


def aggregate(
    lead_events: Iterable[TimedEvent],
    conversation_events: Iterable[TimedEvent],
    date_range: DateRange,
) -> list[DailyBucket]:
    """Count events per calendar day across a resolved range.

    Every day from the start day to the end day is present, including days
    without events.

    Args:
        lead_events: Lead records (or anything with ``occurred_at``).
        conversation_events: Message events (or anything with ``occurred_at``).
        date_range: Range with both bounds set.

    Returns:
        One DailyBucket per day, ascending.

    Raises:
        RangeNotResolvedError: If either bound of the range is missing.
    """
    if date_range.start is None or date_range.end is None:
        raise RangeNotResolvedError("date range must have both start and end")
    keys = enumerate_days(date_range.start, date_range.end)
    day_set = set(keys)
    lead_counts = _count_by_day(lead_events, day_set)
    conversation_counts = _count_by_day(conversation_events, day_set)
    return [
        DailyBucket(
            day=key,
            lead_count=lead_counts.get(key, 0),
            conversation_count=conversation_counts.get(key, 0),
        )
        for key in keys
    ]


def series_totals(buckets: Iterable[DailyBucket]) -> tuple[int, int]:
    """Sum a series into (lead_total, conversation_total)."""
    leads = 0
    conversations = 0
    for bucket in buckets:
        leads += bucket.lead_count
        conversations += bucket.conversation_count
    return leads, conversations
