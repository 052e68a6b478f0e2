"""Grouping of message events into conversation sessions."""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from leadlens.core.models import MessageEvent, SessionSummary


@dataclass(frozen=True)
class SessionStats:
    """Headline numbers for a set of sessions.

    Attributes:
        total_sessions: Number of sessions.
        total_messages: Number of messages across all sessions.
        average_messages: Messages per session, rounded half-up.
    """

    total_sessions: int
    total_messages: int
    average_messages: int


def group_by_session(events: Iterable[MessageEvent]) -> dict[str, SessionSummary]:
    """Partition events into sessions in a single pass.

    Events are expected in ascending ``occurred_at`` order and are not
    re-sorted: each session keeps the arrival order of its messages.

    Args:
        events: Message events of one tenant.

    Returns:
        Mapping of session id to SessionSummary, in order of first
        appearance. Empty input gives an empty mapping.
    """
    buckets: dict[str, list[MessageEvent]] = {}
    for event in events:
        buckets.setdefault(event.session_id, []).append(event)
    return {
        session_id: SessionSummary(session_id=session_id, messages=tuple(messages))
        for session_id, messages in buckets.items()
    }


def session_stats(sessions: Iterable[SessionSummary]) -> SessionStats:
    """Compute totals and the average session length."""
    total_sessions = 0
    total_messages = 0
    for session in sessions:
        total_sessions += 1
        total_messages += session.count
    if total_sessions == 0:
        return SessionStats(total_sessions=0, total_messages=0, average_messages=0)
    average = (Decimal(total_messages) / Decimal(total_sessions)).quantize(
        Decimal(1), rounding=ROUND_HALF_UP
    )
    return SessionStats(
        total_sessions=total_sessions,
        total_messages=total_messages,
        average_messages=int(average),
    )
