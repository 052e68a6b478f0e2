"""Predicate composition for sessions and leads."""

from collections.abc import Iterable, Sequence
from typing import Any, TypeVar

from leadlens.core.filters.filter_sets import LeadFilters, SessionFilters
from leadlens.core.filters.predicates import (
    ALL,
    PRESENCE_MODES,
    CategoricalPredicate,
    DateContainmentPredicate,
    DateOverlapPredicate,
    MinimumPredicate,
    Predicate,
    PresencePredicate,
    SubstringPredicate,
)
from leadlens.core.models import VALID_SENDERS, DateRange, LeadRecord, SessionSummary

R = TypeVar("R")


def apply_filters(
    records: Iterable[R], predicates: Sequence[Predicate[Any]]
) -> list[R]:
    """Keep the records that satisfy every active predicate.

    Inactive predicates are skipped, so with no active predicate the result
    equals the input in content and order.

    Args:
        records: Records to narrow. Not modified.
        predicates: Criteria combined with logical AND.

    Returns:
        A new list of matching records in input order.
    """
    active = [p for p in predicates if p.is_active]
    return [r for r in records if all(p.evaluate(r) for p in active)]


def _safe_text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _safe_range(value: Any) -> DateRange:
    return value if isinstance(value, DateRange) else DateRange()


def _safe_minimum(value: Any) -> int:
    # bool is an int subclass but never a meaningful threshold
    if isinstance(value, bool) or not isinstance(value, int):
        return 0
    return max(value, 0)


def _safe_sender(value: Any) -> str:
    return value if value in VALID_SENDERS else ALL


def _safe_presence(value: Any) -> str:
    return value if value in PRESENCE_MODES else ALL


def _session_texts(session: SessionSummary) -> Iterable[str]:
    yield session.session_id
    for message in session.messages:
        yield message.text
        yield message.sender


def _session_senders(session: SessionSummary) -> Iterable[str]:
    return (message.sender for message in session.messages)


def _lead_texts(lead: LeadRecord) -> Iterable[str]:
    return (lead.name, lead.email, lead.phone, lead.message, lead.source)


def session_predicates(filters: SessionFilters) -> list[Predicate[SessionSummary]]:
    """Build the ordered predicate list for a session filter set."""
    return [
        SubstringPredicate(text=_safe_text(filters.search), fields=(_session_texts,)),
        DateOverlapPredicate(
            date_range=_safe_range(filters.date_range),
            start_of=lambda s: s.first_at,
            end_of=lambda s: s.last_at,
        ),
        MinimumPredicate(
            minimum=_safe_minimum(filters.min_messages),
            value_of=lambda s: s.count,
        ),
        CategoricalPredicate(
            selected=_safe_sender(filters.sender),
            values_of=_session_senders,
        ),
    ]


def lead_predicates(filters: LeadFilters) -> list[Predicate[LeadRecord]]:
    """Build the ordered predicate list for a lead filter set."""
    return [
        SubstringPredicate(text=_safe_text(filters.search), fields=(_lead_texts,)),
        DateContainmentPredicate(
            date_range=_safe_range(filters.date_range),
            instant_of=lambda lead: lead.occurred_at,
        ),
        CategoricalPredicate(
            selected=_safe_text(filters.source),
            values_of=lambda lead: (lead.source,),
            disabled_values=frozenset({""}),
        ),
        PresencePredicate(
            mode=_safe_presence(filters.message_presence),
            value_of=lambda lead: lead.message,
        ),
    ]


def filter_sessions(
    sessions: Iterable[SessionSummary], filters: SessionFilters
) -> list[SessionSummary]:
    """Narrow sessions with every active field of ``filters``."""
    return apply_filters(sessions, session_predicates(filters))


def filter_leads(leads: Iterable[LeadRecord], filters: LeadFilters) -> list[LeadRecord]:
    """Narrow leads with every active field of ``filters``."""
    return apply_filters(leads, lead_predicates(filters))
