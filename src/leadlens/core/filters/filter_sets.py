"""Immutable filter configurations for sessions and leads.

A filter set is never mutated: every user interaction produces a new value
via ``with_changes``, and downstream results are recomputed from it.
"""

from dataclasses import dataclass, field, fields, replace
from typing import Any

from leadlens.core.filters.predicates import ALL
from leadlens.core.models import VALID_SENDERS, DateRange
from leadlens.core.ranges import describe_range

SORT_ASCENDING = "asc"
SORT_DESCENDING = "desc"

# Fields that order results rather than narrow them
_SORT_FIELDS = frozenset({"sort_key", "sort_order"})


@dataclass(frozen=True)
class SessionFilters:
    """Filter and sort settings for the conversations view.

    Attributes:
        search: Text searched in session id, message texts and senders.
        date_range: Sessions overlapping this range are kept.
        min_messages: Minimum message count; 0 disables.
        sender: "user" or "bot" to require that sender; "all" disables.
        sort_key: One of "last_activity", "message_count", "session_id".
        sort_order: "asc" or "desc".
    """

    search: str = ""
    date_range: DateRange = field(default_factory=DateRange)
    min_messages: int = 0
    sender: str = ALL
    sort_key: str = "last_activity"
    sort_order: str = SORT_DESCENDING

    def with_changes(self, **changes: Any) -> "SessionFilters":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)


@dataclass(frozen=True)
class LeadFilters:
    """Filter and sort settings for the leads view.

    Attributes:
        search: Text searched in name, email, phone, message and source.
        date_range: Leads captured inside this range are kept.
        source: Exact source to keep; empty disables.
        message_presence: "all", "with_message" or "without_message".
        sort_key: One of "occurred_at", "name", "source".
        sort_order: "asc" or "desc".
    """

    search: str = ""
    date_range: DateRange = field(default_factory=DateRange)
    source: str = ""
    message_presence: str = ALL
    sort_key: str = "occurred_at"
    sort_order: str = SORT_DESCENDING

    def with_changes(self, **changes: Any) -> "LeadFilters":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)


@dataclass(frozen=True)
class FilterBadge:
    """Display chip for one active filter field."""

    name: str
    label: str
    value: str


_BADGE_LABELS = {
    "search": "Ricerca",
    "date_range": "Periodo",
    "min_messages": "Messaggi minimi",
    "sender": "Mittente",
    "source": "Fonte",
    "message_presence": "Messaggio",
}

_PRESENCE_LABELS = {
    "with_message": "Con messaggio",
    "without_message": "Senza messaggio",
}


def _is_field_active(name: str, value: Any) -> bool:
    if name == "search":
        return isinstance(value, str) and bool(value)
    if name == "date_range":
        return isinstance(value, DateRange) and not value.is_empty
    if name == "min_messages":
        return isinstance(value, int) and not isinstance(value, bool) and value > 0
    if name == "sender":
        return value in VALID_SENDERS
    if name == "source":
        return isinstance(value, str) and value != ""
    if name == "message_presence":
        return value in _PRESENCE_LABELS
    return False


def _badge_value(name: str, value: Any) -> str:
    if name == "date_range":
        return describe_range(value)
    if name == "message_presence":
        return _PRESENCE_LABELS[value]
    return str(value)


def active_fields(filters: SessionFilters | LeadFilters) -> list[str]:
    """Names of the filter fields that differ from their disabled value."""
    names = [f.name for f in fields(filters) if f.name not in _SORT_FIELDS]
    return [name for name in names if _is_field_active(name, getattr(filters, name))]


def active_filter_count(filters: SessionFilters | LeadFilters) -> int:
    """Number of active filter fields, sort settings excluded."""
    return len(active_fields(filters))


def active_filter_badges(filters: SessionFilters | LeadFilters) -> list[FilterBadge]:
    """One badge per active filter field, in field declaration order."""
    return [
        FilterBadge(
            name=name,
            label=_BADGE_LABELS[name],
            value=_badge_value(name, getattr(filters, name)),
        )
        for name in active_fields(filters)
    ]
