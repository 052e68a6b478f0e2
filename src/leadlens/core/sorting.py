"""Stable ordering of sessions and leads.

Sorting goes through an explicit comparator: descending order negates the
comparison instead of reversing the sorted list, so records with equal keys
keep their input order in both directions.
"""

from collections.abc import Callable, Iterable
from functools import cmp_to_key
from typing import Any, TypeVar

from leadlens.core.filters.filter_sets import SORT_ASCENDING, SORT_DESCENDING
from leadlens.core.models import LeadRecord, SessionSummary

R = TypeVar("R")

KeyFunc = Callable[[Any], Any]

SESSION_SORT_KEYS: dict[str, KeyFunc] = {
    "last_activity": lambda s: s.last_at,
    "message_count": lambda s: s.count,
    "session_id": lambda s: s.session_id.casefold(),
}

LEAD_SORT_KEYS: dict[str, KeyFunc] = {
    "occurred_at": lambda lead: lead.occurred_at,
    "name": lambda lead: lead.name.casefold(),
    "source": lambda lead: lead.source.casefold(),
}

VALID_ORDERS = frozenset({SORT_ASCENDING, SORT_DESCENDING})


def make_comparator(key: KeyFunc, order: str) -> Callable[[Any, Any], int]:
    """Build a three-way comparator over the extracted key.

    Raises:
        ValueError: If order is not "asc" or "desc".
    """
    if order not in VALID_ORDERS:
        raise ValueError(f"order must be one of {sorted(VALID_ORDERS)}")
    sign = -1 if order == SORT_DESCENDING else 1

    def compare(left: Any, right: Any) -> int:
        a, b = key(left), key(right)
        if a < b:
            return -sign
        if a > b:
            return sign
        return 0

    return compare


def sort_records(records: Iterable[R], key: KeyFunc, order: str) -> list[R]:
    """Return a new list ordered by ``key`` in the given direction."""
    return sorted(records, key=cmp_to_key(make_comparator(key, order)))


def _lookup(keys: dict[str, KeyFunc], name: str) -> KeyFunc:
    try:
        return keys[name]
    except KeyError:
        raise ValueError(f"sort key must be one of {sorted(keys)}") from None


def sort_sessions(
    sessions: Iterable[SessionSummary], key: str, order: str
) -> list[SessionSummary]:
    """Order sessions by last activity, message count or session id."""
    return sort_records(sessions, _lookup(SESSION_SORT_KEYS, key), order)


def sort_leads(leads: Iterable[LeadRecord], key: str, order: str) -> list[LeadRecord]:
    """Order leads by capture time, name or source."""
    return sort_records(leads, _lookup(LEAD_SORT_KEYS, key), order)
