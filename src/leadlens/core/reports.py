"""Filter, sort and summarize pipelines feeding the presentation layer."""

from collections.abc import Iterable
from dataclasses import dataclass, field

from leadlens.core.filters import (
    FilterBadge,
    LeadFilters,
    SessionFilters,
    active_filter_badges,
    active_filter_count,
    filter_leads,
    filter_sessions,
)
from leadlens.core.models import LeadRecord, MessageEvent, SessionSummary
from leadlens.core.sessions import SessionStats, group_by_session, session_stats
from leadlens.core.sorting import sort_leads, sort_sessions


@dataclass(frozen=True)
class SessionReport:
    """Result of the conversations pipeline.

    Attributes:
        total: Sessions before filtering.
        filtered_count: Sessions after filtering.
        active_filter_count: Number of active filter fields.
        sessions: Filtered sessions in the requested order.
        stats: Totals over all sessions, unfiltered.
        badges: One display badge per active filter.
    """

    total: int
    filtered_count: int
    active_filter_count: int
    sessions: tuple[SessionSummary, ...]
    stats: SessionStats
    badges: tuple[FilterBadge, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class LeadReport:
    """Result of the leads pipeline.

    Attributes:
        total: Leads before filtering.
        filtered_count: Leads after filtering.
        active_filter_count: Number of active filter fields.
        leads: Filtered leads in the requested order.
        badges: One display badge per active filter.
    """

    total: int
    filtered_count: int
    active_filter_count: int
    leads: tuple[LeadRecord, ...]
    badges: tuple[FilterBadge, ...] = field(default_factory=tuple)


def build_session_report(
    events: Iterable[MessageEvent], filters: SessionFilters
) -> SessionReport:
    """Group events into sessions, then filter and sort them."""
    sessions = list(group_by_session(events).values())
    matching = filter_sessions(sessions, filters)
    ordered = sort_sessions(matching, filters.sort_key, filters.sort_order)
    return SessionReport(
        total=len(sessions),
        filtered_count=len(ordered),
        active_filter_count=active_filter_count(filters),
        sessions=tuple(ordered),
        stats=session_stats(sessions),
        badges=tuple(active_filter_badges(filters)),
    )


def build_lead_report(leads: Iterable[LeadRecord], filters: LeadFilters) -> LeadReport:
    """Filter and sort leads."""
    all_leads = list(leads)
    matching = filter_leads(all_leads, filters)
    ordered = sort_leads(matching, filters.sort_key, filters.sort_order)
    return LeadReport(
        total=len(all_leads),
        filtered_count=len(ordered),
        active_filter_count=active_filter_count(filters),
        leads=tuple(ordered),
        badges=tuple(active_filter_badges(filters)),
    )
