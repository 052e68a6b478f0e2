"""Composable record filters for sessions and leads."""

from leadlens.core.filters.engine import (
    apply_filters,
    filter_leads,
    filter_sessions,
    lead_predicates,
    session_predicates,
)
from leadlens.core.filters.filter_sets import (
    SORT_ASCENDING,
    SORT_DESCENDING,
    FilterBadge,
    LeadFilters,
    SessionFilters,
    active_filter_badges,
    active_filter_count,
)
from leadlens.core.filters.predicates import (
    ALL,
    WITH_MESSAGE,
    WITHOUT_MESSAGE,
    CategoricalPredicate,
    DateContainmentPredicate,
    DateOverlapPredicate,
    MinimumPredicate,
    Predicate,
    PresencePredicate,
    SubstringPredicate,
)

__all__ = [
    "ALL",
    "SORT_ASCENDING",
    "SORT_DESCENDING",
    "WITHOUT_MESSAGE",
    "WITH_MESSAGE",
    "CategoricalPredicate",
    "DateContainmentPredicate",
    "DateOverlapPredicate",
    "FilterBadge",
    "LeadFilters",
    "MinimumPredicate",
    "Predicate",
    "PresencePredicate",
    "SessionFilters",
    "SubstringPredicate",
    "active_filter_badges",
    "active_filter_count",
    "apply_filters",
    "filter_leads",
    "filter_sessions",
    "lead_predicates",
    "session_predicates",
]
