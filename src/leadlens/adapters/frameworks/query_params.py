"""Query parameter parsing for the reporting endpoints.

Every parser fails open: a missing or malformed value falls back to the
field's disabled default instead of producing an error response.
"""

import logging
from datetime import datetime, tzinfo

from leadlens.core.filters import (
    ALL,
    SORT_ASCENDING,
    SORT_DESCENDING,
    WITH_MESSAGE,
    WITHOUT_MESSAGE,
    LeadFilters,
    SessionFilters,
)
from leadlens.core.models import VALID_SENDERS, DateRange
from leadlens.core.ranges import PRESETS, custom_range, resolve_preset
from leadlens.core.sorting import LEAD_SORT_KEYS, SESSION_SORT_KEYS

logger = logging.getLogger(__name__)

Params = dict[str, list[str]]


def _first(params: Params, name: str) -> str | None:
    values = params.get(name)
    return values[0] if values else None


def _parse_search_param(params: Params) -> str:
    """Parse the 'q' free-text search parameter."""
    return _first(params, "q") or ""


def _parse_range_params(params: Params, now: datetime, tz: tzinfo | None) -> DateRange:
    """Parse 'preset' or the custom 'from'/'to' pair.

    A known preset wins over custom dates. Unknown presets are ignored and
    unparsable dates leave that side of the range open.
    """
    preset = _first(params, "preset")
    if preset:
        if preset in PRESETS:
            return resolve_preset(preset, now)
        logger.debug("Ignoring unknown date preset %r", preset)
    return custom_range(_first(params, "from"), _first(params, "to"), tz)


def _parse_min_messages_param(params: Params) -> int:
    """Parse 'min_messages', returning 0 for missing, negative or non-numeric."""
    raw = _first(params, "min_messages")
    if raw is None:
        return 0
    try:
        value = int(raw)
    except ValueError:
        logger.debug("Ignoring non-numeric min_messages %r", raw)
        return 0
    return max(value, 0)


def _parse_choice_param(
    params: Params, name: str, choices: frozenset[str] | set[str], default: str
) -> str:
    """Parse a selector parameter, lowercased, defaulting when not a choice."""
    raw = _first(params, name)
    if raw and raw.strip().lower() in choices:
        return raw.strip().lower()
    return default


def _parse_order_param(params: Params) -> str:
    return _parse_choice_param(
        params, "order", {SORT_ASCENDING, SORT_DESCENDING}, SORT_DESCENDING
    )


def parse_session_filters(
    params: Params, now: datetime, tz: tzinfo | None = None
) -> SessionFilters:
    """Build SessionFilters from parsed query string parameters.

    Args:
        params: Parsed query string (as returned by urllib.parse.parse_qs).
        now: Current time, used to resolve presets.
        tz: Timezone attached to custom date bounds.
    """
    default = SessionFilters()
    return SessionFilters(
        search=_parse_search_param(params),
        date_range=_parse_range_params(params, now, tz),
        min_messages=_parse_min_messages_param(params),
        sender=_parse_choice_param(params, "sender", VALID_SENDERS | {ALL}, ALL),
        sort_key=_parse_choice_param(
            params, "sort", set(SESSION_SORT_KEYS), default.sort_key
        ),
        sort_order=_parse_order_param(params),
    )


def parse_lead_filters(
    params: Params, now: datetime, tz: tzinfo | None = None
) -> LeadFilters:
    """Build LeadFilters from parsed query string parameters.

    Args:
        params: Parsed query string (as returned by urllib.parse.parse_qs).
        now: Current time, used to resolve presets.
        tz: Timezone attached to custom date bounds.
    """
    default = LeadFilters()
    return LeadFilters(
        search=_parse_search_param(params),
        date_range=_parse_range_params(params, now, tz),
        source=_first(params, "source") or "",
        message_presence=_parse_choice_param(
            params, "message", {ALL, WITH_MESSAGE, WITHOUT_MESSAGE}, ALL
        ),
        sort_key=_parse_choice_param(
            params, "sort", set(LEAD_SORT_KEYS), default.sort_key
        ),
        sort_order=_parse_order_param(params),
    )


def parse_series_range(
    params: Params, now: datetime, tz: tzinfo | None, default_preset: str
) -> DateRange:
    """Resolve the daily series range, using ``default_preset`` when unset.

    A half-given custom range is returned as is; the aggregator rejects it.
    """
    date_range = _parse_range_params(params, now, tz)
    if date_range.is_empty:
        return resolve_preset(default_preset, now)
    return date_range
