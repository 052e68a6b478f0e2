"""In-memory reporting engine for chat sessions and captured leads."""

from leadlens.adapters.sources.in_memory import InMemoryReportingSource
from leadlens.core.encoding.delimited import (
    LEAD_COLUMNS,
    SESSION_COLUMNS,
    export_filename,
    serialize,
)
from leadlens.core.filters import LeadFilters, SessionFilters, active_filter_count
from leadlens.core.models import (
    DailyBucket,
    DateRange,
    LeadRecord,
    MessageEvent,
    ReportingSettings,
    SessionSummary,
)
from leadlens.core.reports import build_lead_report, build_session_report
from leadlens.core.sessions import group_by_session
from leadlens.core.timeseries import RangeNotResolvedError, aggregate

__all__ = [
    "LEAD_COLUMNS",
    "SESSION_COLUMNS",
    "DailyBucket",
    "DateRange",
    "InMemoryReportingSource",
    "LeadFilters",
    "LeadRecord",
    "MessageEvent",
    "RangeNotResolvedError",
    "ReportingSettings",
    "SessionFilters",
    "SessionSummary",
    "active_filter_count",
    "aggregate",
    "build_lead_report",
    "build_session_report",
    "export_filename",
    "group_by_session",
    "serialize",
]
