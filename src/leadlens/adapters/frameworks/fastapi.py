"""FastAPI adapter for the reporting endpoints."""

import logging
from collections.abc import Awaitable, Callable
from typing import Any
from urllib.parse import parse_qs

from fastapi import APIRouter, HTTPException, Request, Response
from fastapi.responses import JSONResponse

from leadlens.adapters.frameworks.query_params import (
    parse_lead_filters,
    parse_series_range,
    parse_session_filters,
)
from leadlens.core.encoding.delimited import (
    CSV_MEDIA_TYPE,
    LEAD_COLUMNS,
    SESSION_COLUMNS,
    export_filename,
    format_instant,
    serialize,
)
from leadlens.core.filters import FilterBadge
from leadlens.core.models import (
    DailyBucket,
    LeadRecord,
    MessageEvent,
    ReportingSettings,
    SessionSummary,
    with_default_tz,
)
from leadlens.core.ports import ReportingSourcePort
from leadlens.core.reports import (
    LeadReport,
    SessionReport,
    build_lead_report,
    build_session_report,
)
from leadlens.core.timeseries import RangeNotResolvedError, aggregate, series_totals

logger = logging.getLogger(__name__)


def _message_to_dict(message: MessageEvent) -> dict[str, Any]:
    return {
        "id": message.id,
        "sender": message.sender,
        "message": message.text,
        "created_at": format_instant(message.occurred_at),
    }


def _session_to_dict(session: SessionSummary) -> dict[str, Any]:
    return {
        "session_id": session.session_id,
        "count": session.count,
        "first_at": format_instant(session.first_at),
        "last_at": format_instant(session.last_at),
        "messages": [_message_to_dict(m) for m in session.messages],
    }


def _lead_to_dict(lead: LeadRecord) -> dict[str, Any]:
    return {
        "id": lead.id,
        "name": lead.name,
        "email": lead.email,
        "phone": lead.phone,
        "message": lead.message,
        "source": lead.source,
        "created_at": format_instant(lead.occurred_at),
    }


def _bucket_to_dict(bucket: DailyBucket) -> dict[str, Any]:
    return {
        "date": bucket.day,
        "leads": bucket.lead_count,
        "conversations": bucket.conversation_count,
    }


def _badge_to_dict(badge: FilterBadge) -> dict[str, str]:
    return {"name": badge.name, "label": badge.label, "value": badge.value}


def _query_params(request: Request) -> dict[str, list[str]]:
    return parse_qs(request.url.query)


async def _handle_endpoint(
    endpoint_func: Callable[[], Awaitable[Response]], log_message: str
) -> Response:
    """Run an endpoint, turning unexpected failures into a 500 JSON response."""
    try:
        return await endpoint_func()
    except HTTPException:
        raise
    except Exception:
        logger.exception(log_message)
        return JSONResponse(
            status_code=500, content={"error": "Internal Server Error"}
        )


def create_reporting_router(
    source: ReportingSourcePort,
    settings: ReportingSettings | None = None,
) -> APIRouter:
    """Create a FastAPI router with the conversations, leads and stats views.

    Args:
        source: Data source implementing ReportingSourcePort.
        settings: Reporting configuration. Defaults to ReportingSettings().

    Returns:
        APIRouter with /sessions, /sessions/export, /leads, /leads/export and
        /stats/daily endpoints configured.
    """
    config = settings or ReportingSettings()
    router = APIRouter()

    def tenant_of(request: Request) -> str:
        user_id = request.headers.get(config.tenant_header, "").strip()
        if not user_id:
            raise HTTPException(status_code=401, detail="Missing tenant identifier")
        return user_id

    # Naive source timestamps are read in the configured timezone
    async def read_messages(user_id: str) -> list[MessageEvent]:
        return [
            with_default_tz(e, config.tz) async for e in source.messages(user_id)
        ]

    async def read_leads(user_id: str) -> list[LeadRecord]:
        return [
            with_default_tz(lead, config.tz) async for lead in source.leads(user_id)
        ]

    async def session_report(request: Request) -> SessionReport:
        user_id = tenant_of(request)
        filters = parse_session_filters(
            _query_params(request), config.now(), config.tz
        )
        events = await read_messages(user_id)
        return build_session_report(events, filters)

    async def lead_report(request: Request) -> LeadReport:
        user_id = tenant_of(request)
        filters = parse_lead_filters(_query_params(request), config.now(), config.tz)
        leads = await read_leads(user_id)
        return build_lead_report(leads, filters)

    def csv_response(body: str, prefix: str) -> Response:
        filename = export_filename(prefix, config.now().date())
        return Response(
            content=body,
            media_type=CSV_MEDIA_TYPE,
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    @router.get("/sessions")
    async def get_sessions(request: Request) -> Response:
        """Return grouped, filtered and sorted sessions as JSON."""

        async def endpoint() -> Response:
            report = await session_report(request)
            return JSONResponse(
                content={
                    "total": report.total,
                    "filtered_count": report.filtered_count,
                    "active_filter_count": report.active_filter_count,
                    "badges": [_badge_to_dict(b) for b in report.badges],
                    "stats": {
                        "total_sessions": report.stats.total_sessions,
                        "total_messages": report.stats.total_messages,
                        "average_messages": report.stats.average_messages,
                    },
                    "sessions": [_session_to_dict(s) for s in report.sessions],
                }
            )

        return await _handle_endpoint(endpoint, "Error building session report")

    @router.get("/sessions/export")
    async def export_sessions(request: Request) -> Response:
        """Return the filtered sessions as a CSV attachment."""

        async def endpoint() -> Response:
            report = await session_report(request)
            body = serialize(report.sessions, SESSION_COLUMNS)
            return csv_response(body, config.session_export_prefix)

        return await _handle_endpoint(endpoint, "Error exporting sessions")

    @router.get("/leads")
    async def get_leads(request: Request) -> Response:
        """Return filtered and sorted leads as JSON."""

        async def endpoint() -> Response:
            report = await lead_report(request)
            return JSONResponse(
                content={
                    "total": report.total,
                    "filtered_count": report.filtered_count,
                    "active_filter_count": report.active_filter_count,
                    "badges": [_badge_to_dict(b) for b in report.badges],
                    "leads": [_lead_to_dict(lead) for lead in report.leads],
                }
            )

        return await _handle_endpoint(endpoint, "Error building lead report")

    @router.get("/leads/export")
    async def export_leads(request: Request) -> Response:
        """Return the filtered leads as a CSV attachment."""

        async def endpoint() -> Response:
            report = await lead_report(request)
            body = serialize(report.leads, LEAD_COLUMNS)
            return csv_response(body, config.lead_export_prefix)

        return await _handle_endpoint(endpoint, "Error exporting leads")

    @router.get("/stats/daily")
    async def get_daily_stats(request: Request) -> Response:
        """Return per-day lead and message counts, zero-filled.

        Uses the configured default preset when no range is given.
        """

        async def endpoint() -> Response:
            user_id = tenant_of(request)
            date_range = parse_series_range(
                _query_params(request),
                config.now(),
                config.tz,
                config.default_series_preset,
            )
            leads = await read_leads(user_id)
            events = await read_messages(user_id)
            try:
                buckets = aggregate(leads, events, date_range)
            except RangeNotResolvedError as exc:
                raise HTTPException(status_code=400, detail=str(exc)) from exc
            lead_total, conversation_total = series_totals(buckets)
            return JSONResponse(
                content={
                    "total_leads": lead_total,
                    "total_conversations": conversation_total,
                    "days": [_bucket_to_dict(b) for b in buckets],
                }
            )

        return await _handle_endpoint(endpoint, "Error building daily stats")

    return router
