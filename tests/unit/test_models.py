"""Tests for core reporting models."""

from datetime import UTC, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest
from tests.helpers import utc

from leadlens.core.models import (
    DateRange,
    LeadRecord,
    MessageEvent,
    ReportingSettings,
    SessionSummary,
    parse_instant,
    with_default_tz,
)


class TestParseInstant:
    """Tests for parse_instant()."""

    @pytest.mark.core
    def test_trailing_z_is_utc(self) -> None:
        """A trailing Z parses as UTC."""
        assert parse_instant("2024-06-01T10:30:00Z") == datetime(
            2024, 6, 1, 10, 30, tzinfo=UTC
        )

    @pytest.mark.core
    def test_offset_is_preserved(self) -> None:
        """Explicit offsets are kept, not converted."""
        result = parse_instant("2024-06-01T10:30:00+02:00")
        assert result.utcoffset() == timedelta(hours=2)
        assert result.hour == 10

    @pytest.mark.core
    def test_naive_text_gets_default_timezone(self) -> None:
        """Naive timestamps get the default timezone attached."""
        rome = ZoneInfo("Europe/Rome")
        result = parse_instant("2024-06-01T10:30:00", rome)
        assert result.tzinfo is rome
        assert result.hour == 10

    @pytest.mark.core
    def test_naive_text_stays_naive_without_default(self) -> None:
        """Without a default timezone naive values stay naive."""
        assert parse_instant("2024-06-01T10:30:00").tzinfo is None

    @pytest.mark.core
    def test_datetime_passes_through(self) -> None:
        """Datetime input is returned unchanged when already aware."""
        instant = utc(2024, 6, 1)
        assert parse_instant(instant) == instant

    @pytest.mark.core
    def test_invalid_text_raises(self) -> None:
        """Non ISO-8601 text raises ValueError."""
        with pytest.raises(ValueError):
            parse_instant("yesterday")


class TestMessageEvent:
    """Tests for MessageEvent."""

    @pytest.mark.core
    def test_unknown_sender_raises(self) -> None:
        """Only user and bot senders are accepted."""
        with pytest.raises(ValueError, match="sender must be one of"):
            MessageEvent(
                id="1",
                session_id="s",
                sender="agent",
                text="",
                occurred_at=utc(2024, 6, 1),
            )

    @pytest.mark.core
    def test_from_row_maps_source_columns(self) -> None:
        """from_row maps message/created_at columns and normalizes sender."""
        event = MessageEvent.from_row(
            {
                "id": 7,
                "session_id": "abc",
                "sender": "Bot",
                "message": "Salve!",
                "created_at": "2024-06-01T09:00:00Z",
            }
        )
        assert event == MessageEvent(
            id="7",
            session_id="abc",
            sender="bot",
            text="Salve!",
            occurred_at=datetime(2024, 6, 1, 9, tzinfo=UTC),
        )

    @pytest.mark.core
    def test_from_row_coerces_null_message(self) -> None:
        """A null message column becomes an empty string."""
        event = MessageEvent.from_row(
            {
                "id": "1",
                "session_id": "abc",
                "sender": "user",
                "message": None,
                "created_at": "2024-06-01T09:00:00Z",
            }
        )
        assert event.text == ""

    @pytest.mark.core
    def test_is_immutable(self, make_message) -> None:
        """MessageEvent is frozen."""
        event = make_message()
        with pytest.raises(AttributeError):
            event.text = "changed"  # type: ignore[misc]


class TestLeadRecord:
    """Tests for LeadRecord."""

    @pytest.mark.core
    def test_from_row_maps_source_columns(self) -> None:
        """from_row reads every lead column and coerces nulls."""
        lead = LeadRecord.from_row(
            {
                "id": "l1",
                "name": "Anna",
                "email": "anna@b.com",
                "phone": None,
                "message": "Richiamatemi",
                "source": "web",
                "created_at": "2024-06-03T08:15:00+00:00",
            }
        )
        assert lead.phone == ""
        assert lead.message == "Richiamatemi"
        assert lead.occurred_at == datetime(2024, 6, 3, 8, 15, tzinfo=timezone.utc)


class TestWithDefaultTz:
    """Tests for with_default_tz()."""

    @pytest.mark.core
    def test_naive_instant_gets_timezone(self, make_lead) -> None:
        rome = ZoneInfo("Europe/Rome")
        lead = make_lead(occurred_at=datetime(2024, 6, 1, 23, 30))

        localized = with_default_tz(lead, rome)

        assert localized.occurred_at == datetime(2024, 6, 1, 23, 30, tzinfo=rome)
        assert localized.id == lead.id

    @pytest.mark.core
    def test_aware_record_is_unchanged(self, make_message) -> None:
        event = make_message(occurred_at=utc(2024, 6, 1))
        assert with_default_tz(event, ZoneInfo("Europe/Rome")) is event


class TestSessionSummary:
    """Tests for SessionSummary."""

    @pytest.mark.core
    def test_derived_fields_follow_message_order(self, make_message) -> None:
        """first_at, last_at and count come from the message tuple."""
        first = make_message(occurred_at=utc(2024, 6, 1, 9))
        last = make_message(occurred_at=utc(2024, 6, 1, 11))
        summary = SessionSummary(session_id="sess-1", messages=(first, last))

        assert summary.first_at == utc(2024, 6, 1, 9)
        assert summary.last_at == utc(2024, 6, 1, 11)
        assert summary.count == 2

    @pytest.mark.core
    def test_empty_messages_raise(self) -> None:
        """A session must contain at least one message."""
        with pytest.raises(ValueError, match="must not be empty"):
            SessionSummary(session_id="sess-1", messages=())


class TestDateRange:
    """Tests for DateRange."""

    @pytest.mark.core
    def test_default_is_unbounded(self) -> None:
        """A default range has no bounds."""
        date_range = DateRange()
        assert date_range.is_empty
        assert not date_range.is_bounded

    @pytest.mark.core
    def test_half_open_range(self) -> None:
        """A range with one bound is neither empty nor bounded."""
        date_range = DateRange(start=utc(2024, 6, 1))
        assert not date_range.is_empty
        assert not date_range.is_bounded

    @pytest.mark.core
    def test_inverted_range_is_accepted(self) -> None:
        """Inverted ranges are accepted without validation."""
        date_range = DateRange(start=utc(2024, 6, 3), end=utc(2024, 6, 1))
        assert date_range.is_bounded


class TestReportingSettings:
    """Tests for ReportingSettings."""

    @pytest.mark.core
    def test_defaults(self) -> None:
        """Defaults use UTC and the lead export prefix."""
        settings = ReportingSettings()
        assert settings.tz == ZoneInfo("UTC")
        assert settings.lead_export_prefix == "leads_filtrati"
        assert settings.tenant_header == "X-User-ID"

    @pytest.mark.core
    def test_now_is_aware(self) -> None:
        """now() returns an aware datetime in the configured zone."""
        settings = ReportingSettings(timezone="Europe/Rome")
        assert settings.now().tzinfo == ZoneInfo("Europe/Rome")

    @pytest.mark.core
    def test_unknown_timezone_raises(self) -> None:
        """An unknown IANA zone is rejected."""
        with pytest.raises(ValueError, match="unknown timezone"):
            ReportingSettings(timezone="Mars/Olympus")

    @pytest.mark.core
    def test_unknown_default_preset_raises(self) -> None:
        """The default series preset must exist in the catalog."""
        with pytest.raises(ValueError, match="unknown preset"):
            ReportingSettings(default_series_preset="last_year")

    @pytest.mark.core
    def test_empty_tenant_header_raises(self) -> None:
        """The tenant header name is required."""
        with pytest.raises(ValueError, match="tenant_header"):
            ReportingSettings(tenant_header="")
