"""Core domain models for reporting data."""

from dataclasses import dataclass, field, replace
from datetime import datetime, tzinfo
from typing import Any, TypeVar
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

SENDER_USER = "user"
SENDER_BOT = "bot"

# Valid message senders for validation
VALID_SENDERS = frozenset({SENDER_USER, SENDER_BOT})


def parse_instant(value: str | datetime, default_tz: tzinfo | None = None) -> datetime:
    """Parse an ISO-8601 timestamp as delivered by the data source.

    Args:
        value: ISO-8601 text (a trailing "Z" means UTC) or a datetime.
        default_tz: Timezone attached to naive values. Naive values stay
            naive when omitted.

    Returns:
        The parsed datetime.

    Raises:
        ValueError: If the text is not ISO-8601.
    """
    if isinstance(value, datetime):
        instant = value
    else:
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        instant = datetime.fromisoformat(text)
    if instant.tzinfo is None and default_tz is not None:
        instant = instant.replace(tzinfo=default_tz)
    return instant


def _text(row: dict[str, Any], key: str) -> str:
    value = row.get(key)
    return "" if value is None else str(value)


@dataclass(frozen=True)
class MessageEvent:
    """A single chat message belonging to one session.

    Attributes:
        id: Opaque identifier from the data source.
        session_id: Conversation the message belongs to.
        sender: Either "user" or "bot".
        text: The message body.
        occurred_at: When the message was recorded.
    """

    id: str
    session_id: str
    sender: str
    text: str
    occurred_at: datetime

    def __post_init__(self) -> None:
        if self.sender not in VALID_SENDERS:
            raise ValueError(f"sender must be one of {sorted(VALID_SENDERS)}")

    @classmethod
    def from_row(
        cls, row: dict[str, Any], default_tz: tzinfo | None = None
    ) -> "MessageEvent":
        """Build a MessageEvent from a raw conversations row."""
        return cls(
            id=_text(row, "id"),
            session_id=_text(row, "session_id"),
            sender=_text(row, "sender").strip().lower(),
            text=_text(row, "message"),
            occurred_at=parse_instant(row["created_at"], default_tz),
        )


@dataclass(frozen=True)
class LeadRecord:
    """A captured contact submission.

    Attributes:
        id: Opaque identifier from the data source.
        name: Contact name.
        email: Contact email.
        phone: Contact phone number, possibly empty.
        message: Free-text note left by the contact, possibly empty.
        source: Channel that captured the lead (e.g., web, whatsapp).
        occurred_at: When the lead was captured.
    """

    id: str
    name: str
    email: str
    phone: str
    message: str
    source: str
    occurred_at: datetime

    @classmethod
    def from_row(
        cls, row: dict[str, Any], default_tz: tzinfo | None = None
    ) -> "LeadRecord":
        """Build a LeadRecord from a raw leads row."""
        return cls(
            id=_text(row, "id"),
            name=_text(row, "name"),
            email=_text(row, "email"),
            phone=_text(row, "phone"),
            message=_text(row, "message"),
            source=_text(row, "source"),
            occurred_at=parse_instant(row["created_at"], default_tz),
        )


TimedRecord = TypeVar("TimedRecord", MessageEvent, LeadRecord)


def with_default_tz(record: TimedRecord, default_tz: tzinfo) -> TimedRecord:
    """Return the record with a naive ``occurred_at`` read in ``default_tz``.

    Records that already carry a timezone are returned unchanged.
    """
    if record.occurred_at.tzinfo is not None:
        return record
    return replace(record, occurred_at=record.occurred_at.replace(tzinfo=default_tz))


@dataclass(frozen=True)
class SessionSummary:
    """Messages of one session in arrival order.

    Attributes:
        session_id: The shared session identifier.
        messages: Non-empty tuple of events, chronological as received.
    """

    session_id: str
    messages: tuple[MessageEvent, ...]

    def __post_init__(self) -> None:
        if not self.messages:
            raise ValueError("messages must not be empty")

    @property
    def first_at(self) -> datetime:
        return self.messages[0].occurred_at

    @property
    def last_at(self) -> datetime:
        return self.messages[-1].occurred_at

    @property
    def count(self) -> int:
        return len(self.messages)


@dataclass(frozen=True)
class DateRange:
    """A time window where either side may be unbounded.

    Attributes:
        start: Inclusive lower bound, or None for no lower bound.
        end: Inclusive upper bound, or None for no upper bound.
    """

    start: datetime | None = None
    end: datetime | None = None

    @property
    def is_empty(self) -> bool:
        """True when neither bound is set."""
        return self.start is None and self.end is None

    @property
    def is_bounded(self) -> bool:
        """True when both bounds are set."""
        return self.start is not None and self.end is not None


@dataclass(frozen=True)
class DailyBucket:
    """Event counts for one calendar day.

    Attributes:
        day: Day key in YYYY-MM-DD form.
        lead_count: Leads captured that day.
        conversation_count: Chat messages recorded that day.
    """

    day: str
    lead_count: int = 0
    conversation_count: int = 0


@dataclass(frozen=True)
class ReportingSettings:
    """Configuration passed to the reporting adapters.

    Attributes:
        timezone: IANA zone used for "now" and for naive source timestamps.
        tenant_header: Request header carrying the authenticated user id.
        lead_export_prefix: Filename prefix for lead exports.
        session_export_prefix: Filename prefix for session exports.
        default_series_preset: Preset used by the daily series when the
            request names no range.
    """

    timezone: str = "UTC"
    tenant_header: str = "X-User-ID"
    lead_export_prefix: str = "leads_filtrati"
    session_export_prefix: str = "sessioni_filtrate"
    default_series_preset: str = "last_7_days"
    _tz: ZoneInfo = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        # Deferred import: ranges depends on this module
        from leadlens.core.ranges import PRESETS

        try:
            tz = ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"unknown timezone: {self.timezone!r}") from exc
        if self.default_series_preset not in PRESETS:
            raise ValueError(f"unknown preset: {self.default_series_preset!r}")
        if not self.tenant_header:
            raise ValueError("tenant_header must not be empty")
        object.__setattr__(self, "_tz", tz)

    @property
    def tz(self) -> ZoneInfo:
        return self._tz

    def now(self) -> datetime:
        """Return the current time in the configured timezone."""
        return datetime.now(self._tz)
