"""Comma-separated export encoder for filtered records."""

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any

CSV_MEDIA_TYPE = "text/csv; charset=utf-8"


@dataclass(frozen=True)
class Column:
    """One export column.

    Attributes:
        label: Header text. Written unquoted, so it must not contain
            commas, quotes or newlines.
        value: Extracts the cell value from a record.
    """

    label: str
    value: Callable[[Any], Any]


def format_instant(instant: datetime) -> str:
    """Render a datetime as ISO-8601, using "Z" for UTC offsets."""
    text = instant.isoformat()
    if instant.utcoffset() == timedelta(0):
        return text[: -len("+00:00")] + "Z"
    return text


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, datetime):
        return format_instant(value)
    return str(value)


def _quote(text: str) -> str:
    return '"' + text.replace('"', '""') + '"'


LEAD_COLUMNS: tuple[Column, ...] = (
    Column("Name", lambda lead: lead.name),
    Column("Email", lambda lead: lead.email),
    Column("Phone", lambda lead: lead.phone),
    Column("Message", lambda lead: lead.message),
    Column("Source", lambda lead: lead.source),
    Column("CreatedAt", lambda lead: lead.occurred_at),
)

SESSION_COLUMNS: tuple[Column, ...] = (
    Column("SessionId", lambda s: s.session_id),
    Column("Messages", lambda s: s.count),
    Column("FirstAt", lambda s: s.first_at),
    Column("LastAt", lambda s: s.last_at),
)


def serialize(records: Iterable[Any], columns: Sequence[Column]) -> str:
    """Encode records as comma-separated text.

    Args:
        records: Records in the order they should appear.
        columns: Column labels and value extractors, in output order.

    Returns:
        Header line followed by one line per record, joined by "\\n" with
        no trailing newline. Every cell is double-quoted with embedded
        quotes doubled. Header only if there are no records.
    """
    lines = [",".join(column.label for column in columns)]
    for record in records:
        cells = (_quote(_cell_text(column.value(record))) for column in columns)
        lines.append(",".join(cells))
    return "\n".join(lines)


def export_filename(prefix: str, on: date) -> str:
    """Build a dated export filename, e.g. leads_filtrati_2024-06-01.csv."""
    return f"{prefix}_{on.isoformat()}.csv"
