"""Named date-range presets and custom range parsing.

Every preset is a pure function of ``now`` and always returns both bounds.
Only ``custom_range`` can produce a partially bounded range.
"""

import calendar
from collections.abc import Callable
from datetime import date, datetime, time, timedelta, tzinfo

from leadlens.core.dates import END_OF_DAY, START_OF_DAY, end_of_day, start_of_day
from leadlens.core.models import DateRange

Preset = Callable[[datetime], DateRange]


def today(now: datetime) -> DateRange:
    """From the start of today to the start of tomorrow.

    The upper bound is the first instant of the next day rather than the
    last instant of today, unlike every other preset.
    """
    start = start_of_day(now)
    return DateRange(start=start, end=start + timedelta(days=1))


def last_7_days(now: datetime) -> DateRange:
    """From the start of the day six days ago to the end of today."""
    return DateRange(
        start=start_of_day(now - timedelta(days=6)),
        end=end_of_day(now),
    )


def last_30_days(now: datetime) -> DateRange:
    """From the start of the day 29 days ago to the end of today."""
    return DateRange(
        start=start_of_day(now - timedelta(days=29)),
        end=end_of_day(now),
    )


def this_month(now: datetime) -> DateRange:
    """From the first to the last day of the current month."""
    last_day = calendar.monthrange(now.year, now.month)[1]
    return DateRange(
        start=start_of_day(now.replace(day=1)),
        end=end_of_day(now.replace(day=last_day)),
    )


# Preset catalog in display order: name -> (label, function)
PRESETS: dict[str, tuple[str, Preset]] = {
    "today": ("Oggi", today),
    "last_7_days": ("Ultimi 7 giorni", last_7_days),
    "last_30_days": ("Ultimi 30 giorni", last_30_days),
    "this_month": ("Questo mese", this_month),
}


def resolve_preset(name: str, now: datetime) -> DateRange:
    """Resolve a preset by name.

    Raises:
        KeyError: If no preset has that name.
    """
    _label, preset = PRESETS[name]
    return preset(now)


def _parse_day(text: str | None) -> date | None:
    if not text or not text.strip():
        return None
    value = text.strip()
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def _at(day: date, moment: time, tz: tzinfo | None) -> datetime:
    return datetime.combine(day, moment, tzinfo=tz)


def custom_range(
    start_text: str | None,
    end_text: str | None,
    tz: tzinfo | None = None,
) -> DateRange:
    """Build a range from user-entered dates.

    Args:
        start_text: Date of the first day (YYYY-MM-DD), may be empty.
        end_text: Date of the last day (YYYY-MM-DD), may be empty.
        tz: Timezone attached to the resulting bounds.

    Returns:
        DateRange running from the start of the first day to the end of the
        last day. A missing or unparsable side is left unbounded.
    """
    start_day = _parse_day(start_text)
    end_day = _parse_day(end_text)
    return DateRange(
        start=None if start_day is None else _at(start_day, START_OF_DAY, tz),
        end=None if end_day is None else _at(end_day, END_OF_DAY, tz),
    )


def _format_day(instant: datetime) -> str:
    return instant.strftime("%d/%m/%Y")


def describe_range(date_range: DateRange) -> str:
    """Render a range the way the date picker labels it."""
    start, end = date_range.start, date_range.end
    if start is not None and end is not None:
        return f"{_format_day(start)} - {_format_day(end)}"
    if start is not None:
        return f"Dal {_format_day(start)}"
    if end is not None:
        return f"Fino al {_format_day(end)}"
    return "Seleziona periodo"
