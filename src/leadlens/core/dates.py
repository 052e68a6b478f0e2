"""Calendar-day keys and contiguous day ranges.

Instants are taken as already normalized: every helper works on the
instant's own calendar day and keeps its tzinfo untouched.
"""

from datetime import datetime, time, timedelta

START_OF_DAY = time(0, 0, 0, 0)
# Millisecond precision, matching the timestamps the dashboards display
END_OF_DAY = time(23, 59, 59, 999000)


def day_key(instant: datetime) -> str:
    """Return the YYYY-MM-DD key of the instant's calendar day."""
    return instant.date().isoformat()


def start_of_day(instant: datetime) -> datetime:
    """Truncate an instant to 00:00:00.000 of its day."""
    return datetime.combine(instant.date(), START_OF_DAY, tzinfo=instant.tzinfo)


def end_of_day(instant: datetime) -> datetime:
    """Move an instant to 23:59:59.999 of its day."""
    return datetime.combine(instant.date(), END_OF_DAY, tzinfo=instant.tzinfo)


def enumerate_days(start: datetime, end: datetime) -> list[str]:
    """List day keys from start's day through end's day, inclusive.

    Args:
        start: First instant of the range.
        end: Last instant of the range.

    Returns:
        One key per calendar day in ascending order. Empty if end < start.
    """
    if end < start:
        return []
    first = start.date()
    span = (end.date() - first).days
    return [(first + timedelta(days=offset)).isoformat() for offset in range(span + 1)]


def align_tz(left: datetime, right: datetime) -> tuple[datetime, datetime]:
    """Make two instants comparable when only one carries a tzinfo.

    The naive side is read in the other side's timezone. Two naive or two
    aware instants are returned unchanged.
    """
    if left.tzinfo is None and right.tzinfo is not None:
        return left.replace(tzinfo=right.tzinfo), right
    if right.tzinfo is None and left.tzinfo is not None:
        return left, right.replace(tzinfo=left.tzinfo)
    return left, right


def is_before(left: datetime, right: datetime) -> bool:
    """``left < right`` after aligning the two instants' timezones."""
    left, right = align_tz(left, right)
    return left < right
