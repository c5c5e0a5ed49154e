"""Helper functions for calendar-day arithmetic."""

from datetime import date, datetime, tzinfo
from typing import Any, Optional, Union

from dateutil import tz
from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta

UTC = tz.UTC


def get_timezone(name: Optional[str]) -> Optional[tzinfo]:
    """Resolve an IANA zone name (or "UTC"). None if unknown or empty."""
    if not name:
        return None
    return tz.gettz(name)


def parse_due_date(value: Any) -> Optional[Union[date, datetime]]:
    """
    Parse a due date from a record.

    Accepts date/datetime objects and ISO 8601 strings ("2025-01-15",
    "2025-01-15T08:30:00Z"). Returns None for anything unparseable.
    """
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return isoparse(value.strip())
    except (ValueError, OverflowError):
        return None


def to_calendar_day(value: Union[date, datetime], zone: tzinfo = UTC) -> date:
    """
    Strip the time of day, leaving the calendar day in the given zone.

    Aware datetimes are converted into the zone first. Naive datetimes and
    plain dates are taken as already expressed in it.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None and value.utcoffset() is not None:
            value = value.astimezone(zone)
        return value.date()
    if isinstance(value, date):
        return value
    raise TypeError(f"Expected date or datetime, got {type(value).__name__}")


def due_day(value: Any, zone: tzinfo = UTC) -> Optional[date]:
    """
    Calendar day of a record's due date in the zone.

    None when the value is unparseable or its zone conversion falls outside
    the representable date range.
    """
    parsed = parse_due_date(value)
    if parsed is None:
        return None
    try:
        return to_calendar_day(parsed, zone)
    except OverflowError:
        return None


def days_until_due(due: Union[date, datetime], now: Union[date, datetime],
                   zone: tzinfo = UTC) -> int:
    """Whole calendar days from now until due (negative when past)."""
    return (to_calendar_day(due, zone) - to_calendar_day(now, zone)).days


def plural_days(n: int) -> str:
    return "day" if abs(n) == 1 else "days"


def days_in_month(reference: date) -> int:
    first = reference.replace(day=1)
    return ((first + relativedelta(months=1)) - first).days


def leading_blanks(reference: date) -> int:
    """Empty cells before the 1st in a Sunday-first week."""
    return reference.replace(day=1).isoweekday() % 7
