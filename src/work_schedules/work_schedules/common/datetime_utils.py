from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Iterator, Optional

from ..core.constants import DATE_FORMAT, TIME_FORMAT
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD, or a full ISO-8601 timestamp, into a date.

    For timestamps the calendar date as written is kept (no timezone shift).
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    if value is None:
        raise ValidationError("Date is required (YYYY-MM-DD)")
    if not isinstance(value, str):
        raise ValidationError(f"Invalid date: {value!r} (expected an ISO-8601 string)")

    text = value.strip()
    if not text:
        raise ValidationError("Date is required (YYYY-MM-DD)")

    try:
        return datetime.strptime(text, DATE_FORMAT).date()
    except ValueError:
        pass

    # fromisoformat only understands a trailing 'Z' from Python 3.11 on.
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        raise ValidationError(f"Invalid date format: {value!r} (expected ISO-8601)")


def parse_time_of_day(value) -> Optional[time]:
    """Accept time objects or HH:MM / HH:MM:SS strings; blank means absent."""
    if value is None or isinstance(value, time):
        return value

    text = str(value).strip()
    if not text:
        return None

    for fmt in (TIME_FORMAT, "%H:%M"):
        try:
            return datetime.strptime(text, fmt).time()
        except ValueError:
            continue
    raise ValidationError(f"Invalid time: {value!r} (expected HH:MM:SS)")


def format_time(value: Optional[time]) -> Optional[str]:
    return value.strftime(TIME_FORMAT) if value is not None else None


def format_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def iso_weekday(value: date) -> int:
    """Monday=1 ... Sunday=7."""
    return value.isoweekday()


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every date from start to end, both inclusive."""
    for offset in range((end - start).days + 1):
        yield start + timedelta(days=offset)


def day_number(value: date) -> int:
    """Days elapsed since 0001-01-01 (which is day 0)."""
    return value.toordinal() - 1
