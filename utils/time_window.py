"""
Date and time-of-day window checks for seasonal menus.

Dates are ``YYYY-MM-DD`` and times are ``HH:MM``. Both formats are fixed-width
and zero-padded, so once validated they compare correctly as plain strings.
"""
import re
from datetime import date, datetime
from typing import Tuple, Union

from utils.exceptions import FormatError

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def validate_date(value: str) -> str:
    if not isinstance(value, str) or not DATE_PATTERN.match(value):
        raise FormatError(f"Invalid date '{value}', expected YYYY-MM-DD")
    try:
        date.fromisoformat(value)
    except ValueError:
        raise FormatError(f"Invalid calendar date '{value}'")
    return value


def validate_time(value: str) -> str:
    if not isinstance(value, str) or not TIME_PATTERN.match(value):
        raise FormatError(f"Invalid time '{value}', expected HH:MM")
    return value


def split_instant(now: Union[datetime, str]) -> Tuple[str, str]:
    """Return the (date, time) strings of an instant, using its own wall clock."""
    if isinstance(now, str):
        try:
            now = datetime.fromisoformat(now)
        except ValueError:
            raise FormatError(f"Invalid instant '{now}', expected an ISO 8601 datetime")
    if not isinstance(now, datetime):
        raise FormatError(f"Invalid instant {now!r}")
    return now.strftime("%Y-%m-%d"), now.strftime("%H:%M")


def in_date_range(start: str, end: str, current: str) -> bool:
    """Inclusive on both ends."""
    validate_date(start)
    validate_date(end)
    validate_date(current)
    return start <= current <= end


def in_time_range(start: str, end: str, current: str) -> bool:
    """
    Check a daily clock window, inclusive on both ends.

    When ``start`` is later than ``end`` the window wraps past midnight
    (22:00-06:00 covers 23:30 and 05:00). A zero-width window
    (``start == end``) is never active.
    """
    validate_time(start)
    validate_time(end)
    validate_time(current)
    if start == end:
        return False
    if start > end:
        return current >= start or current <= end
    return start <= current <= end


def time_to_minutes(value: str) -> int:
    validate_time(value)
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)

