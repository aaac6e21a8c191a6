"""
Time & calendar utilities for recurring cleanings

Clock times travel as "H:MM AM/PM" strings (24-hour "HH:MM" is accepted on
input) and are handled internally as minutes since midnight. Dates are plain
calendar dates; nothing here is timezone aware.
"""

import re
from datetime import date, timedelta
from typing import Optional

from dateutil.relativedelta import relativedelta

from .constants import (
    FREQUENCY_BIWEEKLY,
    FREQUENCY_MONTHLY,
    FREQUENCY_PERIOD_DAYS,
    FREQUENCY_WEEKLY,
    SYNC_CURSOR_GAP_DAYS,
    WEEKDAYS,
)
from .errors import InvalidFormat

_TWELVE_HOUR_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*([AaPp][Mm])\s*$")
_TWENTY_FOUR_HOUR_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*$")

_FREQUENCY_ALIASES = {
    "weekly": FREQUENCY_WEEKLY,
    "bi-weekly": FREQUENCY_BIWEEKLY,
    "biweekly": FREQUENCY_BIWEEKLY,
    "bi_weekly": FREQUENCY_BIWEEKLY,
    "monthly": FREQUENCY_MONTHLY,
}


def parse_clock_time(value: Optional[str]) -> int:
    """
    Parse a clock time into minutes since midnight.

    Accepts "9:00 AM" / "1:30 pm" (12-hour) and "13:30" (24-hour).

    Raises:
        InvalidFormat: if the value matches neither form
    """
    if not value:
        raise InvalidFormat("Time value is empty")

    match = _TWELVE_HOUR_RE.match(value)
    if match:
        hours, minutes = int(match.group(1)), int(match.group(2))
        period = match.group(3).upper()
        if not 1 <= hours <= 12 or minutes > 59:
            raise InvalidFormat(f"Invalid time: {value!r}")
        if period == "PM" and hours != 12:
            hours += 12
        if period == "AM" and hours == 12:
            hours = 0
        return hours * 60 + minutes

    match = _TWENTY_FOUR_HOUR_RE.match(value)
    if match:
        hours, minutes = int(match.group(1)), int(match.group(2))
        if hours > 23 or minutes > 59:
            raise InvalidFormat(f"Invalid time: {value!r}")
        return hours * 60 + minutes

    raise InvalidFormat(f"Invalid time format: {value!r} (expected 'H:MM AM/PM' or 'HH:MM')")


def format_clock_time(minutes: int) -> str:
    """Format minutes since midnight as "H:MM AM/PM" """
    minutes = minutes % (24 * 60)
    hours, mins = divmod(minutes, 60)
    period = "AM" if hours < 12 else "PM"
    display_hour = hours % 12 or 12
    return f"{display_hour}:{mins:02d} {period}"


def duration_hours(start_time: str, end_time: str) -> float:
    """
    Hours between two clock times.

    A non-positive result is returned as-is; the caller decides on a fallback.
    """
    return (parse_clock_time(end_time) - parse_clock_time(start_time)) / 60


def parse_weekday(name: str) -> int:
    """Weekday index (Monday == 0) for a weekday name, case-insensitive"""
    if isinstance(name, str):
        cleaned = name.strip().lower()
        for index, weekday in enumerate(WEEKDAYS):
            if cleaned in (weekday.lower(), weekday[:3].lower()):
                return index
    raise InvalidFormat(f"Unknown weekday: {name!r}")


def normalize_weekday(name: str) -> str:
    """Canonical weekday name, e.g. "tue" -> "Tuesday" """
    return WEEKDAYS[parse_weekday(name)]


def next_occurrence_of_weekday(weekday: str, on_or_after: date) -> date:
    """Smallest date >= on_or_after falling on the given weekday"""
    days_ahead = (parse_weekday(weekday) - on_or_after.weekday()) % 7
    return on_or_after + timedelta(days=days_ahead)


def normalize_frequency(value: Optional[str]) -> str:
    """Canonical frequency name; anything unrecognised is treated as Weekly"""
    if not value:
        return FREQUENCY_WEEKLY
    return _FREQUENCY_ALIASES.get(value.strip().lower(), FREQUENCY_WEEKLY)


def advance_by_frequency(current: date, frequency: Optional[str]) -> date:
    """Move a generation cursor forward by one recurrence period"""
    return current + timedelta(days=FREQUENCY_PERIOD_DAYS[normalize_frequency(frequency)])


def advance_sync_cursor(assigned: date, frequency: Optional[str]) -> date:
    """Place the sync cursor after the last date assigned in a weekday cycle"""
    return assigned + timedelta(days=SYNC_CURSOR_GAP_DAYS[normalize_frequency(frequency)])


def add_days(value: date, days: int) -> date:
    return value + timedelta(days=days)


def add_weeks(value: date, weeks: int) -> date:
    return value + timedelta(weeks=weeks)


def add_months(value: date, months: int) -> date:
    """Calendar-month arithmetic; day-of-month is clamped (Jan 31 + 1 -> Feb 28)"""
    return value + relativedelta(months=months)


def days_between(start: date, end: date) -> int:
    """Signed number of days from start to end"""
    return (end - start).days
