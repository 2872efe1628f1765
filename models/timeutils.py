"""
Date and time helpers shared by the models and the availability engine.

All wall-clock values handled by the engine are naive datetimes expressed in
the resource's own time zone. Instants (aware datetimes) are converted on the
way in and never compared directly against wall-clock values.
"""

import calendar
import re
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Optional, Union

MINUTES_PER_DAY = 24 * 60

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")


def to_minutes(value: str) -> int:
    """
    Convert "HH:mm" (or "HH:mm:ss") to minutes since midnight.
    "24:00" is accepted as the end of the day.
    """
    match = _TIME_RE.match(value.strip())
    if not match:
        raise ValueError(f"Invalid time '{value}', expected HH:mm")

    hours, minutes = int(match.group(1)), int(match.group(2))
    seconds = int(match.group(3) or 0)
    if minutes > 59 or seconds > 59:
        raise ValueError(f"Invalid time '{value}'")
    if hours > 24 or (hours == 24 and (minutes or seconds)):
        raise ValueError(f"Invalid time '{value}'")
    return hours * 60 + minutes


def format_minutes(minutes: int) -> str:
    """Minutes since midnight -> "HH:mm"."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def parse_day(value: Union[date, str]) -> date:
    """Interpret a date or a "YYYY-MM-DD" string as a local calendar date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value.strip())
    except (AttributeError, ValueError):
        raise ValueError(f"Invalid date '{value}', expected YYYY-MM-DD") from None


def weekday_index(day: date) -> int:
    """Weekday as 0=Sunday .. 6=Saturday."""
    return day.isoweekday() % 7


def days_in_month(year: int, month: int) -> int:
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be in 1..12, got {month}")
    return calendar.monthrange(year, month)[1]


def to_wall_clock(moment: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """
    Express an instant as a naive wall-clock datetime in `tz`.
    Naive inputs are taken to be wall-clock already. tz=None means host local time.
    """
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(tz).replace(tzinfo=None)


def current_wall_clock(tz: Optional[tzinfo] = None, now: Optional[datetime] = None) -> datetime:
    """The evaluation instant as resource wall-clock; reads the clock when now is None."""
    if now is None:
        now = datetime.now(tz) if tz is not None else datetime.now()
    return to_wall_clock(now, tz)


def minutes_since(day: date, moment: datetime) -> int:
    """
    Minutes from midnight of `day` to the wall-clock `moment`.
    Values past 1440 mean the moment falls on a later day.
    """
    delta: timedelta = moment - datetime.combine(day, time.min)
    return int(delta.total_seconds() // 60)
