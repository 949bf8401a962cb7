"""
Local calendar-day helpers.

Every date in a snapshot is a ``YYYY-MM-DD`` string meaning a calendar day in
the office's local time. Parsing goes straight to ``date(year, month, day)``
so no timezone conversion can move a hearing to the neighbouring day.
"""
from __future__ import annotations

import math
from datetime import date, datetime, time
from typing import Optional, Union
from zoneinfo import ZoneInfo

from mizan.utils.exceptions import MalformedDateError

DateLike = Union[date, datetime]

_SECONDS_PER_DAY = 86_400


def parse_local_date(value: Optional[str]) -> date:
    """Parse ``YYYY-MM-DD`` into a calendar date, or raise MalformedDateError."""
    if not isinstance(value, str) or not value.strip():
        raise MalformedDateError(value)

    parts = value.strip().split("-")
    if len(parts) != 3:
        raise MalformedDateError(value)

    try:
        year, month, day = (int(p) for p in parts)
        return date(year, month, day)
    except ValueError as e:
        raise MalformedDateError(value) from e


def day_floor(value: DateLike) -> datetime:
    """Midnight at the start of the value's calendar day (naive)."""
    if isinstance(value, datetime):
        return datetime.combine(value.date(), time.min)
    return datetime.combine(value, time.min)


def _as_datetime(value: DateLike) -> datetime:
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    return datetime.combine(value, time.min)


def days_between(a: DateLike, b: DateLike) -> int:
    """
    Whole days from ``a`` to ``b``, rounded up.

    Positive when ``b`` is after ``a``. Ceiling keeps "tomorrow at 00:30"
    at one day rather than zero.
    """
    delta = _as_datetime(b) - _as_datetime(a)
    return math.ceil(delta.total_seconds() / _SECONDS_PER_DAY)


def today(tz_name: Optional[str] = None, now: Optional[datetime] = None) -> datetime:
    """
    Start of the current calendar day.

    ``tz_name`` selects the office timezone; host-local time is used when it
    is empty. An explicit ``now`` is floored as-is.
    """
    if now is None:
        now = datetime.now(ZoneInfo(tz_name)) if tz_name else datetime.now()
    return day_floor(now)


def date_sort_key(value: Optional[str]) -> tuple:
    """
    Sort key for snapshot date strings.

    Parseable dates compare as calendar days, so ``2024-6-5`` sorts with
    ``2024-06-05``. Malformed values sort before every real date, then by
    their raw text.
    """
    try:
        return (1, parse_local_date(value), "")
    except MalformedDateError:
        return (0, date.min, value or "")
