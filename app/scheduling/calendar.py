# app/scheduling/calendar.py
"""Calendar range expander.

Dates are calendar days, never instants: a ``yyyy-MM-dd`` string is split into
year/month/day and handed to ``date(...)`` directly, so no timezone can shift
it by a day.
"""

from __future__ import annotations

import re
from datetime import date, timedelta
from typing import Union

from app.core.errors import InvalidRangeError

DateLike = Union[date, str]

_ISO_DATE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")


def parse_iso_date(value: DateLike) -> date:
    if isinstance(value, date):
        # datetime is a date subclass; keep only the calendar part
        return date(value.year, value.month, value.day)

    m = _ISO_DATE.match(value.strip()) if isinstance(value, str) else None
    if m is None:
        raise ValueError(f"Invalid date '{value}': expected yyyy-MM-dd")

    year, month, day = (int(g) for g in m.groups())
    return date(year, month, day)


def format_iso_date(d: date) -> str:
    return d.isoformat()


def days_between(start: DateLike, end: DateLike) -> int:
    return (parse_iso_date(end) - parse_iso_date(start)).days


def expand_range(start: DateLike, end: DateLike) -> list[date]:
    """Every calendar day from start to end, both inclusive, in order.

    Raises InvalidRangeError when end precedes start.
    """
    first = parse_iso_date(start)
    last = parse_iso_date(end)
    if last < first:
        raise InvalidRangeError(first, last)

    return [first + timedelta(days=i) for i in range((last - first).days + 1)]
