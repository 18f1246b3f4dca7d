# app/scheduling/holiday.py

from __future__ import annotations

from datetime import date
from typing import Iterable


def sunday_weekday(d: date) -> int:
    """date.weekday() is Monday=0; shift to Sunday=0."""
    return (d.weekday() + 1) % 7


def normalize_weekdays(weekdays: Iterable[int] | None) -> frozenset[int]:
    out = frozenset(weekdays or ())
    bad = sorted(w for w in out if not 0 <= w <= 6)
    if bad:
        raise ValueError(f"Holiday weekdays must be within 0..6 (0=Sunday), got: {bad}")
    return out


def is_holiday(d: date, holiday_weekdays: Iterable[int] | None) -> bool:
    if not holiday_weekdays:
        return False
    return sunday_weekday(d) in frozenset(holiday_weekdays)
