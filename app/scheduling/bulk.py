# app/scheduling/bulk.py

from __future__ import annotations

from datetime import date
from typing import Iterable, Sequence

from app.models.assignment import Assignment
from app.scheduling.calendar import DateLike, expand_range
from app.scheduling.holiday import is_holiday


def unique_in_order(ids: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for i in ids:
        if i not in seen:
            seen.add(i)
            out.append(i)
    return out


def build_cell(
    work_line_id: str,
    day: date,
    member_ids: Sequence[str],
    *,
    holiday: bool,
) -> list[Assignment]:
    return [
        Assignment(
            work_line_id=work_line_id,
            member_id=member_id,
            date=day,
            is_holiday=holiday,
            is_confirmed=False,
        )
        for member_id in unique_in_order(member_ids)
    ]


def build_assignments(
    work_line_id: str,
    member_ids: Sequence[str],
    start_date: DateLike,
    end_date: DateLike,
    holiday_weekdays: Iterable[int] | None = None,
) -> list[Assignment]:
    """Assignments for every (day, member) of the range, day-major.

    Pure: returns transient ORM objects, touches no session. Inputs are assumed
    validated by the caller (non-empty member list and work-line id).
    """
    weekdays = frozenset(holiday_weekdays or ())
    members = unique_in_order(member_ids)

    out: list[Assignment] = []
    for day in expand_range(start_date, end_date):
        out.extend(build_cell(work_line_id, day, members, holiday=is_holiday(day, weekdays)))
    return out
