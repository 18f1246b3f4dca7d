# app/services/grid_service.py

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, timedelta

from sqlalchemy.orm import Session

from app.core.config import settings
from app.repositories.schedule_repository import ScheduleRepository
from app.scheduling.calendar import DateLike, expand_range, parse_iso_date


@dataclass(frozen=True)
class GridCell:
    date: date
    working: list[str] = field(default_factory=list)   # member ids
    holiday: list[str] = field(default_factory=list)   # member ids
    is_locked: bool = False


@dataclass(frozen=True)
class GridRow:
    work_line_id: str
    name: str
    color: str | None
    cells: list[GridCell]


@dataclass(frozen=True)
class Grid:
    start_date: date
    end_date: date
    days: list[date]
    members: dict[str, str]   # id -> name
    rows: list[GridRow]


class GridService:
    """Read-only day x work-line view for the editor."""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ScheduleRepository(db)

    def build(
        self,
        *,
        start: DateLike,
        end: DateLike | None = None,
        project_id: str | None = None,
    ) -> Grid:
        first = parse_iso_date(start)
        last = (
            parse_iso_date(end)
            if end is not None
            else first + timedelta(days=settings.grid_days_visible - 1)
        )
        days = expand_range(first, last)

        lines = self.repo.list_work_lines(project_id)
        line_ids = {wl.id for wl in lines}

        working: dict[tuple[str, date], list[str]] = defaultdict(list)
        holiday: dict[tuple[str, date], list[str]] = defaultdict(list)
        for a in self.repo.load_assignments(start=first, end=last):
            if a.work_line_id not in line_ids:
                continue
            (holiday if a.is_holiday else working)[a.cell].append(a.member_id)

        locked = {
            (s.work_line_id, s.date)
            for s in self.repo.list_day_statuses(start=first, end=last)
        }

        rows = [
            GridRow(
                work_line_id=wl.id,
                name=wl.name,
                color=wl.color,
                cells=[
                    GridCell(
                        date=d,
                        working=working.get((wl.id, d), []),
                        holiday=holiday.get((wl.id, d), []),
                        is_locked=(wl.id, d) in locked,
                    )
                    for d in days
                ],
            )
            for wl in lines
        ]

        return Grid(
            start_date=first,
            end_date=last,
            days=days,
            members={m.id: m.name for m in self.repo.list_members()},
            rows=rows,
        )
