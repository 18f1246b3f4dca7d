# app/repositories/schedule_repository.py

from __future__ import annotations

from datetime import date
from typing import Iterable, Sequence

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from app.models.assignment import Assignment
from app.models.day_site_status import DaySiteStatus
from app.models.member import Member
from app.models.work_line import WorkLine


class ScheduleRepository:
    """Storage collaborator for assignments and day locks.

    Never commits: the calling service owns the transaction.
    """

    def __init__(self, db: Session):
        self.db = db

    # ------------------------------------------------------------------
    # Metadata (read-only)
    # ------------------------------------------------------------------

    def lock_work_line(self, work_line_id: str) -> WorkLine | None:
        """SELECT ... FOR UPDATE on the work-line row.

        Serializes mutations touching the same work-line's cells. SQLite
        ignores FOR UPDATE; its single writer lock serializes instead.
        """
        return self.db.execute(
            select(WorkLine).where(WorkLine.id == work_line_id).with_for_update()
        ).scalar_one_or_none()

    def list_work_lines(self, project_id: str | None = None) -> list[WorkLine]:
        q = select(WorkLine)
        if project_id is not None:
            q = q.where(WorkLine.project_id == project_id)
        return list(self.db.execute(q.order_by(WorkLine.name, WorkLine.id)).scalars())

    def list_members(self) -> list[Member]:
        return list(self.db.execute(select(Member).order_by(Member.name, Member.id)).scalars())

    def missing_member_ids(self, member_ids: Iterable[str]) -> set[str]:
        wanted = set(member_ids)
        if not wanted:
            return set()
        found = self.db.execute(select(Member.id).where(Member.id.in_(wanted))).scalars()
        return wanted - set(found)

    # ------------------------------------------------------------------
    # Assignments
    # ------------------------------------------------------------------

    def load_assignments(
        self,
        *,
        work_line_id: str | None = None,
        date: date | None = None,
        start: date | None = None,
        end: date | None = None,
        working_only: bool = False,
    ) -> list[Assignment]:
        # inner join drops rows whose member no longer exists
        q = select(Assignment).join(Member, Member.id == Assignment.member_id)

        if work_line_id is not None:
            q = q.where(Assignment.work_line_id == work_line_id)
        if date is not None:
            q = q.where(Assignment.date == date)
        if start is not None:
            q = q.where(Assignment.date >= start)
        if end is not None:
            q = q.where(Assignment.date <= end)
        if working_only:
            q = q.where(Assignment.is_holiday.is_(False))

        q = q.order_by(Assignment.work_line_id, Assignment.date, Member.name, Member.id)
        return list(self.db.execute(q).scalars())

    def save_assignments(self, assignments: Sequence[Assignment]) -> None:
        self.db.add_all(assignments)
        self.db.flush()

    def delete_assignments(self, work_line_id: str, date: date) -> int:
        return self.delete_assignments_for_dates(work_line_id, [date])

    def delete_assignments_for_dates(self, work_line_id: str, dates: Iterable[date]) -> int:
        dates = list(dates)
        if not dates:
            return 0
        res = self.db.execute(
            delete(Assignment)
            .where(
                Assignment.work_line_id == work_line_id,
                Assignment.date.in_(dates),
            )
            .execution_options(synchronize_session="fetch")
        )
        # flush so the inserts that follow do not collide with the deleted keys
        self.db.flush()
        return res.rowcount or 0

    # ------------------------------------------------------------------
    # Day site status (locks)
    # ------------------------------------------------------------------

    def get_day_status(self, work_line_id: str, date: date) -> DaySiteStatus | None:
        return self.db.get(DaySiteStatus, (work_line_id, date))

    def save_day_status(self, status: DaySiteStatus) -> DaySiteStatus:
        self.db.add(status)
        self.db.flush()
        return status

    def delete_day_status(self, work_line_id: str, date: date) -> bool:
        res = self.db.execute(
            delete(DaySiteStatus)
            .where(
                DaySiteStatus.work_line_id == work_line_id,
                DaySiteStatus.date == date,
            )
            .execution_options(synchronize_session="fetch")
        )
        self.db.flush()
        return bool(res.rowcount)

    def list_day_statuses(
        self,
        *,
        work_line_id: str | None = None,
        dates: Iterable[date] | None = None,
        start: date | None = None,
        end: date | None = None,
    ) -> list[DaySiteStatus]:
        q = select(DaySiteStatus).where(DaySiteStatus.is_locked.is_(True))

        if work_line_id is not None:
            q = q.where(DaySiteStatus.work_line_id == work_line_id)
        if dates is not None:
            dates = list(dates)
            if not dates:
                return []
            q = q.where(DaySiteStatus.date.in_(dates))
        if start is not None:
            q = q.where(DaySiteStatus.date >= start)
        if end is not None:
            q = q.where(DaySiteStatus.date <= end)

        q = q.order_by(DaySiteStatus.work_line_id, DaySiteStatus.date)
        return list(self.db.execute(q).scalars())
