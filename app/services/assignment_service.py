# app/services/assignment_service.py

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Sequence

from sqlalchemy.orm import Session

from app.core.errors import CellLockedError, NotFoundError
from app.core.rbac import ensure_allowed
from app.models.assignment import Assignment
from app.repositories.schedule_repository import ScheduleRepository
from app.scheduling.bulk import build_assignments, build_cell, unique_in_order
from app.scheduling.calendar import DateLike, expand_range, parse_iso_date
from app.scheduling.holiday import normalize_weekdays
from app.services.day_lock_service import DayLockRegistry

logger = logging.getLogger(__name__)


class AssignmentService:
    """Assignment set: queries plus replace-on-write mutations per cell.

    Every mutation runs in one transaction. Cells touched by a call are
    cleared and rewritten as a whole (full replace, not merge); a lock on any
    touched cell rejects the whole call before anything is written.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = ScheduleRepository(db)
        self.locks = DayLockRegistry(db, self.repo)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def cell_assignments(self, work_line_id: str, day: DateLike) -> list[Assignment]:
        """Who is working: non-holiday assignments of one cell, member order."""
        return self.repo.load_assignments(
            work_line_id=work_line_id,
            date=parse_iso_date(day),
            working_only=True,
        )

    def load_assignments(
        self,
        *,
        work_line_id: str | None = None,
        day: DateLike | None = None,
    ) -> list[Assignment]:
        return self.repo.load_assignments(
            work_line_id=work_line_id,
            date=parse_iso_date(day) if day is not None else None,
        )

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def apply_cell(
        self,
        *,
        role: str,
        work_line_id: str,
        day: DateLike,
        member_ids: Iterable[str],
        is_holiday: bool = False,
    ) -> list[Assignment]:
        """Replace the member set of one cell. Empty member_ids clears it."""
        ensure_allowed("assignment.apply_cell", role)

        target = parse_iso_date(day)
        members = unique_in_order(member_ids)

        try:
            self._check_targets(work_line_id, members)
            self._check_unlocked(work_line_id, [target])

            created = build_cell(work_line_id, target, members, holiday=is_holiday)

            removed = self.repo.delete_assignments(work_line_id, target)
            self.repo.save_assignments(created)
        except Exception:
            self.db.rollback()
            raise

        self.db.commit()
        logger.info(
            "cell %s/%s replaced: removed=%d written=%d holiday=%s",
            work_line_id, target.isoformat(), removed, len(created), is_holiday,
        )
        return created

    def bulk_assign(
        self,
        *,
        role: str,
        work_line_id: str,
        member_ids: Sequence[str],
        start_date: DateLike,
        end_date: DateLike,
        holiday_weekdays: Iterable[int] | None = None,
    ) -> list[Assignment]:
        """Assign members to every day of [start_date, end_date] on one work-line.

        All-or-nothing: if any day of the range is locked nothing is written
        and CellLockedError lists every locked day.
        """
        ensure_allowed("assignment.bulk_assign", role)

        if not work_line_id or not work_line_id.strip():
            raise ValueError("work_line_id must not be empty")
        members = unique_in_order(member_ids)
        if not members:
            raise ValueError("member_ids must not be empty")

        weekdays = normalize_weekdays(holiday_weekdays)
        days = expand_range(start_date, end_date)

        try:
            self._check_targets(work_line_id, members)
            self._check_unlocked(work_line_id, days)

            created = build_assignments(work_line_id, members, days[0], days[-1], weekdays)

            removed = self.repo.delete_assignments_for_dates(work_line_id, days)
            self.repo.save_assignments(created)
        except Exception:
            self.db.rollback()
            raise

        self.db.commit()
        logger.info(
            "bulk assign %s %s..%s: members=%d days=%d removed=%d written=%d",
            work_line_id, days[0].isoformat(), days[-1].isoformat(),
            len(members), len(days), removed, len(created),
        )
        return created

    # ------------------------------------------------------------------
    # Guards
    # ------------------------------------------------------------------

    def _check_targets(self, work_line_id: str, member_ids: Sequence[str]) -> None:
        # row lock on the work-line serializes concurrent writers of its cells
        if self.repo.lock_work_line(work_line_id) is None:
            raise NotFoundError("WorkLine", [work_line_id])

        missing = self.repo.missing_member_ids(member_ids)
        if missing:
            raise NotFoundError("Member", missing)

    def _check_unlocked(self, work_line_id: str, days: Sequence[date]) -> None:
        try:
            self.locks.ensure_unlocked(work_line_id, days)
        except CellLockedError as e:
            logger.warning("rejected write to locked cells: %s", e)
            raise
