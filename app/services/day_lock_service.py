# app/services/day_lock_service.py

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable

from sqlalchemy.orm import Session

from app.core.errors import CellLockedError, NotFoundError
from app.core.rbac import ensure_allowed
from app.models.day_site_status import DaySiteStatus
from app.repositories.schedule_repository import ScheduleRepository

logger = logging.getLogger(__name__)


class DayLockRegistry:
    """Which (work_line_id, date) cells are confirmed and therefore immutable.

    Per cell there are two states, Unlocked (no row) and Locked (row present).
    lock and unlock are both idempotent.
    """

    def __init__(self, db: Session, repo: ScheduleRepository | None = None):
        self.db = db
        self.repo = repo or ScheduleRepository(db)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def is_locked(self, work_line_id: str, day: date) -> bool:
        status = self.repo.get_day_status(work_line_id, day)
        return status is not None and status.is_locked

    def locked_dates(self, work_line_id: str, days: Iterable[date]) -> list[date]:
        return [s.date for s in self.repo.list_day_statuses(work_line_id=work_line_id, dates=days)]

    def list_locks(
        self,
        *,
        work_line_id: str | None = None,
        start: date | None = None,
        end: date | None = None,
    ) -> list[DaySiteStatus]:
        return self.repo.list_day_statuses(work_line_id=work_line_id, start=start, end=end)

    def ensure_unlocked(self, work_line_id: str, days: Iterable[date]) -> None:
        locked = self.locked_dates(work_line_id, days)
        if locked:
            raise CellLockedError((work_line_id, d) for d in locked)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def lock(self, *, role: str, work_line_id: str, day: date) -> DaySiteStatus:
        ensure_allowed("day_lock.lock", role)

        try:
            if self.repo.lock_work_line(work_line_id) is None:
                raise NotFoundError("WorkLine", [work_line_id])

            status = self.repo.get_day_status(work_line_id, day)
            if status is None:
                status = self.repo.save_day_status(
                    DaySiteStatus(work_line_id=work_line_id, date=day, is_locked=True)
                )
                logger.info("locked cell %s/%s", work_line_id, day.isoformat())
        except Exception:
            self.db.rollback()
            raise

        self.db.commit()
        return status

    def unlock(self, *, role: str, work_line_id: str, day: date) -> bool:
        """Returns True when a lock record was removed, False on no-op."""
        ensure_allowed("day_lock.unlock", role)

        try:
            self.repo.lock_work_line(work_line_id)
            removed = self.repo.delete_day_status(work_line_id, day)
        except Exception:
            self.db.rollback()
            raise

        self.db.commit()
        if removed:
            logger.info("unlocked cell %s/%s", work_line_id, day.isoformat())
        return removed
