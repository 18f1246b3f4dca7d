# app/models/day_site_status.py

from __future__ import annotations

import datetime as dt

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, String, func
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base


def day_site_status_id(work_line_id: str, day: dt.date) -> str:
    return f"{work_line_id}_{day.isoformat()}"


class DaySiteStatus(Base):
    """Lock record of one (work_line_id, date) cell.

    Only positive facts are stored: a row exists iff the cell is locked.
    Unlock deletes the row.
    """

    __tablename__ = "day_site_status"

    work_line_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("work_lines.id", ondelete="CASCADE"),
        primary_key=True,
    )
    date: Mapped[dt.date] = mapped_column(Date, primary_key=True)

    is_locked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    locked_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    @property
    def id(self) -> str:
        return day_site_status_id(self.work_line_id, self.date)
