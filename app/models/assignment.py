# app/models/assignment.py

from __future__ import annotations

import datetime as dt

from sqlalchemy import Boolean, Date, ForeignKey, Index, String, false
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base


def assignment_id(work_line_id: str, member_id: str, day: dt.date) -> str:
    return f"{work_line_id}_{member_id}_{day.isoformat()}"


class Assignment(Base):
    """Member M is scheduled on work-line L on date D.

    The natural key (work_line_id, member_id, date) is the primary key, so a
    second write for the same triple replaces the first instead of adding a
    duplicate. ``id`` is derived from it and never stored.
    """

    __tablename__ = "assignments"
    __table_args__ = (
        # cell lookups: (work_line_id, date) is the unit of replace-on-write
        Index("ix_assignments_work_line_date", "work_line_id", "date"),
    )

    work_line_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("work_lines.id", ondelete="CASCADE"),
        primary_key=True,
    )
    member_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("members.id", ondelete="CASCADE"),
        primary_key=True,
    )
    date: Mapped[dt.date] = mapped_column(Date, primary_key=True)

    # day is a designated non-working day for this assignment scope
    is_holiday: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())

    # reserved for per-assignment confirmation; cell locking lives in day_site_status
    is_confirmed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())

    @property
    def id(self) -> str:
        return assignment_id(self.work_line_id, self.member_id, self.date)

    @property
    def cell(self) -> tuple[str, dt.date]:
        return self.work_line_id, self.date

    def __repr__(self) -> str:
        flag = " holiday" if self.is_holiday else ""
        return f"<Assignment {self.id}{flag}>"
