# app/schemas/day_lock.py

from datetime import date, datetime

from pydantic import BaseModel


class DayLockRead(BaseModel):
    id: str
    work_line_id: str
    date: date
    is_locked: bool
    locked_at: datetime | None = None

    model_config = {"from_attributes": True}


class DayLockState(BaseModel):
    """Lock state of a cell; unlocked cells have no stored record."""

    work_line_id: str
    date: date
    is_locked: bool
