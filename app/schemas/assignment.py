# app/schemas/assignment.py

from datetime import date
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

# 0=Sunday ... 6=Saturday
Weekday = Annotated[int, Field(ge=0, le=6)]


class AssignmentRead(BaseModel):
    id: str
    work_line_id: str
    member_id: str
    date: date
    is_holiday: bool
    is_confirmed: bool

    model_config = {"from_attributes": True}


class CellApplyRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    # empty list clears the cell
    member_ids: list[str] = Field(default_factory=list)

    # explicit flag for the whole cell; wins over holiday_weekdays
    is_holiday: bool | None = None

    # per-edit weekday selection, evaluated against the cell's own weekday
    holiday_weekdays: list[Weekday] = Field(default_factory=list)


class BulkAssignRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    work_line_id: str = Field(min_length=1)
    member_ids: list[str] = Field(min_length=1)
    start_date: date
    end_date: date
    holiday_weekdays: list[Weekday] = Field(default_factory=list)


class BulkAssignResponse(BaseModel):
    work_line_id: str
    start_date: date
    end_date: date
    days: int
    assignments: list[AssignmentRead]
