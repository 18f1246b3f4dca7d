# app/schemas/grid.py

from datetime import date

from pydantic import BaseModel


class GridCellOut(BaseModel):
    date: date
    working: list[str]
    holiday: list[str]
    is_locked: bool

    model_config = {"from_attributes": True}


class GridRowOut(BaseModel):
    work_line_id: str
    name: str
    color: str | None = None
    cells: list[GridCellOut]

    model_config = {"from_attributes": True}


class GridOut(BaseModel):
    start_date: date
    end_date: date
    days: list[date]
    members: dict[str, str]
    rows: list[GridRowOut]

    model_config = {"from_attributes": True}
