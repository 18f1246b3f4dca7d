# app/core/errors.py
from __future__ import annotations

from datetime import date
from typing import Iterable


class SchedulingError(Exception):
    """Base class for scheduling failures surfaced to the caller."""

    def to_detail(self) -> dict:
        return {"message": str(self)}


class InvalidRangeError(SchedulingError, ValueError):
    """End date precedes start date."""

    def __init__(self, start: date, end: date):
        self.start = start
        self.end = end
        super().__init__(f"Invalid range: end {end.isoformat()} precedes start {start.isoformat()}")

    def to_detail(self) -> dict:
        return {
            "message": str(self),
            "start_date": self.start.isoformat(),
            "end_date": self.end.isoformat(),
        }


class CellLockedError(SchedulingError):
    """Mutation targets one or more locked (work_line_id, date) cells."""

    def __init__(self, cells: Iterable[tuple[str, date]]):
        self.cells: list[tuple[str, date]] = sorted(cells, key=lambda c: (c[0], c[1]))
        listed = ", ".join(f"{wl}/{d.isoformat()}" for wl, d in self.cells)
        super().__init__(f"Cell(s) locked: {listed}")

    @property
    def dates(self) -> list[date]:
        return [d for _wl, d in self.cells]

    def to_detail(self) -> dict:
        return {
            "message": str(self),
            "cells": [
                {"work_line_id": wl, "date": d.isoformat()}
                for wl, d in self.cells
            ],
        }


class NotFoundError(SchedulingError):
    """Referenced work-line or member does not exist."""

    def __init__(self, entity: str, ids: Iterable[str]):
        self.entity = entity
        self.ids = sorted(ids)
        super().__init__(f"{entity} not found: {', '.join(self.ids)}")

    def to_detail(self) -> dict:
        return {"message": str(self), "entity": self.entity, "ids": self.ids}
