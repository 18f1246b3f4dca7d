# app/api/day_locks.py

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.api.deps import ActorContext, get_actor_context
from app.core.db import get_db
from app.core.errors import NotFoundError
from app.core.rbac import Forbidden
from app.schemas.day_lock import DayLockRead, DayLockState
from app.services.day_lock_service import DayLockRegistry

router = APIRouter(prefix="/day-locks", tags=["day-locks"])

LOCK_ERRORS = {
    401: {"description": "Missing X-Role header"},
    403: {"description": "Caller is not admin"},
    404: {"description": "Unknown work-line"},
}


@router.get("", response_model=list[DayLockRead])
def list_locks(
    work_line_id: str | None = Query(default=None),
    start_date: date | None = Query(default=None),
    end_date: date | None = Query(default=None),
    db: Session = Depends(get_db),
    ctx: ActorContext = Depends(get_actor_context),
):
    return DayLockRegistry(db).list_locks(work_line_id=work_line_id, start=start_date, end=end_date)


@router.get("/{work_line_id}/{day}", response_model=DayLockState)
def get_lock(
    work_line_id: str,
    day: date,
    db: Session = Depends(get_db),
    ctx: ActorContext = Depends(get_actor_context),
):
    locked = DayLockRegistry(db).is_locked(work_line_id, day)
    return DayLockState(work_line_id=work_line_id, date=day, is_locked=locked)


@router.put("/{work_line_id}/{day}", response_model=DayLockState, responses=LOCK_ERRORS)
def lock_cell(
    work_line_id: str,
    day: date,
    db: Session = Depends(get_db),
    ctx: ActorContext = Depends(get_actor_context),
):
    try:
        DayLockRegistry(db).lock(role=ctx.role, work_line_id=work_line_id, day=day)
    except Forbidden as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.to_detail())

    return DayLockState(work_line_id=work_line_id, date=day, is_locked=True)


@router.delete("/{work_line_id}/{day}", response_model=DayLockState, responses=LOCK_ERRORS)
def unlock_cell(
    work_line_id: str,
    day: date,
    db: Session = Depends(get_db),
    ctx: ActorContext = Depends(get_actor_context),
):
    try:
        DayLockRegistry(db).unlock(role=ctx.role, work_line_id=work_line_id, day=day)
    except Forbidden as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))

    return DayLockState(work_line_id=work_line_id, date=day, is_locked=False)
