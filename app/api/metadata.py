# app/api/metadata.py

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.deps import ActorContext, get_actor_context
from app.core.db import get_db
from app.repositories.schedule_repository import ScheduleRepository
from app.schemas.metadata import MemberRead, WorkLineRead

router = APIRouter()


@router.get("/members", response_model=list[MemberRead])
def list_members(
    db: Session = Depends(get_db),
    ctx: ActorContext = Depends(get_actor_context),
):
    return ScheduleRepository(db).list_members()


@router.get("/work-lines", response_model=list[WorkLineRead])
def list_work_lines(
    project_id: str | None = Query(default=None),
    db: Session = Depends(get_db),
    ctx: ActorContext = Depends(get_actor_context),
):
    return ScheduleRepository(db).list_work_lines(project_id)
