# app/api/schedule.py

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.api.deps import ActorContext, get_actor_context
from app.core.db import get_db
from app.core.errors import CellLockedError, InvalidRangeError, NotFoundError
from app.core.rbac import Forbidden
from app.scheduling.holiday import is_holiday as holiday_policy
from app.schemas.assignment import (
    AssignmentRead,
    BulkAssignRequest,
    BulkAssignResponse,
    CellApplyRequest,
)
from app.schemas.grid import GridOut
from app.services.assignment_service import AssignmentService
from app.services.grid_service import GridService

router = APIRouter(prefix="/schedule", tags=["schedule"])

MUTATION_ERRORS = {
    401: {"description": "Missing X-Role header"},
    403: {"description": "Caller is not admin"},
    404: {"description": "Unknown work-line or member"},
    409: {"description": "Target cell(s) locked; detail.cells lists them"},
}


@router.get("/cells/{work_line_id}/{day}", response_model=list[AssignmentRead])
def get_cell(
    work_line_id: str,
    day: date,
    db: Session = Depends(get_db),
    ctx: ActorContext = Depends(get_actor_context),
):
    """Members working in the cell (holiday-flagged rows excluded)."""
    return AssignmentService(db).cell_assignments(work_line_id, day)


@router.put(
    "/cells/{work_line_id}/{day}",
    response_model=list[AssignmentRead],
    responses=MUTATION_ERRORS,
)
def apply_cell(
    work_line_id: str,
    day: date,
    req: CellApplyRequest,
    db: Session = Depends(get_db),
    ctx: ActorContext = Depends(get_actor_context),
):
    """Replace the whole member set of one cell."""
    if req.is_holiday is not None:
        holiday = req.is_holiday
    else:
        holiday = holiday_policy(day, req.holiday_weekdays)

    try:
        return AssignmentService(db).apply_cell(
            role=ctx.role,
            work_line_id=work_line_id,
            day=day,
            member_ids=req.member_ids,
            is_holiday=holiday,
        )
    except Forbidden as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except CellLockedError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.to_detail())
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.to_detail())


@router.post("/bulk", response_model=BulkAssignResponse, responses=MUTATION_ERRORS)
def bulk_assign(
    req: BulkAssignRequest,
    db: Session = Depends(get_db),
    ctx: ActorContext = Depends(get_actor_context),
):
    """Assign a member list to every day of a range on one work-line."""
    try:
        rows = AssignmentService(db).bulk_assign(
            role=ctx.role,
            work_line_id=req.work_line_id,
            member_ids=req.member_ids,
            start_date=req.start_date,
            end_date=req.end_date,
            holiday_weekdays=req.holiday_weekdays,
        )
    except Forbidden as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except InvalidRangeError as e:
        raise HTTPException(status_code=422, detail=e.to_detail())
    except CellLockedError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.to_detail())
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.to_detail())
    except ValueError as e:
        raise HTTPException(status_code=422, detail={"message": str(e)})

    return BulkAssignResponse(
        work_line_id=req.work_line_id,
        start_date=req.start_date,
        end_date=req.end_date,
        days=(req.end_date - req.start_date).days + 1,
        assignments=[AssignmentRead.model_validate(r) for r in rows],
    )


@router.get("/assignments", response_model=list[AssignmentRead])
def list_assignments(
    work_line_id: str | None = Query(default=None),
    day: date | None = Query(default=None, alias="date"),
    db: Session = Depends(get_db),
    ctx: ActorContext = Depends(get_actor_context),
):
    """All stored rows for the filter, holiday-flagged ones included."""
    return AssignmentService(db).load_assignments(work_line_id=work_line_id, day=day)


@router.get("/grid", response_model=GridOut)
def get_grid(
    start_date: date = Query(...),
    end_date: date | None = Query(default=None),
    project_id: str | None = Query(default=None),
    db: Session = Depends(get_db),
    ctx: ActorContext = Depends(get_actor_context),
):
    try:
        return GridService(db).build(start=start_date, end=end_date, project_id=project_id)
    except InvalidRangeError as e:
        raise HTTPException(status_code=422, detail=e.to_detail())
