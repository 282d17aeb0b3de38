from fastapi import APIRouter, Depends, Request
from fastapi.templating import Jinja2Templates
from sqlalchemy.ext.asyncio import AsyncSession
from datetime import date, timedelta
from pathlib import Path
from typing import List, Literal, Optional

from app.auth.dependencies import get_session_context
from app.auth.roles import SessionContext
from app.crud import shift as shift_crud
from app.crud import task as task_crud
from app.db import get_db
from app.schemas.shift import ShiftCreate, ShiftRead, ShiftUpdate, ShiftAssign, ShiftBulkCreate, ShiftBulkResult
from app.schemas.task import TaskRead
from app.utils.timezones import local_today, local_now

router = APIRouter(tags=["shifts"])
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))


# 📋 List shifts
@router.get("/", response_model=List[ShiftRead])
async def list_shifts(
    view: Literal["all", "open", "mine"] = "all",
    start: Optional[date] = None,
    end: Optional[date] = None,
    db: AsyncSession = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    return await shift_crud.list_shifts(db, ctx, start=start, end=end, view=view)


# 🚀 Create a shift
@router.post("/", response_model=ShiftRead, status_code=201)
async def create_shift(
    shift: ShiftCreate,
    db: AsyncSession = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    return await shift_crud.create_shift(db, ctx, shift)


# 📆 Create one shift per picked date
@router.post("/bulk", response_model=ShiftBulkResult, status_code=201)
async def bulk_create_shifts(
    payload: ShiftBulkCreate,
    db: AsyncSession = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    shifts, tasks = await shift_crud.bulk_create_shifts(db, ctx, payload)
    return {"shifts": shifts, "tasks": tasks}


# 🖨️ Print-friendly schedule
@router.get("/print")
async def print_shifts(
    request: Request,
    start: Optional[date] = None,
    end: Optional[date] = None,
    db: AsyncSession = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    start = start or local_today()
    end = end or (start + timedelta(days=13))
    shifts = await shift_crud.get_shifts_between(db, start, end)

    days = {}
    for s in shifts:
        days.setdefault(s.date, []).append(s)

    return templates.TemplateResponse(
        request,
        "shifts_print.html",
        {
            "start": start,
            "end": end,
            "days": days,
            "total": len(shifts),
            "open_count": sum(1 for s in shifts if s.status.value == "open"),
            "printed_at": local_now(),
            "printed_by": ctx.display_name,
        },
    )


@router.get("/{shift_id}", response_model=ShiftRead)
async def get_shift(
    shift_id: str,
    db: AsyncSession = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    return await shift_crud.get_shift(db, shift_id)


@router.get("/{shift_id}/tasks", response_model=List[TaskRead])
async def shift_tasks(
    shift_id: str,
    db: AsyncSession = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    return await task_crud.get_tasks_for_shift(db, shift_id)


# ✏️ Update shift details
@router.put("/{shift_id}", response_model=ShiftRead)
async def update_shift(
    shift_id: str,
    updates: ShiftUpdate,
    db: AsyncSession = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    return await shift_crud.update_shift(db, ctx, shift_id, updates)


# ❌ Delete shift
@router.delete("/{shift_id}")
async def delete_shift(
    shift_id: str,
    db: AsyncSession = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    await shift_crud.delete_shift(db, ctx, shift_id)
    return {"message": "Shift deleted"}


# 🙋 Claim a shift
@router.post("/{shift_id}/claim", response_model=ShiftRead)
async def claim_shift(
    shift_id: str,
    db: AsyncSession = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    return await shift_crud.claim_shift(db, ctx, shift_id)


# 🙅 Release a shift
@router.post("/{shift_id}/release", response_model=ShiftRead)
async def release_shift(
    shift_id: str,
    db: AsyncSession = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    return await shift_crud.release_shift(db, ctx, shift_id)


# 👤 Admin puts someone on a shift
@router.post("/{shift_id}/assign", response_model=ShiftRead)
async def assign_shift(
    shift_id: str,
    body: ShiftAssign,
    db: AsyncSession = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    return await shift_crud.assign_shift(db, ctx, shift_id, body.user_id)
