from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.dependencies import get_session_context
from app.auth.roles import SessionContext
from app.crud import profile as profile_crud
from app.crud import shift as shift_crud
from app.db import get_db
from app.schemas.dashboard import DashboardRead, CalendarMonthRead
from app.schemas.shift import ShiftRead
from app.services.dashboard import build_dashboard
from app.utils.calendar_grid import month_grid, attach_shifts, WEEKDAY_LABELS
from app.utils.timezones import local_today

router = APIRouter(tags=["dashboard"])


@router.get("/dashboard", response_model=DashboardRead)
async def dashboard(
    db: AsyncSession = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    data = await build_dashboard(db, ctx)
    data["profile"] = await profile_crud.get_profile(db, ctx.uid)
    return data


# 🗓️ Month view
@router.get("/calendar/{year}/{month}", response_model=CalendarMonthRead)
async def calendar_month(
    year: int,
    month: int,
    db: AsyncSession = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    if not 1 <= month <= 12 or not 1970 <= year <= 2100:
        raise HTTPException(status_code=400, detail="Invalid month")

    grid = month_grid(year, month, today=local_today())
    shifts = await shift_crud.get_shifts_between(db, grid[0].date, grid[-1].date)
    return {
        "year": year,
        "month": month,
        "weekdays": WEEKDAY_LABELS,
        "days": [
            {
                "date": cell.date,
                "day": cell.day,
                "is_current_month": cell.is_current_month,
                "is_today": cell.is_today,
                "shifts": [ShiftRead.model_validate(s) for s in cell.shifts],
            }
            for cell in attach_shifts(grid, shifts)
        ],
    }
