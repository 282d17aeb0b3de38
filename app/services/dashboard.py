from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import or_
from datetime import datetime
from typing import Optional

from app.auth.roles import SessionContext
from app.core.constants import DASHBOARD_SHIFTS, DASHBOARD_TASKS, DASHBOARD_ANNOUNCEMENTS
from app.crud.announcement import list_active_announcements
from app.models.shift import Shift, ShiftStatus
from app.models.task import Task, TaskStatus
from app.utils.timezones import local_now


def greeting_for(now: datetime) -> str:
    if now.hour < 12:
        return "Dobré ráno"
    if now.hour < 18:
        return "Dobré odpoledne"
    return "Dobrý večer"


async def build_dashboard(db: AsyncSession, ctx: SessionContext, now: Optional[datetime] = None) -> dict:
    now = local_now(now)
    today = now.date()

    shift_stmt = select(Shift).where(Shift.date >= today)
    if not ctx.is_admin:
        shift_stmt = shift_stmt.where(
            or_(Shift.assigned_to == ctx.uid, Shift.status == ShiftStatus.open)
        )
    shifts = (await db.execute(
        shift_stmt.order_by(Shift.date.asc(), Shift.start_time.asc()).limit(DASHBOARD_SHIFTS)
    )).scalars().all()

    task_stmt = select(Task)
    if not ctx.is_admin:
        task_stmt = task_stmt.where(
            Task.status != TaskStatus.completed,
            or_(Task.assigned_to == ctx.uid, Task.assigned_to.is_(None)),
        )
    tasks = (await db.execute(
        task_stmt.order_by(Task.created_at.desc()).limit(DASHBOARD_TASKS)
    )).scalars().all()

    announcements = await list_active_announcements(db, limit=DASHBOARD_ANNOUNCEMENTS)

    return {
        "greeting": greeting_for(now),
        "today": today,
        "upcoming_shifts": shifts,
        "tasks": tasks,
        "announcements": announcements,
    }
