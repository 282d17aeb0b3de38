from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from fastapi import HTTPException
from typing import Optional
import logging

from app.auth.roles import Action, SessionContext, require
from app.models.shift import Shift
from app.models.task import Task, TaskStatus
from app.schemas.task import TaskCreate, TaskUpdate
from app.utils.timezones import utcnow

log = logging.getLogger(__name__)


async def get_task(db: AsyncSession, task_id: str) -> Task:
    task = await db.get(Task, task_id)
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    return task


async def create_task(db: AsyncSession, ctx: SessionContext, task_data: TaskCreate) -> Task:
    require(ctx, Action.task_create)
    task = Task(
        title=task_data.title,
        description=task_data.description,
        priority=task_data.priority,
        status=TaskStatus.pending,
        shift_id=task_data.shift_id,
        assigned_to=task_data.assigned_to,
        due_date=task_data.due_date,
        created_by=ctx.uid,
    )
    db.add(task)
    await db.commit()
    await db.refresh(task)
    return task


async def list_tasks(db: AsyncSession, ctx: SessionContext, status_filter: str = "all"):
    """Admins get every task; employees only the tasks of shifts they hold."""
    stmt = select(Task)
    if not ctx.is_admin:
        my_shift_ids = select(Shift.id).where(Shift.assigned_to == ctx.uid)
        stmt = stmt.where(Task.shift_id.in_(my_shift_ids))

    if status_filter == "pending":
        stmt = stmt.where(Task.status != TaskStatus.completed)
    elif status_filter == "completed":
        stmt = stmt.where(Task.status == TaskStatus.completed)

    result = await db.execute(stmt.order_by(Task.created_at.desc()))
    return result.scalars().all()


async def get_tasks_for_shift(db: AsyncSession, shift_id: str):
    result = await db.execute(
        select(Task)
        .where(Task.shift_id == shift_id)
        .order_by(Task.created_at.asc())
    )
    return result.scalars().all()


async def update_task(db: AsyncSession, ctx: SessionContext, task_id: str, updates: TaskUpdate) -> Task:
    require(ctx, Action.task_update)
    task = await get_task(db, task_id)
    for field, value in updates.model_dump(exclude_unset=True).items():
        if field in ("title", "priority") and value is None:
            continue
        setattr(task, field, value)
    task.updated_at = utcnow()
    await db.commit()
    await db.refresh(task)
    return task


async def delete_task(db: AsyncSession, ctx: SessionContext, task_id: str) -> None:
    require(ctx, Action.task_delete)
    task = await get_task(db, task_id)
    await db.delete(task)
    await db.commit()


async def toggle_task(db: AsyncSession, ctx: SessionContext, task_id: str) -> Task:
    require(ctx, Action.task_toggle)
    task = await get_task(db, task_id)

    if task.status == TaskStatus.completed:
        task.status = TaskStatus.pending
        task.completed_at = None
        task.completed_by = None
    else:
        task.status = TaskStatus.completed
        task.completed_at = utcnow()
        task.completed_by = ctx.uid
    task.updated_at = utcnow()

    await db.commit()
    await db.refresh(task)
    log.info("task %s -> %s by %s", task_id, task.status.value, ctx.uid)
    return task
