from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Literal

from app.auth.dependencies import get_session_context
from app.auth.roles import SessionContext
from app.crud import task as task_crud
from app.db import get_db
from app.schemas.task import TaskCreate, TaskRead, TaskUpdate

router = APIRouter(tags=["tasks"])


@router.get("/", response_model=List[TaskRead])
async def list_tasks(
    status: Literal["all", "pending", "completed"] = "all",
    db: AsyncSession = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    return await task_crud.list_tasks(db, ctx, status_filter=status)


@router.post("/", response_model=TaskRead, status_code=201)
async def create_task(
    task: TaskCreate,
    db: AsyncSession = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    return await task_crud.create_task(db, ctx, task)


@router.put("/{task_id}", response_model=TaskRead)
async def update_task(
    task_id: str,
    updates: TaskUpdate,
    db: AsyncSession = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    return await task_crud.update_task(db, ctx, task_id, updates)


@router.delete("/{task_id}")
async def delete_task(
    task_id: str,
    db: AsyncSession = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    await task_crud.delete_task(db, ctx, task_id)
    return {"message": "Task deleted"}


# ---------- Toggle Complete (anyone signed in) ----------
@router.post("/{task_id}/toggle", response_model=TaskRead)
async def toggle_task(
    task_id: str,
    db: AsyncSession = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    return await task_crud.toggle_task(db, ctx, task_id)
