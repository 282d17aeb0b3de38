from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from app.auth.dependencies import get_session_context
from app.auth.roles import SessionContext
from app.crud import announcement as announcement_crud
from app.db import get_db
from app.schemas.announcement import AnnouncementCreate, AnnouncementRead, AnnouncementUpdate

router = APIRouter(tags=["announcements"])


@router.get("/", response_model=List[AnnouncementRead])
async def list_announcements(
    db: AsyncSession = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    return await announcement_crud.list_active_announcements(db)


@router.post("/", response_model=AnnouncementRead, status_code=201)
async def create_announcement(
    data: AnnouncementCreate,
    db: AsyncSession = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    return await announcement_crud.create_announcement(db, ctx, data)


@router.put("/{announcement_id}", response_model=AnnouncementRead)
async def update_announcement(
    announcement_id: str,
    data: AnnouncementUpdate,
    db: AsyncSession = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    return await announcement_crud.update_announcement(db, ctx, announcement_id, data)


@router.delete("/{announcement_id}")
async def delete_announcement(
    announcement_id: str,
    db: AsyncSession = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    await announcement_crud.delete_announcement(db, ctx, announcement_id)
    return {"message": "Announcement deleted"}
