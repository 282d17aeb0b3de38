from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import or_
from fastapi import HTTPException
from typing import Optional

from app.auth.roles import Action, SessionContext, require
from app.models.announcement import Announcement
from app.schemas.announcement import AnnouncementCreate, AnnouncementUpdate
from app.utils.timezones import utcnow, to_naive_utc


async def list_active_announcements(db: AsyncSession, limit: Optional[int] = None):
    now = utcnow()
    stmt = (
        select(Announcement)
        .where(
            Announcement.is_active.is_(True),
            or_(Announcement.expires_at.is_(None), Announcement.expires_at > now),
        )
        .order_by(Announcement.created_at.desc())
    )
    if limit:
        stmt = stmt.limit(limit)
    result = await db.execute(stmt)
    return result.scalars().all()


async def create_announcement(db: AsyncSession, ctx: SessionContext, data: AnnouncementCreate) -> Announcement:
    require(ctx, Action.announcement_create)
    announcement = Announcement(
        title=data.title,
        content=data.content,
        priority=data.priority,
        expires_at=to_naive_utc(data.expires_at),
        is_active=True,
        created_by=ctx.uid,
        created_by_name=ctx.display_name,
    )
    db.add(announcement)
    await db.commit()
    await db.refresh(announcement)
    return announcement


async def update_announcement(
    db: AsyncSession, ctx: SessionContext, announcement_id: str, data: AnnouncementUpdate
) -> Announcement:
    require(ctx, Action.announcement_update)
    announcement = await db.get(Announcement, announcement_id)
    if not announcement:
        raise HTTPException(status_code=404, detail="Announcement not found")

    for field, value in data.model_dump(exclude_unset=True).items():
        if value is None and field != "expires_at":
            continue
        if field == "expires_at":
            value = to_naive_utc(value)
        setattr(announcement, field, value)
    announcement.updated_at = utcnow()
    await db.commit()
    await db.refresh(announcement)
    return announcement


async def delete_announcement(db: AsyncSession, ctx: SessionContext, announcement_id: str) -> None:
    require(ctx, Action.announcement_delete)
    announcement = await db.get(Announcement, announcement_id)
    if not announcement:
        raise HTTPException(status_code=404, detail="Announcement not found")
    await db.delete(announcement)
    await db.commit()
