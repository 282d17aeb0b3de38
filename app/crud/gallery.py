from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.exc import IntegrityError
from fastapi import HTTPException
import logging
import time

from app.auth.roles import Action, SessionContext, require
from app.core.constants import GALLERY_PAGE_SIZE, GALLERY_PREFIX
from app.models.gallery import GalleryPhoto, PhotoLike
from app.utils import spaces

log = logging.getLogger(__name__)


async def get_photo(db: AsyncSession, photo_id: str) -> GalleryPhoto:
    photo = await db.get(GalleryPhoto, photo_id)
    if not photo:
        raise HTTPException(status_code=404, detail="Photo not found")
    return photo


async def list_photos(db: AsyncSession, limit: int = GALLERY_PAGE_SIZE):
    result = await db.execute(
        select(GalleryPhoto).order_by(GalleryPhoto.created_at.desc()).limit(limit)
    )
    return result.scalars().all()


async def upload_photo(
    db: AsyncSession,
    ctx: SessionContext,
    *,
    body: bytes,
    content_type: str,
    extension: str,
    caption: str = "",
) -> GalleryPhoto:
    require(ctx, Action.photo_upload)

    key = spaces.full_key(f"{GALLERY_PREFIX}/{ctx.uid}/{int(time.time() * 1000)}.{extension}")
    key = await spaces.put_public_object(key=key, body=body, content_type=content_type)
    log.info("uploaded %s (%s bytes) for %s", key, len(body), ctx.uid)

    photo = GalleryPhoto(
        image_url=spaces.public_url(key),
        storage_path=key,
        caption=(caption or "").strip(),
        uploaded_by=ctx.uid,
        uploaded_by_name=ctx.display_name,
        uploaded_by_photo=ctx.photo_url,
    )
    db.add(photo)
    await db.commit()
    await db.refresh(photo)
    return photo


async def set_like(db: AsyncSession, ctx: SessionContext, photo_id: str, liked: bool) -> GalleryPhoto:
    """Add or remove the caller in the photo's likes. Repeating a call changes nothing."""
    require(ctx, Action.photo_like)
    photo = await get_photo(db, photo_id)
    existing = await db.get(PhotoLike, (photo_id, ctx.uid))

    if liked and existing is None:
        db.add(PhotoLike(photo_id=photo_id, uid=ctx.uid))
        try:
            await db.commit()
        except IntegrityError:
            # a parallel request liked it first; the set already holds the uid
            await db.rollback()
            await db.refresh(photo)
            log.info("like idempotent hit: photo=%s uid=%s", photo_id, ctx.uid)
    elif not liked and existing is not None:
        await db.delete(existing)
        await db.commit()

    await db.refresh(photo, attribute_names=["like_rows"])
    return photo


async def toggle_like(db: AsyncSession, ctx: SessionContext, photo_id: str) -> GalleryPhoto:
    require(ctx, Action.photo_like)
    existing = await db.get(PhotoLike, (photo_id, ctx.uid))
    return await set_like(db, ctx, photo_id, liked=existing is None)


async def delete_photo(db: AsyncSession, ctx: SessionContext, photo_id: str) -> None:
    photo = await get_photo(db, photo_id)
    if photo.uploaded_by != ctx.uid and not ctx.is_admin:
        raise HTTPException(status_code=403, detail="Only the author or an admin can delete this photo")

    if photo.storage_path:
        try:
            await spaces.delete_object(photo.storage_path)
        except Exception:
            # object may already be gone; the record still has to go
            log.warning("could not delete %s from storage", photo.storage_path, exc_info=True)

    await db.delete(photo)
    await db.commit()
    log.info("photo %s deleted by %s", photo_id, ctx.uid)
