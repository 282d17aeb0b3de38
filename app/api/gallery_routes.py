from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from app.auth.dependencies import get_session_context
from app.auth.roles import SessionContext
from app.crud import gallery as gallery_crud
from app.db import get_db
from app.schemas.gallery import GalleryPhotoRead
from app.utils.images import compress_image
from app.utils.security import validate_and_read_image

router = APIRouter(tags=["gallery"])


@router.get("/", response_model=List[GalleryPhotoRead])
async def list_photos(
    db: AsyncSession = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    return await gallery_crud.list_photos(db)


# 📸 Upload a photo
@router.post("/", response_model=GalleryPhotoRead, status_code=201)
async def upload_photo(
    file: UploadFile = File(...),
    caption: str = Form(""),
    db: AsyncSession = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    body = await validate_and_read_image(file)
    # Pillow work is CPU-bound, keep it off the event loop
    body = await run_in_threadpool(compress_image, body)
    return await gallery_crud.upload_photo(
        db,
        ctx,
        body=body,
        content_type="image/jpeg",
        extension="jpg",
        caption=caption,
    )


# ❤️ Toggle like
@router.post("/{photo_id}/like", response_model=GalleryPhotoRead)
async def toggle_like(
    photo_id: str,
    db: AsyncSession = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    return await gallery_crud.toggle_like(db, ctx, photo_id)


@router.put("/{photo_id}/like", response_model=GalleryPhotoRead)
async def like_photo(
    photo_id: str,
    db: AsyncSession = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    return await gallery_crud.set_like(db, ctx, photo_id, liked=True)


@router.delete("/{photo_id}/like", response_model=GalleryPhotoRead)
async def unlike_photo(
    photo_id: str,
    db: AsyncSession = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    return await gallery_crud.set_like(db, ctx, photo_id, liked=False)


@router.delete("/{photo_id}")
async def delete_photo(
    photo_id: str,
    db: AsyncSession = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    await gallery_crud.delete_photo(db, ctx, photo_id)
    return {"message": "Photo deleted"}
