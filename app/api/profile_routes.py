from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.dependencies import get_session_context
from app.auth.roles import SessionContext
from app.crud import profile as profile_crud
from app.db import get_db
from app.schemas.profile import ProfileRead, ProfileSelfUpdate

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("/me", response_model=ProfileRead)
async def read_my_profile(
    db: AsyncSession = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    return await profile_crud.get_profile(db, ctx.uid)


@router.put("/me", response_model=ProfileRead)
async def update_my_profile(
    data: ProfileSelfUpdate,
    db: AsyncSession = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    return await profile_crud.update_own_profile(db, ctx, data)
