# auth/dependencies.py
from fastapi import HTTPException, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import get_db
from app.auth.roles import SessionContext
from app.auth.routes import current_active_user
from app.crud.profile import resolve_profile
from app.models.user import User


async def get_session_context(
    user: User = Depends(current_active_user),
    db: AsyncSession = Depends(get_db),
) -> SessionContext:
    profile = await resolve_profile(db, user)
    return SessionContext.from_profile(profile)


async def get_admin_context(ctx: SessionContext = Depends(get_session_context)) -> SessionContext:
    if not ctx.is_admin:
        raise HTTPException(status_code=403, detail="Admin access only")
    return ctx
