from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import func
from fastapi import HTTPException
import logging

from app.auth.config import auth_config
from app.auth.roles import Action, SessionContext, require
from app.models.profile import Profile, UserRole
from app.schemas.profile import ProfileSelfUpdate, EmployeeUpdate
from app.utils.timezones import utcnow

log = logging.getLogger(__name__)

DEFAULT_DISPLAY_NAME = "Uživatel"


def is_bootstrap_admin(email: str) -> bool:
    return (email or "").lower() == auth_config.admin_email.lower()


def _default_display_name(user) -> str:
    if is_bootstrap_admin(user.email):
        return auth_config.admin_display_name
    name = (getattr(user, "display_name", None) or "").strip()
    if name:
        return name
    local_part = (user.email or "").split("@")[0]
    return local_part or DEFAULT_DISPLAY_NAME


async def get_profile(db: AsyncSession, uid: str):
    return await db.get(Profile, uid)


async def resolve_profile(db: AsyncSession, user) -> Profile:
    """Fetch the caller's profile, creating it on first sign-in.

    The bootstrap admin account always ends up with the admin role, even if
    something wrote a different role in the meantime. The very first profile
    ever created is an admin as well; everybody after that starts as employee.
    """
    uid = str(user.id)
    profile = await db.get(Profile, uid)
    bootstrap = is_bootstrap_admin(user.email)

    if profile is not None:
        if bootstrap and profile.role != UserRole.admin:
            log.warning("bootstrap admin %s had role=%s, restoring admin", uid, profile.role)
            profile.role = UserRole.admin
            profile.display_name = auth_config.admin_display_name
            profile.updated_at = utcnow()
            await db.commit()
            await db.refresh(profile)
        return profile

    existing = (await db.execute(select(func.count()).select_from(Profile))).scalar_one()
    role = UserRole.admin if (bootstrap or existing == 0) else UserRole.employee

    profile = Profile(
        uid=uid,
        email=user.email or "",
        display_name=_default_display_name(user),
        role=role,
        is_active=True,
    )
    db.add(profile)
    await db.commit()
    await db.refresh(profile)
    log.info("created profile uid=%s role=%s", uid, role.value)
    return profile


async def update_own_profile(db: AsyncSession, ctx: SessionContext, data: ProfileSelfUpdate) -> Profile:
    require(ctx, Action.profile_update_self)
    profile = await db.get(Profile, ctx.uid)
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")

    # role / is_active are not part of ProfileSelfUpdate, so they cannot leak in here
    for field, value in data.model_dump(exclude_unset=True).items():
        if field == "display_name" and not (value or "").strip():
            continue
        setattr(profile, field, value)
    profile.updated_at = utcnow()
    await db.commit()
    await db.refresh(profile)
    return profile


# --------- Employee management (admin) ---------
async def list_employees(db: AsyncSession):
    result = await db.execute(select(Profile).order_by(Profile.display_name.asc()))
    return result.scalars().all()


async def update_employee(db: AsyncSession, ctx: SessionContext, uid: str, data: EmployeeUpdate) -> Profile:
    require(ctx, Action.employee_update)
    profile = await db.get(Profile, uid)
    if not profile:
        raise HTTPException(status_code=404, detail="Employee not found")

    submitted = data.model_dump(exclude_unset=True)
    if uid == ctx.uid and ({"role", "is_active"} & submitted.keys()):
        raise HTTPException(status_code=409, detail="You cannot change your own role or active flag")

    updates = {
        k: v for k, v in submitted.items()
        if v is not None or k not in ("role", "is_active")
    }
    if is_bootstrap_admin(profile.email) and updates.get("role", UserRole.admin) != UserRole.admin:
        raise HTTPException(status_code=409, detail="The bootstrap admin must stay admin")

    for field, value in updates.items():
        setattr(profile, field, value)
    profile.updated_at = utcnow()
    await db.commit()
    await db.refresh(profile)
    log.info("employee %s updated by %s: %s", uid, ctx.uid, sorted(updates))
    return profile


async def delete_employee(db: AsyncSession, ctx: SessionContext, uid: str) -> None:
    require(ctx, Action.employee_delete)
    if uid == ctx.uid:
        raise HTTPException(status_code=409, detail="You cannot delete yourself")

    profile = await db.get(Profile, uid)
    if not profile:
        raise HTTPException(status_code=404, detail="Employee not found")

    await db.delete(profile)
    await db.commit()
    log.info("employee %s deleted by %s", uid, ctx.uid)
