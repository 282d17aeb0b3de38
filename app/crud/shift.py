from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import update
from datetime import date, timedelta
from typing import Optional
from fastapi import HTTPException
import logging

from app.auth.roles import Action, SessionContext, require
from app.core.constants import SHIFT_TEMPLATES, CUSTOM_TEMPLATE, SHIFT_LIST_LOOKBACK_DAYS
from app.models.profile import Profile
from app.models.shift import Shift, ShiftStatus
from app.models.task import Task, TaskStatus
from app.schemas.shift import ShiftCreate, ShiftUpdate, ShiftBulkCreate
from app.utils.timezones import utcnow, local_today, is_past

log = logging.getLogger(__name__)


async def get_shift(db: AsyncSession, shift_id: str) -> Shift:
    shift = await db.get(Shift, shift_id)
    if not shift:
        raise HTTPException(status_code=404, detail="Shift not found")
    return shift


def _ensure_not_past(shift: Shift, today: Optional[date] = None):
    if is_past(shift.date, today):
        raise HTTPException(status_code=409, detail="Shift is in the past")


async def create_shift(db: AsyncSession, ctx: SessionContext, shift: ShiftCreate) -> Shift:
    require(ctx, Action.shift_create)
    new_shift = Shift(
        date=shift.date,
        start_time=shift.start_time,
        end_time=shift.end_time,
        position=shift.position,
        notes=shift.notes or "",
        status=ShiftStatus.open,
        created_by=ctx.uid,
    )
    db.add(new_shift)
    await db.commit()
    await db.refresh(new_shift)
    log.info("shift %s created for %s by %s", new_shift.id, new_shift.date, ctx.uid)
    return new_shift


async def list_shifts(
    db: AsyncSession,
    ctx: SessionContext,
    start: Optional[date] = None,
    end: Optional[date] = None,
    view: str = "all",
    limit: Optional[int] = None,
):
    """Shifts ordered by date.

    ``view`` is one of ``all``, ``open`` or ``mine``. Without ``start`` the
    list begins a week before today so recent history stays visible.
    """
    if start is None:
        start = local_today() - timedelta(days=SHIFT_LIST_LOOKBACK_DAYS)

    stmt = select(Shift).where(Shift.date >= start)
    if end is not None:
        stmt = stmt.where(Shift.date <= end)
    if view == "open":
        stmt = stmt.where(Shift.status == ShiftStatus.open)
    elif view == "mine":
        stmt = stmt.where(Shift.assigned_to == ctx.uid)
    stmt = stmt.order_by(Shift.date.asc(), Shift.start_time.asc())
    if limit:
        stmt = stmt.limit(limit)

    result = await db.execute(stmt)
    return result.scalars().all()


async def get_shifts_between(db: AsyncSession, start: date, end: date):
    result = await db.execute(
        select(Shift)
        .where(Shift.date >= start, Shift.date <= end)
        .order_by(Shift.date.asc(), Shift.start_time.asc())
    )
    return result.scalars().all()


async def update_shift(db: AsyncSession, ctx: SessionContext, shift_id: str, updates: ShiftUpdate) -> Shift:
    require(ctx, Action.shift_update)
    shift = await get_shift(db, shift_id)

    values = {k: v for k, v in updates.model_dump(exclude_unset=True).items() if v is not None}
    for field, value in values.items():
        setattr(shift, field, value)
    shift.updated_at = utcnow()
    await db.commit()
    await db.refresh(shift)
    return shift


async def delete_shift(db: AsyncSession, ctx: SessionContext, shift_id: str) -> None:
    require(ctx, Action.shift_delete)
    shift = await get_shift(db, shift_id)

    # Tasks pointing at this shift are left as they are
    await db.delete(shift)
    await db.commit()
    log.info("shift %s deleted by %s", shift_id, ctx.uid)


# --------- Assignment state machine ---------
async def _take_open_shift(db: AsyncSession, shift: Shift, uid: str, name: str) -> Shift:
    # Conditional update: only succeeds while the row is still open
    stmt = (
        update(Shift)
        .where(
            Shift.id == shift.id,
            Shift.status == ShiftStatus.open,
            Shift.assigned_to.is_(None),
        )
        .values(
            status=ShiftStatus.assigned,
            assigned_to=uid,
            assigned_to_name=name,
            updated_at=utcnow(),
        )
        .execution_options(synchronize_session=False)
    )
    result = await db.execute(stmt)
    await db.commit()
    if result.rowcount == 0:
        raise HTTPException(status_code=409, detail="Shift was taken in the meantime")
    await db.refresh(shift)
    return shift


async def claim_shift(db: AsyncSession, ctx: SessionContext, shift_id: str, today: Optional[date] = None) -> Shift:
    require(ctx, Action.shift_claim)
    shift = await get_shift(db, shift_id)
    _ensure_not_past(shift, today)
    if shift.status != ShiftStatus.open or shift.assigned_to:
        raise HTTPException(status_code=409, detail="Shift is not open")

    shift = await _take_open_shift(db, shift, ctx.uid, ctx.display_name)
    log.info("shift %s claimed by %s", shift_id, ctx.uid)
    return shift


async def assign_shift(
    db: AsyncSession,
    ctx: SessionContext,
    shift_id: str,
    target_uid: str,
    today: Optional[date] = None,
) -> Shift:
    require(ctx, Action.shift_assign)
    shift = await get_shift(db, shift_id)
    _ensure_not_past(shift, today)
    if shift.status != ShiftStatus.open or shift.assigned_to:
        raise HTTPException(status_code=409, detail="Shift is not open")

    target = await db.get(Profile, target_uid)
    if not target:
        raise HTTPException(status_code=404, detail="Employee not found")
    if not target.is_active:
        raise HTTPException(status_code=409, detail="Employee is not active")

    shift = await _take_open_shift(db, shift, target.uid, target.display_name)
    log.info("shift %s assigned to %s by %s", shift_id, target_uid, ctx.uid)
    return shift


async def release_shift(db: AsyncSession, ctx: SessionContext, shift_id: str, today: Optional[date] = None) -> Shift:
    require(ctx, Action.shift_release)
    shift = await get_shift(db, shift_id)
    _ensure_not_past(shift, today)
    if shift.status != ShiftStatus.assigned or not shift.assigned_to:
        raise HTTPException(status_code=409, detail="Shift is not assigned")
    if shift.assigned_to != ctx.uid and not ctx.is_admin:
        raise HTTPException(status_code=403, detail="Only the assignee or an admin can release this shift")

    holder = shift.assigned_to
    stmt = (
        update(Shift)
        .where(
            Shift.id == shift_id,
            Shift.status == ShiftStatus.assigned,
            Shift.assigned_to == holder,
        )
        .values(
            status=ShiftStatus.open,
            assigned_to=None,
            assigned_to_name=None,
            updated_at=utcnow(),
        )
        .execution_options(synchronize_session=False)
    )
    result = await db.execute(stmt)
    await db.commit()
    if result.rowcount == 0:
        raise HTTPException(status_code=409, detail="Shift changed in the meantime")
    await db.refresh(shift)
    log.info("shift %s released from %s by %s", shift_id, holder, ctx.uid)
    return shift


# --------- Bulk creation ---------
def resolve_template_times(template: str, start_time: Optional[str], end_time: Optional[str]):
    if template == CUSTOM_TEMPLATE:
        if not (start_time and end_time):
            raise HTTPException(status_code=400, detail="Custom shifts need start_time and end_time")
        start, end = start_time, end_time
    elif template in SHIFT_TEMPLATES:
        start, end = SHIFT_TEMPLATES[template]
    else:
        raise HTTPException(status_code=400, detail=f"Unknown shift template: {template}")

    if start == end:
        raise HTTPException(status_code=400, detail="Shift must not start and end at the same time")
    return start, end


async def bulk_create_shifts(db: AsyncSession, ctx: SessionContext, payload: ShiftBulkCreate):
    """Create one open shift per selected date, each with its own copy of the task list.

    Shifts are committed one by one. If something fails part-way the shifts
    already committed stay in place and the error propagates.
    """
    require(ctx, Action.shift_create)
    start, end = resolve_template_times(payload.template, payload.start_time, payload.end_time)

    dates = sorted(set(payload.dates))
    created_shifts, created_tasks = [], []

    try:
        for d in dates:
            new_shift = Shift(
                date=d,
                start_time=start,
                end_time=end,
                position=payload.position,
                notes=payload.notes or "",
                status=ShiftStatus.open,
                created_by=ctx.uid,
            )
            db.add(new_shift)
            await db.flush()  # need the id before adding tasks

            shift_tasks = []
            for spec in payload.tasks:
                task = Task(
                    title=spec.title,
                    description=spec.description,
                    priority=spec.priority,
                    status=TaskStatus.pending,
                    shift_id=new_shift.id,
                    created_by=ctx.uid,
                )
                db.add(task)
                shift_tasks.append(task)

            await db.commit()
            created_shifts.append(new_shift)
            created_tasks.extend(shift_tasks)
    except Exception:
        log.exception(
            "bulk shift creation stopped after %s of %s shifts", len(created_shifts), len(dates)
        )
        raise

    log.info(
        "bulk created %s shifts and %s tasks (%s %s-%s) by %s",
        len(created_shifts), len(created_tasks), payload.position, start, end, ctx.uid,
    )
    return created_shifts, created_tasks
