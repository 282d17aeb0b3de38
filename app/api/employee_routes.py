from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from app.auth.dependencies import get_admin_context
from app.auth.roles import SessionContext
from app.crud import profile as profile_crud
from app.db import get_db
from app.schemas.profile import EmployeeRead, EmployeeUpdate

router = APIRouter(prefix="/employees", tags=["employees"])


@router.get("/", response_model=List[EmployeeRead])
async def list_employees(
    db: AsyncSession = Depends(get_db),
    ctx: SessionContext = Depends(get_admin_context),
):
    return await profile_crud.list_employees(db)


@router.put("/{uid}", response_model=EmployeeRead)
async def update_employee(
    uid: str,
    data: EmployeeUpdate,
    db: AsyncSession = Depends(get_db),
    ctx: SessionContext = Depends(get_admin_context),
):
    return await profile_crud.update_employee(db, ctx, uid, data)


@router.delete("/{uid}")
async def delete_employee(
    uid: str,
    db: AsyncSession = Depends(get_db),
    ctx: SessionContext = Depends(get_admin_context),
):
    await profile_crud.delete_employee(db, ctx, uid)
    return {"message": "Employee deleted"}
