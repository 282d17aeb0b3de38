from pydantic import BaseModel, ConfigDict
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from app.models.profile import UserRole


class ProfileRead(BaseModel):
    uid: str
    email: str
    display_name: str
    photo_url: Optional[str] = None
    role: UserRole
    is_active: bool
    phone: Optional[str] = None
    address: Optional[str] = None
    birth_date: Optional[date] = None
    start_date: Optional[date] = None
    position: Optional[str] = None
    hourly_rate: Optional[Decimal] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class EmployeeRead(ProfileRead):
    # only admins see the notes
    admin_notes: Optional[str] = None


# What a user may change about themselves
class ProfileSelfUpdate(BaseModel):
    display_name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    birth_date: Optional[date] = None

    model_config = ConfigDict(extra="forbid")


# What an admin may change about anybody
class EmployeeUpdate(BaseModel):
    role: Optional[UserRole] = None
    is_active: Optional[bool] = None
    position: Optional[str] = None
    hourly_rate: Optional[Decimal] = None
    admin_notes: Optional[str] = None
    start_date: Optional[date] = None

    model_config = ConfigDict(extra="forbid")
