from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional

from app.models.announcement import AnnouncementPriority


class AnnouncementBase(BaseModel):
    title: str
    content: str
    priority: AnnouncementPriority = AnnouncementPriority.normal
    expires_at: Optional[datetime] = None

class AnnouncementCreate(AnnouncementBase):
    pass

class AnnouncementUpdate(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    priority: Optional[AnnouncementPriority] = None
    is_active: Optional[bool] = None
    expires_at: Optional[datetime] = None

    model_config = ConfigDict(extra="forbid")

class AnnouncementRead(AnnouncementBase):
    id: str
    is_active: bool
    created_by: str
    created_by_name: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
