from sqlalchemy import Column, String, Boolean, DateTime, Text, Enum
from app.models.base import Base
from app.utils.timezones import utcnow
import uuid
import enum


class AnnouncementPriority(str, enum.Enum):
    normal = "normal"
    important = "important"
    urgent = "urgent"


class Announcement(Base):
    __tablename__ = "announcements"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    priority = Column(Enum(AnnouncementPriority), nullable=False, default=AnnouncementPriority.normal)
    is_active = Column(Boolean, nullable=False, default=True)
    expires_at = Column(DateTime, nullable=True)

    created_by = Column(String, nullable=False)
    created_by_name = Column(String, nullable=False)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
