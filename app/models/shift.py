from sqlalchemy import Column, String, Date, DateTime, Text, Enum, Index
from app.models.base import Base
from app.utils.timezones import utcnow
import uuid
import enum


class ShiftStatus(str, enum.Enum):
    open = "open"
    assigned = "assigned"
    # Declared for stored records; nothing transitions into these
    completed = "completed"
    cancelled = "cancelled"


class Shift(Base):
    __tablename__ = "shifts"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    date = Column(Date, nullable=False)
    start_time = Column(String(5), nullable=False)  # "HH:MM"
    end_time = Column(String(5), nullable=False)    # may be earlier than start (ends after midnight)
    position = Column(String, nullable=False)
    notes = Column(Text, nullable=False, default="")

    status = Column(Enum(ShiftStatus), nullable=False, default=ShiftStatus.open)
    assigned_to = Column(String, nullable=True)       # profile uid
    assigned_to_name = Column(String, nullable=True)

    created_by = Column(String, nullable=False)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        Index("ix_shifts_date_status", "date", "status"),
    )
