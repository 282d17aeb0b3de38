from sqlalchemy import Column, String, Date, DateTime, Text, Enum
from app.models.base import Base
from app.utils.timezones import utcnow
import uuid
import enum


class TaskPriority(str, enum.Enum):
    low = "low"
    medium = "medium"
    high = "high"


class TaskStatus(str, enum.Enum):
    pending = "pending"
    completed = "completed"


class Task(Base):
    __tablename__ = "tasks"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    priority = Column(Enum(TaskPriority), nullable=False, default=TaskPriority.medium)
    status = Column(Enum(TaskStatus), nullable=False, default=TaskStatus.pending)

    # Plain reference: deleting a shift leaves its tasks behind
    shift_id = Column(String, nullable=True, index=True)
    assigned_to = Column(String, nullable=True)
    due_date = Column(Date, nullable=True)

    # Completion
    completed_at = Column(DateTime, nullable=True)
    completed_by = Column(String, nullable=True)

    created_by = Column(String, nullable=False)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
