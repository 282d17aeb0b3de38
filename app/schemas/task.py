from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import date, datetime

from app.models.task import TaskPriority, TaskStatus


class TaskBase(BaseModel):
    title: str
    description: Optional[str] = None
    priority: TaskPriority = TaskPriority.medium
    shift_id: Optional[str] = None
    assigned_to: Optional[str] = None
    due_date: Optional[date] = None

class TaskCreate(TaskBase):
    pass

class TaskUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[TaskPriority] = None
    shift_id: Optional[str] = None
    assigned_to: Optional[str] = None
    due_date: Optional[date] = None

    model_config = ConfigDict(extra="forbid")

class TaskRead(TaskBase):
    id: str
    status: TaskStatus
    completed_at: Optional[datetime] = None
    completed_by: Optional[str] = None
    created_by: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
