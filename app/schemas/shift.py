from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import date as dt_date, datetime
from typing import List, Optional

from app.core.constants import DEFAULT_POSITION
from app.models.shift import ShiftStatus
from app.models.task import TaskPriority
from app.schemas.task import TaskRead

HHMM = r"^([01]\d|2[0-3]):[0-5]\d$"


class ShiftBase(BaseModel):
    date: dt_date
    start_time: str = Field("09:00", pattern=HHMM)
    end_time: str = Field("17:00", pattern=HHMM)
    position: str = DEFAULT_POSITION
    notes: str = ""

class ShiftCreate(ShiftBase):
    pass

# Only the descriptive fields; status and assignee move through claim/release/assign
class ShiftUpdate(BaseModel):
    date: Optional[dt_date] = None
    start_time: Optional[str] = Field(None, pattern=HHMM)
    end_time: Optional[str] = Field(None, pattern=HHMM)
    position: Optional[str] = None
    notes: Optional[str] = None

    model_config = ConfigDict(extra="forbid")

class ShiftRead(ShiftBase):
    id: str
    status: ShiftStatus
    assigned_to: Optional[str] = None
    assigned_to_name: Optional[str] = None
    created_by: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

class ShiftAssign(BaseModel):
    user_id: str


# ---------- Bulk creation (calendar multi-day picker) ----------
class BulkTaskSpec(BaseModel):
    title: str
    description: Optional[str] = None
    priority: TaskPriority = TaskPriority.medium

class ShiftBulkCreate(BaseModel):
    dates: List[dt_date] = Field(..., min_length=1)
    template: str = "denni"
    start_time: Optional[str] = Field(None, pattern=HHMM)  # required when template == "custom"
    end_time: Optional[str] = Field(None, pattern=HHMM)
    position: str = DEFAULT_POSITION
    notes: str = ""
    tasks: List[BulkTaskSpec] = []

    @field_validator("position")
    @classmethod
    def position_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("position must not be empty")
        return v

class ShiftBulkResult(BaseModel):
    shifts: List[ShiftRead]
    tasks: List[TaskRead]
