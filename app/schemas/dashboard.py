from pydantic import BaseModel
from datetime import date as dt_date
from typing import List

from app.schemas.announcement import AnnouncementRead
from app.schemas.profile import ProfileRead
from app.schemas.shift import ShiftRead
from app.schemas.task import TaskRead


class DashboardRead(BaseModel):
    greeting: str
    today: dt_date
    profile: ProfileRead
    upcoming_shifts: List[ShiftRead]
    tasks: List[TaskRead]
    announcements: List[AnnouncementRead]


class CalendarDayRead(BaseModel):
    date: dt_date
    day: int
    is_current_month: bool
    is_today: bool
    shifts: List[ShiftRead] = []



class CalendarMonthRead(BaseModel):
    year: int
    month: int
    weekdays: List[str]
    days: List[CalendarDayRead]
