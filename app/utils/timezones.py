# app/utils/timezones.py
from datetime import datetime, date, timezone
from zoneinfo import ZoneInfo
from typing import Optional

from app.core.config import settings

LOCAL = ZoneInfo(settings.app_timezone)


def utcnow() -> datetime:
    """Naive UTC timestamp, the form every DateTime column stores."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def local_now(now: Optional[datetime] = None) -> datetime:
    if now is None:
        return datetime.now(LOCAL)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(LOCAL)


def local_today(now: Optional[datetime] = None) -> date:
    return local_now(now).date()


def is_past(day: date, today: Optional[date] = None) -> bool:
    return day < (today or local_today())


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
