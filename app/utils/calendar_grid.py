import calendar
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Dict, List, Optional

GRID_CELLS = 42  # six Monday-first weeks
WEEKDAY_LABELS = ["Po", "Út", "St", "Čt", "Pá", "So", "Ne"]


@dataclass
class CalendarDay:
    date: date
    day: int
    is_current_month: bool
    is_today: bool
    shifts: list = field(default_factory=list)


def month_grid(year: int, month: int, today: Optional[date] = None) -> List[CalendarDay]:
    """Days shown on a month page, padded with the neighbouring months' days."""
    today = today or date.today()
    days = list(calendar.Calendar(firstweekday=calendar.MONDAY).itermonthdates(year, month))
    while len(days) < GRID_CELLS:
        days.append(days[-1] + timedelta(days=1))

    return [
        CalendarDay(
            date=d,
            day=d.day,
            is_current_month=(d.month == month and d.year == year),
            is_today=(d == today),
        )
        for d in days
    ]


def attach_shifts(grid: List[CalendarDay], shifts) -> List[CalendarDay]:
    by_date: Dict[date, list] = {}
    for s in shifts:
        by_date.setdefault(s.date, []).append(s)
    for cell in grid:
        cell.shifts = by_date.get(cell.date, [])
    return grid
