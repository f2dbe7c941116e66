"""Per-day completion counts for the current Monday-to-Sunday week."""

from datetime import date, timedelta
from typing import Any, Iterable, List, Optional

from ..models.gamification import WeeklyBucket
from .coercion import get_field, to_bool, to_date


WEEKDAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


def week_start(today: Optional[date] = None) -> date:
    """Most recent Monday (today itself on a Monday)."""
    today = today or date.today()
    return today - timedelta(days=today.weekday())


def _count_by_day(
    records: Optional[Iterable[Any]],
    date_field: str,
    completed_field: Optional[str],
) -> dict:
    counts: dict = {}
    for record in records or []:
        if completed_field and not to_bool(get_field(record, completed_field, False)):
            continue
        day = to_date(get_field(record, date_field))
        if day is not None:
            counts[day] = counts.get(day, 0) + 1
    return counts


def weekly_buckets(
    habit_logs: Optional[Iterable[Any]] = None,
    todos: Optional[Iterable[Any]] = None,
    workouts: Optional[Iterable[Any]] = None,
    today: Optional[date] = None,
) -> List[WeeklyBucket]:
    """
    Build one row per day of the week containing ``today``.

    Completed habit logs count on their ``date``, completed todos on their
    ``due_date`` and workouts on their ``date``. Dates compare as calendar
    days with no timezone normalization.

    Returns:
        Seven WeeklyBucket rows, Monday first
    """
    start = week_start(today)
    habits_by_day = _count_by_day(habit_logs, "date", "completed")
    todos_by_day = _count_by_day(todos, "due_date", "completed")
    workouts_by_day = _count_by_day(workouts, "date", None)

    buckets = []
    for offset, name in enumerate(WEEKDAY_NAMES):
        day = start + timedelta(days=offset)
        buckets.append(WeeklyBucket(
            day=name,
            date=day.isoformat(),
            habits=habits_by_day.get(day, 0),
            todos=todos_by_day.get(day, 0),
            workouts=workouts_by_day.get(day, 0),
        ))
    return buckets
