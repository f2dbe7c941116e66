"""Consecutive-day streaks over dated events (habit logs, workouts)."""

from datetime import date, timedelta
from typing import Any, Iterable, List, Optional

from ..models.gamification import StreakInfo
from .coercion import get_field, to_bool, to_date


def distinct_dates(
    events: Iterable[Any],
    date_field: str = "date",
    completed_field: Optional[str] = None,
) -> List[date]:
    """
    Collapse events to their distinct dates, most recent first.

    Args:
        events: Records (dicts or models) or plain dates/ISO strings
        date_field: Name of the date attribute on records
        completed_field: If set, events whose flag is falsy are skipped

    Returns:
        Sorted (descending) list of unique dates; unparseable dates are dropped
    """
    seen = set()
    for event in events or []:
        if isinstance(event, (str, date)):
            parsed = to_date(event)
        else:
            if completed_field and not to_bool(get_field(event, completed_field, False)):
                continue
            parsed = to_date(get_field(event, date_field))
        if parsed is not None:
            seen.add(parsed)
    return sorted(seen, reverse=True)


def calculate_streak(
    events: Iterable[Any],
    today: Optional[date] = None,
    date_field: str = "date",
    completed_field: Optional[str] = None,
) -> int:
    """
    Count consecutive days ending today or yesterday.

    The most recent event must be today or yesterday, otherwise the streak
    is 0. From there each pair of neighbouring dates must be exactly one day
    apart; the first larger gap ends the streak.

    Args:
        events: Dated events (see distinct_dates)
        today: Reference day, defaults to date.today()
        date_field: Name of the date attribute on records
        completed_field: Optional completion flag to filter on

    Returns:
        Streak length in days (>= 0)
    """
    today = today or date.today()
    dates = distinct_dates(events, date_field, completed_field)
    if not dates:
        return 0

    if dates[0] not in (today, today - timedelta(days=1)):
        return 0

    streak = 1
    for newer, older in zip(dates, dates[1:]):
        if (newer - older).days != 1:
            break
        streak += 1
    return streak


def calculate_longest_streak(
    events: Iterable[Any],
    date_field: str = "date",
    completed_field: Optional[str] = None,
) -> int:
    """Longest run of consecutive days anywhere in the history."""
    dates = distinct_dates(events, date_field, completed_field)
    if not dates:
        return 0

    longest = current = 1
    for newer, older in zip(dates, dates[1:]):
        if (newer - older).days == 1:
            current += 1
            longest = max(longest, current)
        else:
            current = 1
    return longest


def build_streak_info(
    events: Iterable[Any],
    today: Optional[date] = None,
    date_field: str = "date",
    completed_field: Optional[str] = None,
) -> StreakInfo:
    """Current and longest streak plus the last activity date."""
    events = list(events or [])
    dates = distinct_dates(events, date_field, completed_field)
    return StreakInfo(
        current=calculate_streak(events, today, date_field, completed_field),
        longest=calculate_longest_streak(events, date_field, completed_field),
        last_activity_date=dates[0].isoformat() if dates else None,
    )
