"""Experience points: a weighted linear score over logged activity.

One formula is used everywhere (gym view and dashboard):

    XP = Σ workout minutes × 2
       + exercises logged × 10
       + completed habit logs × 10
       + completed todos × 15
       + courses at 100% × 100

With only workouts in play this is Σ (duration × 2 + exercises × 10).
"""

from typing import Any, Iterable, Optional

from .coercion import get_field, to_bool, to_count, to_int


XP_PER_WORKOUT_MINUTE = 2
XP_PER_EXERCISE = 10
XP_PER_HABIT_LOG = 10
XP_PER_TODO = 15
XP_PER_COURSE = 100

COURSE_COMPLETE_PROGRESS = 100


def workout_xp(workouts: Optional[Iterable[Any]], exercises: Optional[Iterable[Any]] = None) -> int:
    """
    XP earned from gym activity.

    Exercises are counted from ``exercises`` when given, otherwise from each
    workout's nested ``exercises`` list.
    """
    workouts = list(workouts or [])
    minutes = sum(max(0, to_int(get_field(w, "duration", 0))) for w in workouts)

    if exercises is not None:
        exercise_count = len(list(exercises))
    else:
        exercise_count = sum(to_count(get_field(w, "exercises", None)) for w in workouts)

    return minutes * XP_PER_WORKOUT_MINUTE + exercise_count * XP_PER_EXERCISE


def habit_xp(habit_logs: Optional[Iterable[Any]]) -> int:
    """XP for completed habit logs."""
    return XP_PER_HABIT_LOG * sum(
        1 for log in habit_logs or [] if to_bool(get_field(log, "completed", False))
    )


def todo_xp(todos: Optional[Iterable[Any]]) -> int:
    """XP for completed todos."""
    return XP_PER_TODO * sum(
        1 for todo in todos or [] if to_bool(get_field(todo, "completed", False))
    )


def course_xp(courses: Optional[Iterable[Any]]) -> int:
    """XP for courses that reached 100% progress."""
    return XP_PER_COURSE * sum(
        1 for course in courses or []
        if to_int(get_field(course, "progress", 0)) >= COURSE_COMPLETE_PROGRESS
    )


def calculate_xp(
    workouts: Optional[Iterable[Any]] = None,
    habit_logs: Optional[Iterable[Any]] = None,
    todos: Optional[Iterable[Any]] = None,
    courses: Optional[Iterable[Any]] = None,
    exercises: Optional[Iterable[Any]] = None,
) -> int:
    """
    Total XP across all activity categories.

    Args:
        workouts: Workout records (duration, optionally nested exercises)
        habit_logs: Habit log records (completed flag)
        todos: Todo records (completed flag)
        courses: Course records (progress percentage)
        exercises: Flat list of exercise records, overrides nested ones

    Returns:
        Non-negative XP total; 0 for no activity
    """
    return (
        workout_xp(workouts, exercises)
        + habit_xp(habit_logs)
        + todo_xp(todos)
        + course_xp(courses)
    )
