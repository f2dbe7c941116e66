"""
Achievement definitions and stateless evaluation.

Each achievement is a predicate over the workout history and the current
workout streak. Predicates are independent of each other; list order only
controls display order.
"""

from typing import Any, Callable, Dict, Iterable, List, Optional

from ..models.gamification import Achievement
from .coercion import get_field, to_count, to_int


# =============================================================================
# Default Achievement Definitions
# =============================================================================

DEFAULT_ACHIEVEMENTS: List[Dict[str, Any]] = [
    {
        "id": "first_workout",
        "name": "First Steps",
        "description": "Log your first workout",
        "icon": "🎯",
        "condition_type": "workout_count",
        "condition_value": 1,
    },
    {
        "id": "workouts_10",
        "name": "Regular",
        "description": "Log 10 workouts",
        "icon": "🏋️",
        "condition_type": "workout_count",
        "condition_value": 10,
    },
    {
        "id": "workouts_50",
        "name": "Gym Rat",
        "description": "Log 50 workouts",
        "icon": "🐀",
        "condition_type": "workout_count",
        "condition_value": 50,
    },
    {
        "id": "streak_3",
        "name": "Getting Started",
        "description": "Train 3 days in a row",
        "icon": "🔥",
        "condition_type": "streak",
        "condition_value": 3,
    },
    {
        "id": "streak_7",
        "name": "Week Warrior",
        "description": "Train 7 days in a row",
        "icon": "⚡",
        "condition_type": "streak",
        "condition_value": 7,
    },
    {
        "id": "streak_30",
        "name": "Monthly Master",
        "description": "Train 30 days in a row",
        "icon": "🏆",
        "condition_type": "streak",
        "condition_value": 30,
    },
    {
        "id": "hours_10",
        "name": "Ten Hour Club",
        "description": "Log 10 hours of training",
        "icon": "⏱️",
        "condition_type": "total_minutes",
        "condition_value": 600,
    },
    {
        "id": "exercises_100",
        "name": "Century",
        "description": "Log 100 exercises",
        "icon": "💯",
        "condition_type": "exercise_count",
        "condition_value": 100,
    },
]

ACHIEVEMENTS: List[Achievement] = [
    Achievement(display_order=i + 1, **definition)
    for i, definition in enumerate(DEFAULT_ACHIEVEMENTS)
]


def _exercise_count(workouts: List[Any], exercises: Optional[Iterable[Any]]) -> int:
    if exercises is not None:
        return len(list(exercises))
    return sum(to_count(get_field(w, "exercises", None)) for w in workouts)


ConditionFn = Callable[[List[Any], int, Optional[Iterable[Any]]], int]

# Each condition maps (workouts, streak, exercises) to the measured value
CONDITIONS: Dict[str, ConditionFn] = {
    "workout_count": lambda workouts, streak, exercises: len(workouts),
    "streak": lambda workouts, streak, exercises: streak,
    "total_minutes": lambda workouts, streak, exercises: sum(
        max(0, to_int(get_field(w, "duration", 0))) for w in workouts
    ),
    "exercise_count": lambda workouts, streak, exercises: _exercise_count(workouts, exercises),
}


def is_achieved(
    achievement: Achievement,
    workouts: Optional[Iterable[Any]],
    streak: int,
    exercises: Optional[Iterable[Any]] = None,
) -> bool:
    """Check a single achievement predicate; unknown conditions are never met."""
    condition = CONDITIONS.get(achievement.condition_type)
    if condition is None:
        return False
    measured = condition(list(workouts or []), to_int(streak), exercises)
    return measured >= achievement.condition_value


def evaluate_achievements(
    workouts: Optional[Iterable[Any]],
    streak: int,
    exercises: Optional[Iterable[Any]] = None,
    achievements: Optional[List[Achievement]] = None,
) -> Dict[str, bool]:
    """
    Evaluate every achievement against the current data.

    Args:
        workouts: Workout records
        streak: Current workout streak in days
        exercises: Optional flat exercise list (else nested per workout)
        achievements: Definitions to evaluate, defaults to ACHIEVEMENTS

    Returns:
        Mapping of achievement id to whether it currently holds, in display order
    """
    workouts = list(workouts or [])
    if exercises is not None:
        exercises = list(exercises)
    return {
        a.id: is_achieved(a, workouts, streak, exercises)
        for a in (achievements if achievements is not None else ACHIEVEMENTS)
    }
