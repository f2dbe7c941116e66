"""Derived statistics: streaks, XP, levels, achievements and weekly buckets.

All functions are pure and never raise on malformed records.
"""

from .achievements import ACHIEVEMENTS, evaluate_achievements, is_achieved
from .levels import LEVEL_TIERS, calculate_level, get_level, get_next_level, level_progress
from .streaks import (
    build_streak_info,
    calculate_longest_streak,
    calculate_streak,
    distinct_dates,
)
from .weekly import week_start, weekly_buckets
from .xp import calculate_xp, course_xp, habit_xp, todo_xp, workout_xp

__all__ = [
    # Streaks
    "build_streak_info",
    "calculate_longest_streak",
    "calculate_streak",
    "distinct_dates",
    # XP
    "calculate_xp",
    "course_xp",
    "habit_xp",
    "todo_xp",
    "workout_xp",
    # Levels
    "LEVEL_TIERS",
    "calculate_level",
    "get_level",
    "get_next_level",
    "level_progress",
    # Achievements
    "ACHIEVEMENTS",
    "evaluate_achievements",
    "is_achieved",
    # Weekly
    "week_start",
    "weekly_buckets",
]
