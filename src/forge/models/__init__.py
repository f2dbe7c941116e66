"""Pydantic models for Forge records and derived statistics."""

from .entities import (
    Course,
    CourseCreate,
    CourseUpdate,
    ExerciseCreate,
    Frequency,
    Habit,
    HabitCreate,
    HabitLog,
    HabitLogToggle,
    HabitUpdate,
    Priority,
    Todo,
    TodoCompletion,
    TodoCreate,
    TodoUpdate,
    Workout,
    WorkoutCreate,
    WorkoutExercise,
)
from .gamification import (
    Achievement,
    AchievementWithStatus,
    GamificationSummary,
    LevelInfo,
    LevelTier,
    StreakInfo,
    UnlockedAchievement,
    WeeklyBucket,
)

__all__ = [
    # Records
    "Course",
    "CourseCreate",
    "CourseUpdate",
    "ExerciseCreate",
    "Frequency",
    "Habit",
    "HabitCreate",
    "HabitLog",
    "HabitLogToggle",
    "HabitUpdate",
    "Priority",
    "Todo",
    "TodoCompletion",
    "TodoCreate",
    "TodoUpdate",
    "Workout",
    "WorkoutCreate",
    "WorkoutExercise",
    # Gamification
    "Achievement",
    "AchievementWithStatus",
    "GamificationSummary",
    "LevelInfo",
    "LevelTier",
    "StreakInfo",
    "UnlockedAchievement",
    "WeeklyBucket",
]
