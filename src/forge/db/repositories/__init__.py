"""Per-entity repositories over a storage backend.

Every repository except ``UserRepository`` scopes its calls by owner.
"""

from .base import UserScopedRepository
from .achievement_repository import UnlockedAchievementRepository
from .course_repository import CourseRepository
from .habit_repository import HabitLogRepository, HabitRepository
from .todo_repository import TodoRepository
from .user_repository import UserRecord, UserRepository
from .workout_repository import WorkoutExerciseRepository, WorkoutRepository

__all__ = [
    # Base class
    "UserScopedRepository",
    # Page view records
    "HabitRepository",
    "HabitLogRepository",
    "TodoRepository",
    "CourseRepository",
    "WorkoutRepository",
    "WorkoutExerciseRepository",
    "UnlockedAchievementRepository",
    # Local accounts
    "UserRecord",
    "UserRepository",
]
