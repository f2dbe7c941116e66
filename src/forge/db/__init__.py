"""Storage layer: backends, schema and repositories."""

import logging
from typing import Optional

from ..config import Settings, get_settings
from .backends import Backend, Row, SQLiteBackend, SupabaseBackend
from .repositories import (
    CourseRepository,
    HabitLogRepository,
    HabitRepository,
    TodoRepository,
    UnlockedAchievementRepository,
    UserRepository,
    WorkoutExerciseRepository,
    WorkoutRepository,
)

logger = logging.getLogger(__name__)


def create_backend(settings: Optional[Settings] = None) -> Backend:
    """
    Build the backend selected by ``settings.backend``.

    Raises:
        BackendNotConfiguredError: If Supabase is selected without credentials
    """
    settings = settings or get_settings()
    if settings.backend == "supabase":
        logger.info("Using Supabase backend")
        return SupabaseBackend(url=settings.supabase_url, key=settings.supabase_service_key)

    logger.info(f"Using SQLite backend at {settings.database_path}")
    return SQLiteBackend(db_path=settings.database_path)


__all__ = [
    "Backend",
    "Row",
    "SQLiteBackend",
    "SupabaseBackend",
    "create_backend",
    "CourseRepository",
    "HabitLogRepository",
    "HabitRepository",
    "TodoRepository",
    "UnlockedAchievementRepository",
    "UserRepository",
    "WorkoutExerciseRepository",
    "WorkoutRepository",
]
