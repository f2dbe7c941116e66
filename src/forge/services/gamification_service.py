"""
Gamification summary shared by the gym view and the dashboard.

Handles:
- XP and level from all of the user's activity
- Workout streak
- Achievement evaluation and first-unlock persistence
"""

import logging
from datetime import date, datetime, timezone
from typing import Iterable, List, Optional

from ..db.backends import Backend
from ..db.repositories import (
    CourseRepository,
    HabitLogRepository,
    TodoRepository,
    UnlockedAchievementRepository,
    WorkoutRepository,
)
from ..metrics import ACHIEVEMENTS, build_streak_info, calculate_level, calculate_xp, evaluate_achievements
from ..models import (
    AchievementWithStatus,
    Course,
    GamificationSummary,
    HabitLog,
    Todo,
    Workout,
)


logger = logging.getLogger(__name__)


class GamificationService:
    """Derives XP, level, streak and achievements for a user."""

    def __init__(self, backend: Backend):
        self.workouts = WorkoutRepository(backend)
        self.habit_logs = HabitLogRepository(backend)
        self.todos = TodoRepository(backend)
        self.courses = CourseRepository(backend)
        self.unlocks = UnlockedAchievementRepository(backend)

    def summarize(
        self,
        user_id: str,
        workouts: List[Workout],
        habit_logs: Iterable[HabitLog],
        todos: Iterable[Todo],
        courses: Iterable[Course],
        today: Optional[date] = None,
    ) -> GamificationSummary:
        """
        Build the summary from already-fetched records.

        Achievements that qualify now and were never recorded are persisted
        with the current time. An achievement counts as unlocked if it
        qualifies now or was recorded before.

        Args:
            user_id: Owner
            workouts: Workouts with their exercises attached
            habit_logs: All habit logs
            todos: All todos
            courses: All courses
            today: Reference day for the streak

        Returns:
            GamificationSummary
        """
        total_xp = calculate_xp(
            workouts=workouts,
            habit_logs=habit_logs,
            todos=todos,
            courses=courses,
        )
        streak = build_streak_info(workouts, today=today)
        qualifies = evaluate_achievements(workouts, streak.current)

        recorded = self.unlocks.unlocked_at(user_id)
        now = datetime.now(timezone.utc)
        for achievement_id, achieved in qualifies.items():
            if achieved and achievement_id not in recorded:
                if self.unlocks.unlock(user_id, achievement_id, now):
                    logger.info(f"User {user_id} unlocked achievement {achievement_id}")
                recorded.setdefault(achievement_id, now)

        achievements = [
            AchievementWithStatus(
                achievement=achievement,
                unlocked=qualifies.get(achievement.id, False) or achievement.id in recorded,
                unlocked_at=recorded.get(achievement.id),
            )
            for achievement in ACHIEVEMENTS
        ]

        return GamificationSummary(
            total_xp=total_xp,
            level=calculate_level(total_xp),
            streak=streak,
            achievements=achievements,
            achievements_unlocked=sum(1 for a in achievements if a.unlocked),
        )

    def get_summary(self, user_id: str, today: Optional[date] = None) -> GamificationSummary:
        """Fetch everything the summary needs and build it."""
        return self.summarize(
            user_id,
            workouts=self.workouts.list_with_exercises(user_id),
            habit_logs=self.habit_logs.list(user_id),
            todos=self.todos.list(user_id),
            courses=self.courses.list(user_id),
            today=today,
        )
