"""
Dashboard: a one-page summary across habits, todos, courses and the gym.

Every section is computed from one fetch per collection.
"""

import logging
from datetime import datetime, timedelta
from typing import List, Optional

from pydantic import BaseModel, Field

from ..db.backends import Backend
from ..db.repositories import (
    CourseRepository,
    HabitLogRepository,
    HabitRepository,
    TodoRepository,
    WorkoutRepository,
)
from ..metrics import calculate_streak, week_start, weekly_buckets
from ..models import Course, GamificationSummary, Habit, Todo, WeeklyBucket
from .course_service import average_progress
from .gamification_service import GamificationService


logger = logging.getLogger(__name__)

DASHBOARD_HABIT_LIMIT = 5
DASHBOARD_TODO_LIMIT = 5
DASHBOARD_COURSE_LIMIT = 4

TAGLINE = "Let's keep the streak alive"


class StatCards(BaseModel):
    """Headline numbers at the top of the dashboard."""

    habit_streak: int = Field(default=0, description="Overall habit streak in days")
    todos_today: int = Field(default=0, description="Pending todos due today")
    course_progress: int = Field(default=0, description="Average course progress (0-100)")
    gym_sessions: int = Field(default=0, description="Workouts this week")


class DashboardHabit(BaseModel):
    habit: Habit
    completed_today: bool = False


class DashboardView(BaseModel):
    greeting: str
    date_line: str
    stats: StatCards
    habits: List[DashboardHabit]
    pending_todos: List[Todo]
    courses: List[Course]
    weekly: List[WeeklyBucket]
    gamification: GamificationSummary


def time_of_day(hour: int) -> str:
    """morning before noon, afternoon before 18:00, evening after."""
    if hour < 12:
        return "morning"
    if hour < 18:
        return "afternoon"
    return "evening"


def build_greeting(email: str, now: datetime) -> str:
    name = email.split("@", 1)[0] or "there"
    return f"Good {time_of_day(now.hour)}, {name} 👋"


def build_date_line(now: datetime) -> str:
    return f"{now:%B} {now.day}, {now.year} • {TAGLINE}"


class DashboardService:
    """Builds the dashboard view for the signed-in user."""

    def __init__(self, backend: Backend):
        self.habits = HabitRepository(backend)
        self.habit_logs = HabitLogRepository(backend)
        self.todos = TodoRepository(backend)
        self.courses = CourseRepository(backend)
        self.workouts = WorkoutRepository(backend)
        self.gamification = GamificationService(backend)

    def get_view(
        self,
        user_id: str,
        email: str,
        now: Optional[datetime] = None,
    ) -> DashboardView:
        """
        Build the dashboard.

        Args:
            user_id: Owner
            email: Used for the greeting
            now: Reference time (greeting, today, current week)

        Returns:
            DashboardView
        """
        now = now or datetime.now()
        today = now.date()
        today_iso = today.isoformat()

        habits = self.habits.list(user_id)
        habit_logs = self.habit_logs.list(user_id)
        todos = self.todos.list(user_id)
        courses = self.courses.list(user_id)
        workouts = self.workouts.list_with_exercises(user_id)

        pending = [t for t in todos if not t.completed]
        logged_today = {
            log.habit_id for log in habit_logs if log.completed and log.date == today_iso
        }
        monday = week_start(today)
        sunday = monday + timedelta(days=6)

        stats = StatCards(
            habit_streak=calculate_streak(habit_logs, today=today, completed_field="completed"),
            todos_today=sum(1 for t in pending if t.due_date == today_iso),
            course_progress=average_progress(courses),
            gym_sessions=sum(
                1 for w in workouts if monday.isoformat() <= w.date[:10] <= sunday.isoformat()
            ),
        )

        return DashboardView(
            greeting=build_greeting(email, now),
            date_line=build_date_line(now),
            stats=stats,
            habits=[
                DashboardHabit(habit=h, completed_today=h.id in logged_today)
                for h in habits[:DASHBOARD_HABIT_LIMIT]
            ],
            pending_todos=pending[:DASHBOARD_TODO_LIMIT],
            courses=courses[:DASHBOARD_COURSE_LIMIT],
            weekly=weekly_buckets(habit_logs, todos, workouts, today=today),
            gamification=self.gamification.summarize(
                user_id,
                workouts=workouts,
                habit_logs=habit_logs,
                todos=todos,
                courses=courses,
                today=today,
            ),
        )
