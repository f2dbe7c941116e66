"""Services behind the page views and the session collaborator."""

from .auth_service import (
    AuthSession,
    LocalAuthService,
    SessionProvider,
    SessionUser,
    SupabaseAuthService,
    create_session_provider,
)
from .course_service import CourseService, CoursesView
from .dashboard_service import DashboardService, DashboardView
from .gamification_service import GamificationService
from .gym_service import GymService, GymView
from .habit_service import HabitService, HabitsView
from .todo_service import TodoService, TodosView

__all__ = [
    # Session
    "AuthSession",
    "LocalAuthService",
    "SessionProvider",
    "SessionUser",
    "SupabaseAuthService",
    "create_session_provider",
    # Page views
    "CourseService",
    "CoursesView",
    "DashboardService",
    "DashboardView",
    "GamificationService",
    "GymService",
    "GymView",
    "HabitService",
    "HabitsView",
    "TodoService",
    "TodosView",
]
