"""Dependency injection for API routes.

The backend and session provider live on ``app.state`` (created once per
application); services are cheap wrappers built per request.
"""

from fastapi import Request

from ..db.backends import Backend
from ..services import (
    CourseService,
    DashboardService,
    GymService,
    HabitService,
    SessionProvider,
    TodoService,
)


def get_backend(request: Request) -> Backend:
    return request.app.state.backend


def get_session_provider(request: Request) -> SessionProvider:
    return request.app.state.session_provider


def get_habit_service(request: Request) -> HabitService:
    return HabitService(get_backend(request), request.app.state.settings)


def get_todo_service(request: Request) -> TodoService:
    return TodoService(get_backend(request))


def get_course_service(request: Request) -> CourseService:
    return CourseService(get_backend(request))


def get_gym_service(request: Request) -> GymService:
    return GymService(get_backend(request))


def get_dashboard_service(request: Request) -> DashboardService:
    return DashboardService(get_backend(request))
