"""API routers."""

from . import auth, courses, dashboard, gym, habits, shell, todos

__all__ = ["auth", "courses", "dashboard", "gym", "habits", "shell", "todos"]
