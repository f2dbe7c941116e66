"""Forge: habits, todos, courses and gym workouts with streaks, XP and achievements."""

__version__ = "0.1.0"
