"""Repositories for habits and their daily logs."""

from datetime import date
from typing import List

from ...models import Habit, HabitLog
from .base import UserScopedRepository


class HabitRepository(UserScopedRepository[Habit]):
    """Habits, oldest first."""

    table = "habits"
    model = Habit


class HabitLogRepository(UserScopedRepository[HabitLog]):
    """
    Completion logs, at most one per (user, habit, date).

    The uniqueness is enforced by the storage layer, which also makes
    ``toggle`` a single atomic operation.
    """

    table = "habit_logs"
    model = HabitLog
    order_by = "date"
    descending = True

    def list_since(self, user_id: str, since: date) -> List[HabitLog]:
        """Logs dated on or after ``since``, most recent first."""
        rows = self.backend.select(
            self.table,
            eq={"user_id": user_id},
            gte={"date": since.isoformat()},
            order_by=self.order_by,
            descending=self.descending,
        )
        return [self._to_model(r) for r in rows]

    def toggle(self, user_id: str, habit_id: str, day: date) -> bool:
        """
        Remove the log for ``day`` if there is one, otherwise create it.

        Returns:
            True if the habit is now logged for that day
        """
        match = {"user_id": user_id, "habit_id": habit_id, "date": day.isoformat()}
        return self.backend.toggle(self.table, match, {"completed": True})

    def delete_for_habit(self, user_id: str, habit_id: str) -> int:
        return self.backend.delete_where(
            self.table, {"user_id": user_id, "habit_id": habit_id}
        )
