"""
Habit tracking view.

Lists the user's habits with the logs of a recent window, the completion
state for a selected day and the streaks derived from those logs.
"""

import logging
from datetime import date, timedelta
from typing import List, Optional

from pydantic import BaseModel, Field

from ..config import Settings, get_settings
from ..db.backends import Backend
from ..db.repositories import HabitLogRepository, HabitRepository
from ..exceptions import NotFoundError, ValidationError
from ..metrics import calculate_streak, distinct_dates
from ..models import Habit, HabitCreate, HabitLog, HabitUpdate


logger = logging.getLogger(__name__)


class HabitStatus(BaseModel):
    """A habit with its state on the selected day."""

    habit: Habit
    completed: bool = Field(..., description="Logged on the selected date")
    streak: int = Field(default=0, description="Current streak in days")


class HabitsView(BaseModel):
    """Everything the habits page shows."""

    selected_date: str
    habits: List[HabitStatus]
    logs: List[HabitLog]
    logged_dates: List[str] = Field(
        default_factory=list, description="Days with at least one log, most recent first"
    )
    overall_streak: int = 0


class HabitService:
    """Service for managing habits and their daily logs."""

    def __init__(self, backend: Backend, settings: Optional[Settings] = None):
        settings = settings or get_settings()
        self.habits = HabitRepository(backend)
        self.logs = HabitLogRepository(backend)
        self.window_days = settings.habit_log_window_days

    def get_view(
        self,
        user_id: str,
        selected: Optional[date] = None,
        today: Optional[date] = None,
    ) -> HabitsView:
        """
        Build the habits page.

        Args:
            user_id: Owner
            selected: Day whose completion state is shown (defaults to today)
            today: Reference day for streaks and the log window

        Returns:
            HabitsView
        """
        today = today or date.today()
        selected = selected or today

        habits = self.habits.list(user_id)
        logs = self.logs.list_since(user_id, today - timedelta(days=self.window_days))
        selected_iso = selected.isoformat()

        statuses = []
        for habit in habits:
            habit_logs = [log for log in logs if log.habit_id == habit.id]
            statuses.append(HabitStatus(
                habit=habit,
                completed=any(log.date == selected_iso and log.completed for log in habit_logs),
                streak=calculate_streak(habit_logs, today=today, completed_field="completed"),
            ))

        return HabitsView(
            selected_date=selected_iso,
            habits=statuses,
            logs=logs,
            logged_dates=[
                d.isoformat() for d in distinct_dates(logs, completed_field="completed")
            ],
            overall_streak=calculate_streak(logs, today=today, completed_field="completed"),
        )

    def _require(self, user_id: str, habit_id: str) -> Habit:
        habit = self.habits.get(user_id, habit_id)
        if habit is None:
            raise NotFoundError("Habit", habit_id)
        return habit

    def create(self, user_id: str, request: HabitCreate) -> Habit:
        """
        Create a habit.

        Raises:
            ValidationError: If the name is blank
        """
        name = request.name.strip()
        if not name:
            raise ValidationError("Habit name is required", field="name")

        habit = self.habits.create(user_id, {
            "name": name,
            "icon": request.icon.strip() or Habit.model_fields["icon"].default,
            "frequency": request.frequency.value,
        })
        logger.info(f"Created habit {habit.id} for user {user_id}")
        return habit

    def update(self, user_id: str, habit_id: str, request: HabitUpdate) -> Habit:
        changes = request.model_dump(exclude_unset=True, exclude_none=True)
        if "name" in changes:
            changes["name"] = changes["name"].strip()
            if not changes["name"]:
                raise ValidationError("Habit name is required", field="name")
        if "icon" in changes:
            changes["icon"] = changes["icon"].strip() or Habit.model_fields["icon"].default
        if "frequency" in changes:
            changes["frequency"] = request.frequency.value

        habit = self.habits.update(user_id, habit_id, changes)
        if habit is None:
            raise NotFoundError("Habit", habit_id)
        return habit

    def delete(self, user_id: str, habit_id: str) -> None:
        """Delete a habit together with its logs."""
        self._require(user_id, habit_id)
        removed = self.logs.delete_for_habit(user_id, habit_id)
        self.habits.delete(user_id, habit_id)
        logger.info(f"Deleted habit {habit_id} and {removed} log(s)")

    def toggle_log(self, user_id: str, habit_id: str, day: Optional[date] = None) -> bool:
        """
        Flip the completion of a habit on a day.

        Returns:
            True if the habit is now logged for that day
        """
        self._require(user_id, habit_id)
        day = day or date.today()
        logged = self.logs.toggle(user_id, habit_id, day)
        logger.info(
            f"Habit {habit_id} {'logged' if logged else 'unlogged'} for {day.isoformat()}"
        )
        return logged
