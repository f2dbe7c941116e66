"""
Gym workout log.

Workouts are saved together with their exercises: the exercise batch is a
single insert, and the workout row is removed again if that insert fails.
"""

import logging
from datetime import date
from typing import List, Optional

from pydantic import BaseModel

from ..db.backends import Backend
from ..db.repositories import WorkoutRepository
from ..exceptions import NotFoundError, ValidationError
from ..models import GamificationSummary, Workout, WorkoutCreate
from .gamification_service import GamificationService


logger = logging.getLogger(__name__)


class GymView(BaseModel):
    """Workouts (most recent first) and the stats derived from them."""

    workouts: List[Workout]
    stats: GamificationSummary


class GymService:
    """Service for logging and listing workouts."""

    def __init__(self, backend: Backend):
        self.workouts = WorkoutRepository(backend)
        self.gamification = GamificationService(backend)

    def get_view(self, user_id: str, today: Optional[date] = None) -> GymView:
        gamification = self.gamification
        workouts = self.workouts.list_with_exercises(user_id)
        stats = gamification.summarize(
            user_id,
            workouts=workouts,
            habit_logs=gamification.habit_logs.list(user_id),
            todos=gamification.todos.list(user_id),
            courses=gamification.courses.list(user_id),
            today=today,
        )
        return GymView(workouts=workouts, stats=stats)

    def create(self, user_id: str, request: WorkoutCreate) -> Workout:
        """
        Log a workout and its exercises.

        Exercises with a blank name are skipped.

        Raises:
            ValidationError: If the date or a positive duration is missing
            BackendError: If the workout or its exercises cannot be stored
        """
        if request.date is None or not request.duration or request.duration <= 0:
            raise ValidationError("Date and duration required")

        exercises = [
            {
                "name": exercise.name.strip(),
                "sets": exercise.sets,
                "reps": exercise.reps,
                "weight": exercise.weight,
            }
            for exercise in request.exercises
            if exercise.name.strip()
        ]
        notes = (request.notes or "").strip() or None

        workout = self.workouts.create_with_exercises(
            user_id,
            {"date": request.date.isoformat(), "duration": request.duration, "notes": notes},
            exercises,
        )
        logger.info(
            f"Logged workout {workout.id} ({request.duration} min, "
            f"{len(exercises)} exercise(s)) for user {user_id}"
        )
        return workout

    def delete(self, user_id: str, workout_id: str) -> None:
        """Delete a workout; its exercises go with it."""
        if not self.workouts.delete(user_id, workout_id):
            raise NotFoundError("Workout", workout_id)
        logger.info(f"Deleted workout {workout_id}")
