"""Repositories for workouts and their exercises."""

import logging
from typing import Any, Dict, List, Sequence

from ...exceptions import BackendError
from ...models import Workout, WorkoutExercise
from .base import UserScopedRepository


logger = logging.getLogger(__name__)


class WorkoutExerciseRepository(UserScopedRepository[WorkoutExercise]):
    table = "workout_exercises"
    model = WorkoutExercise

    def create_many(
        self,
        user_id: str,
        workout_id: str,
        exercises: Sequence[Dict[str, Any]],
    ) -> List[WorkoutExercise]:
        """Insert all exercises of a workout in one statement."""
        records = [
            {**exercise, "user_id": user_id, "workout_id": workout_id}
            for exercise in exercises
        ]
        rows = self.backend.insert_many(self.table, records)
        return [self._to_model(r) for r in rows]


class WorkoutRepository(UserScopedRepository[Workout]):
    """
    Workouts, most recent first, with their exercises attached.

    Exercises are loaded with one query per user rather than one per workout.
    """

    table = "workouts"
    model = Workout
    order_by = "date"
    descending = True

    def __init__(self, backend):
        super().__init__(backend)
        self.exercises = WorkoutExerciseRepository(backend)

    def list_with_exercises(self, user_id: str) -> List[Workout]:
        workouts = self.list(user_id)
        by_workout: Dict[str, List[WorkoutExercise]] = {}
        for exercise in self.exercises.list(user_id):
            by_workout.setdefault(exercise.workout_id, []).append(exercise)

        for workout in workouts:
            workout.exercises = by_workout.get(workout.id, [])
        return workouts

    def create_with_exercises(
        self,
        user_id: str,
        workout: Dict[str, Any],
        exercises: Sequence[Dict[str, Any]],
    ) -> Workout:
        """
        Insert a workout and then its exercises.

        If the exercise batch fails the workout row is deleted again, so a
        workout is never left behind without the exercises it was saved with.

        Raises:
            BackendError: If either insert fails
        """
        created = self.create(user_id, workout)
        if not exercises:
            return created

        try:
            created.exercises = self.exercises.create_many(user_id, created.id, exercises)
        except BackendError:
            logger.warning(
                f"Exercise insert failed for workout {created.id}; removing the workout"
            )
            self.delete(user_id, created.id)
            raise
        return created

    def delete(self, user_id: str, record_id: str) -> bool:
        # Exercises cascade with the workout; delete them explicitly as well
        # for stores created without the foreign key
        self.backend.delete_where(
            self.exercises.table, {"user_id": user_id, "workout_id": record_id}
        )
        return super().delete(user_id, record_id)
