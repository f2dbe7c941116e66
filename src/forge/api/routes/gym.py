"""Gym API routes: workout log and gym stats."""

from fastapi import APIRouter, Depends, status

from ..deps import get_gym_service
from ..middleware.auth import CurrentUser, get_current_user
from ...models import GamificationSummary, WorkoutCreate
from ...services.gym_service import GymService, GymView


router = APIRouter(prefix="/gym", tags=["gym"])


@router.get("", response_model=GymView)
def get_gym(
    current_user: CurrentUser = Depends(get_current_user),
    service: GymService = Depends(get_gym_service),
) -> GymView:
    """Workouts (most recent first) with streak, XP, level and achievements."""
    return service.get_view(current_user.id)


@router.get("/stats", response_model=GamificationSummary)
def get_gym_stats(
    current_user: CurrentUser = Depends(get_current_user),
    service: GymService = Depends(get_gym_service),
) -> GamificationSummary:
    return service.gamification.get_summary(current_user.id)


@router.post("/workouts", response_model=GymView, status_code=status.HTTP_201_CREATED)
def create_workout(
    request: WorkoutCreate,
    current_user: CurrentUser = Depends(get_current_user),
    service: GymService = Depends(get_gym_service),
) -> GymView:
    """Log a workout with its exercises.

    Returns 400 "Date and duration required" when either is missing, and
    502 with the backend's message if the workout cannot be stored.
    """
    service.create(current_user.id, request)
    return service.get_view(current_user.id)


@router.delete("/workouts/{workout_id}", response_model=GymView)
def delete_workout(
    workout_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    service: GymService = Depends(get_gym_service),
) -> GymView:
    service.delete(current_user.id, workout_id)
    return service.get_view(current_user.id)
