"""Habits API routes.

Every mutation returns the refetched habits view.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from ..deps import get_habit_service
from ..middleware.auth import CurrentUser, get_current_user
from ...models import HabitCreate, HabitLogToggle, HabitUpdate
from ...services.habit_service import HabitService, HabitsView


router = APIRouter(prefix="/habits", tags=["habits"])


@router.get("", response_model=HabitsView)
def list_habits(
    selected: Optional[date] = Query(None, alias="date", description="Day to show (YYYY-MM-DD)"),
    current_user: CurrentUser = Depends(get_current_user),
    service: HabitService = Depends(get_habit_service),
) -> HabitsView:
    """Habits, recent logs and streaks for the selected day."""
    return service.get_view(current_user.id, selected)


@router.post("", response_model=HabitsView, status_code=status.HTTP_201_CREATED)
def create_habit(
    request: HabitCreate,
    current_user: CurrentUser = Depends(get_current_user),
    service: HabitService = Depends(get_habit_service),
) -> HabitsView:
    service.create(current_user.id, request)
    return service.get_view(current_user.id)


@router.patch("/{habit_id}", response_model=HabitsView)
def update_habit(
    habit_id: str,
    request: HabitUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    service: HabitService = Depends(get_habit_service),
) -> HabitsView:
    service.update(current_user.id, habit_id, request)
    return service.get_view(current_user.id)


@router.delete("/{habit_id}", response_model=HabitsView)
def delete_habit(
    habit_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    service: HabitService = Depends(get_habit_service),
) -> HabitsView:
    """Delete a habit and its logs."""
    service.delete(current_user.id, habit_id)
    return service.get_view(current_user.id)


@router.post("/{habit_id}/toggle", response_model=HabitsView)
def toggle_habit_log(
    habit_id: str,
    request: Optional[HabitLogToggle] = None,
    current_user: CurrentUser = Depends(get_current_user),
    service: HabitService = Depends(get_habit_service),
) -> HabitsView:
    """Log or unlog a habit for a day (defaults to today)."""
    day = (request.date if request else None) or date.today()
    service.toggle_log(current_user.id, habit_id, day)
    return service.get_view(current_user.id, day)
