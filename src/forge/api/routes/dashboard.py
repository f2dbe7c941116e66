"""Dashboard API route."""

from fastapi import APIRouter, Depends

from ..deps import get_dashboard_service
from ..middleware.auth import CurrentUser, get_current_user
from ...services.dashboard_service import DashboardService, DashboardView


router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardView)
def get_dashboard(
    current_user: CurrentUser = Depends(get_current_user),
    service: DashboardService = Depends(get_dashboard_service),
) -> DashboardView:
    """Greeting, stat cards, short lists, weekly chart and XP for the user."""
    return service.get_view(current_user.id, current_user.email)
