"""Navigation shell: entry page and sidebar."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request
from pydantic import BaseModel

from ..middleware.auth import CurrentUser, get_current_user
from ..middleware.route_gate import safe_next


router = APIRouter(tags=["shell"])

APP_NAME = "Forge"


class NavItem(BaseModel):
    label: str
    href: str
    icon: str


NAV_ITEMS: List[NavItem] = [
    NavItem(label="Dashboard", href="/dashboard", icon="home"),
    NavItem(label="Courses", href="/courses", icon="book-open"),
    NavItem(label="Gym", href="/gym", icon="dumbbell"),
    NavItem(label="Habits", href="/habits", icon="target"),
    NavItem(label="Todos", href="/todos", icon="check-square"),
]


class ShellUser(BaseModel):
    email: str
    avatar_initial: str


class ShellResponse(BaseModel):
    """Sidebar contents for the signed-in user."""

    app_name: str = APP_NAME
    user: ShellUser
    nav_items: List[NavItem]
    sign_out_path: str = "/auth/sign-out"


class EntryResponse(BaseModel):
    """Sign-in page state for anonymous visitors."""

    app_name: str = APP_NAME
    next: str
    sign_in_path: str = "/auth/sign-in"
    sign_up_path: str = "/auth/sign-up"


@router.get("/", response_model=EntryResponse)
def entry(
    request: Request,
    next: Optional[str] = Query(None, description="Page to continue to after sign-in"),
) -> EntryResponse:
    """Entry page; signed-in users are redirected to the dashboard before reaching it."""
    return EntryResponse(next=safe_next(next, request.app.state.settings.home_path))


@router.get("/shell", response_model=ShellResponse)
def shell(current_user: CurrentUser = Depends(get_current_user)) -> ShellResponse:
    return ShellResponse(
        user=ShellUser(email=current_user.email, avatar_initial=current_user.avatar_initial),
        nav_items=NAV_ITEMS,
    )
