"""Authentication API routes.

Sign-in and sign-up set the session cookie read by the route gate and echo
the page to continue to. Both are rate limited per client.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import BaseModel, EmailStr, Field

from ..deps import get_session_provider
from ..middleware.auth import CurrentUser, get_current_user
from ..middleware.rate_limit import auth_rate_limit, limiter
from ..middleware.route_gate import safe_next
from ...config import Settings
from ...services.auth_service import AuthSession, SessionProvider

router = APIRouter(prefix="/auth", tags=["auth"])

CONFIRM_EMAIL_MESSAGE = "Check your email to confirm your account, then log in."


# Request/Response Models
class Credentials(BaseModel):
    """Request model for sign-in and sign-up."""

    email: EmailStr
    password: str = Field(..., min_length=1)
    next: Optional[str] = Field(None, description="Page to continue to afterwards")


class UserResponse(BaseModel):
    """Response model for user information."""

    id: str
    email: str
    display_name: str
    avatar_initial: str


class AuthResponse(BaseModel):
    """Response model for sign-in and sign-up."""

    user: UserResponse
    access_token: Optional[str] = None
    token_type: str = "bearer"
    expires_in: Optional[int] = None
    next: str
    message: Optional[str] = None


def _user_response(user_id: str, email: str) -> UserResponse:
    return UserResponse(
        id=user_id,
        email=email,
        display_name=email.split("@", 1)[0],
        avatar_initial=email[:1].upper(),
    )


def _set_session_cookie(response: Response, session: AuthSession, settings: Settings) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=session.access_token,
        max_age=session.expires_in,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
        path="/",
    )


def _auth_response(session: AuthSession, next_target: str, message: Optional[str] = None) -> AuthResponse:
    return AuthResponse(
        user=_user_response(session.user.id, session.user.email),
        access_token=session.access_token,
        token_type=session.token_type,
        expires_in=session.expires_in,
        next=next_target,
        message=message,
    )


@router.post("/sign-in", response_model=AuthResponse)
@limiter.limit(auth_rate_limit)
def sign_in(
    request: Request,
    response: Response,
    credentials: Credentials,
    provider: SessionProvider = Depends(get_session_provider),
) -> AuthResponse:
    """Sign in with email and password."""
    settings: Settings = request.app.state.settings
    session = provider.sign_in(credentials.email, credentials.password)
    _set_session_cookie(response, session, settings)
    return _auth_response(session, safe_next(credentials.next, settings.home_path))


@router.post("/sign-up", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(auth_rate_limit)
def sign_up(
    request: Request,
    response: Response,
    credentials: Credentials,
    provider: SessionProvider = Depends(get_session_provider),
) -> AuthResponse:
    """Create an account.

    When the backend requires email confirmation no session is returned and
    the response is 202 with a message asking the user to confirm.
    """
    settings: Settings = request.app.state.settings
    session = provider.sign_up(credentials.email, credentials.password)
    next_target = safe_next(credentials.next, settings.home_path)

    if session.access_token is None:
        response.status_code = status.HTTP_202_ACCEPTED
        return _auth_response(session, settings.entry_path, message=CONFIRM_EMAIL_MESSAGE)

    _set_session_cookie(response, session, settings)
    return _auth_response(session, next_target)


@router.post("/sign-out")
def sign_out(
    request: Request,
    response: Response,
    provider: SessionProvider = Depends(get_session_provider),
) -> dict:
    """End the session and clear the cookie."""
    settings: Settings = request.app.state.settings
    provider.sign_out(getattr(request.state, "token", None))
    response.delete_cookie(settings.session_cookie_name, path="/")
    return {"message": "Signed out", "next": settings.entry_path}


@router.get("/me", response_model=UserResponse)
def me(current_user: CurrentUser = Depends(get_current_user)) -> UserResponse:
    """Current user information."""
    return _user_response(current_user.user_id, current_user.email)
