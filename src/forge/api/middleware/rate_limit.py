"""Rate limiting middleware for FastAPI.

Uses slowapi to implement rate limiting with support for
authenticated users (by user id) and anonymous users (by IP).
"""

from typing import Optional

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from ...config import get_settings


def get_rate_limit_key(request: Request) -> str:
    """Get the rate limit key for a request.

    Uses the session user set by the route gate if there is one, otherwise
    falls back to the client's IP address.
    """
    user: Optional[object] = getattr(request.state, "user", None)
    if user is not None:
        user_id = getattr(user, "id", None)
        if user_id:
            return f"user:{user_id}"

    return f"ip:{get_remote_address(request)}"


limiter = Limiter(
    key_func=get_rate_limit_key,
    enabled=get_settings().rate_limit_enabled,
)


def auth_rate_limit() -> str:
    """Limit applied to the sign-in and sign-up endpoints."""
    return get_settings().auth_rate_limit
