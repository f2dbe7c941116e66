"""API middleware: session gate, auth dependency and rate limiting."""

from .auth import CurrentUser, get_current_user
from .rate_limit import auth_rate_limit, get_rate_limit_key, limiter
from .route_gate import RouteGateMiddleware, extract_token, is_protected, safe_next

__all__ = [
    "CurrentUser",
    "get_current_user",
    "auth_rate_limit",
    "get_rate_limit_key",
    "limiter",
    "RouteGateMiddleware",
    "extract_token",
    "is_protected",
    "safe_next",
]
