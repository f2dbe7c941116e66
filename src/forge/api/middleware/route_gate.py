"""Route gate middleware.

Resolves the session once per request and stores it on
``request.state.user``. Page prefixes require a session:

- unauthenticated request to a protected path -> redirect to the entry page
  with ``?next=<path>``
- authenticated request to the entry page -> redirect to the dashboard
"""

import logging
from typing import Iterable, Optional
from urllib.parse import urlencode

from fastapi import Request
from fastapi.responses import RedirectResponse
from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware

from ...services.auth_service import SessionProvider, SessionUser


logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer "


def is_protected(path: str, prefixes: Iterable[str]) -> bool:
    """True if ``path`` equals a prefix or continues it with ``/``."""
    for prefix in prefixes:
        prefix = prefix.rstrip("/")
        if path == prefix or path.startswith(prefix + "/"):
            return True
    return False


def safe_next(target: Optional[str], default: str) -> str:
    """Only local absolute paths are honored as return targets."""
    if not target or not target.startswith("/") or target.startswith("//") or "\\" in target:
        return default
    return target


def extract_token(request: Request, cookie_name: str) -> Optional[str]:
    """Access token from the Authorization header, else the session cookie."""
    header = request.headers.get("authorization", "")
    if header.lower().startswith(BEARER_PREFIX):
        return header[len(BEARER_PREFIX):].strip() or None
    return request.cookies.get(cookie_name)


class RouteGateMiddleware(BaseHTTPMiddleware):
    """Redirects page requests according to the session state."""

    def __init__(
        self,
        app,
        cookie_name: str,
        protected_prefixes: Iterable[str],
        entry_path: str = "/",
        home_path: str = "/dashboard",
    ):
        super().__init__(app)
        self.cookie_name = cookie_name
        self.protected_prefixes = list(protected_prefixes)
        self.entry_path = entry_path
        self.home_path = home_path

    async def _resolve_user(self, request: Request) -> Optional[SessionUser]:
        provider: Optional[SessionProvider] = getattr(
            request.app.state, "session_provider", None
        )
        if provider is None:
            return None
        token = extract_token(request, self.cookie_name)
        request.state.token = token
        try:
            return await run_in_threadpool(provider.get_current_user, token)
        except Exception as e:
            logger.warning(f"Session lookup failed, treating request as anonymous: {e}")
            return None

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        user = await self._resolve_user(request)
        request.state.user = user

        if user is None and is_protected(path, self.protected_prefixes):
            target = path
            if request.url.query:
                target = f"{path}?{request.url.query}"
            logger.debug(f"Redirecting anonymous request for {path} to sign-in")
            return RedirectResponse(
                url=f"{self.entry_path}?{urlencode({'next': target})}",
                status_code=307,
            )

        if user is not None and path == self.entry_path:
            return RedirectResponse(url=self.home_path, status_code=307)

        return await call_next(request)
