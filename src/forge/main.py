"""FastAPI application for Forge."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from . import __version__
from .api.exception_handlers import register_exception_handlers
from .api.middleware.rate_limit import limiter
from .api.middleware.route_gate import RouteGateMiddleware
from .api.middleware.security_headers import SecurityHeadersMiddleware
from .api.routes import auth, courses, dashboard, gym, habits, shell, todos
from .config import Settings, get_settings
from .db import create_backend
from .db.backends import Backend
from .services.auth_service import SessionProvider, create_session_provider
from .utils.log_sanitizer import install_log_sanitizer

# Must run before any logging happens
install_log_sanitizer()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize the backend and session provider; close them on shutdown."""
    settings: Settings = app.state.settings
    logger.info(f"Starting Forge v{__version__} ({settings.backend} backend)")

    app.state.backend.initialize()
    app.state.session_provider.initialize()

    yield

    logger.info("Shutting down Forge")
    app.state.session_provider.close()
    app.state.backend.close()


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    """Handle rate limit exceeded exceptions."""
    return JSONResponse(
        status_code=429,
        content={
            "error": {
                "code": "RATE_LIMIT_EXCEEDED",
                "message": f"Rate limit exceeded: {exc.detail}",
            }
        },
    )


def create_app(
    settings: Optional[Settings] = None,
    backend: Optional[Backend] = None,
    session_provider: Optional[SessionProvider] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Defaults to get_settings()
        backend: Defaults to the backend selected by settings
        session_provider: Defaults to the provider matching the backend

    Returns:
        Configured FastAPI app
    """
    settings = settings or get_settings()
    backend = backend or create_backend(settings)
    session_provider = session_provider or create_session_provider(backend, settings)

    app = FastAPI(
        title="Forge API",
        description="Habits, todos, courses and gym workouts with streaks, XP and achievements",
        version=__version__,
        lifespan=lifespan,
        redirect_slashes=False,
    )
    app.state.settings = settings
    app.state.backend = backend
    app.state.session_provider = session_provider

    # Rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    # Middleware runs in reverse order of addition: the gate runs after CORS
    app.add_middleware(
        RouteGateMiddleware,
        cookie_name=settings.session_cookie_name,
        protected_prefixes=settings.protected_prefixes,
        entry_path=settings.entry_path,
        home_path=settings.home_path,
    )
    app.add_middleware(SecurityHeadersMiddleware, enable_hsts=settings.security_enable_hsts)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(shell.router)
    app.include_router(auth.router)
    app.include_router(dashboard.router)
    app.include_router(habits.router)
    app.include_router(todos.router)
    app.include_router(courses.router)
    app.include_router(gym.router)

    @app.get("/health")
    def health(request: Request):
        """Health check endpoint."""
        backend_health = request.app.state.backend.health_check()
        return {
            "status": "healthy" if backend_health["healthy"] else "degraded",
            "version": __version__,
            "backend": backend_health,
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
