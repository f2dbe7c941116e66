"""Configuration settings for Forge."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# __file__ = src/forge/config.py
# .parent.parent.parent = project root
PACKAGE_ROOT = Path(__file__).parent
PROJECT_ROOT = PACKAGE_ROOT.parent.parent

DEFAULT_PROTECTED_PREFIXES = ["/dashboard", "/courses", "/gym", "/habits", "/todos"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    log_level: str = "INFO"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # Storage backend: "sqlite" for local use, "supabase" for the hosted backend
    backend: Literal["sqlite", "supabase"] = "sqlite"
    database_path: Path | None = None

    # Supabase
    supabase_url: str = ""
    supabase_anon_key: str = ""
    supabase_service_key: str = ""

    # Local auth (sqlite backend)
    jwt_secret_key: str = "forge-local-development-secret-change-me"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7

    # Session / route gate
    session_cookie_name: str = "forge_session"
    session_cookie_secure: bool = False
    protected_prefixes: list[str] = DEFAULT_PROTECTED_PREFIXES
    entry_path: str = "/"
    home_path: str = "/dashboard"

    # Security headers
    security_enable_hsts: bool = False

    # Rate limiting
    rate_limit_enabled: bool = True
    auth_rate_limit: str = "10/minute"

    # Page views
    habit_log_window_days: int = 30

    @field_validator("jwt_secret_key")
    @classmethod
    def validate_jwt_secret(cls, v: str) -> str:
        if len(v) < 32:
            raise ValueError("jwt_secret_key must be at least 32 characters")
        return v

    def model_post_init(self, __context) -> None:
        """Set default database path after initialization."""
        if self.database_path is None:
            self.database_path = PROJECT_ROOT / "forge.db"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
