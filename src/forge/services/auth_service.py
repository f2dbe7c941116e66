"""Session providers: sign-in, sign-up, sign-out and current-user lookup.

Two implementations share the ``SessionProvider`` interface:

- ``LocalAuthService``: accounts in the local ``users`` table, bcrypt
  password hashes and HS256 JWT access tokens. Used with the SQLite backend.
- ``SupabaseAuthService``: delegates to Supabase Auth. Used with the
  Supabase backend.

A provider is created once per application and resolves the session from
the access token carried by each request.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import bcrypt
import jwt
from pydantic import BaseModel
from supabase import AuthError, Client, ClientOptions, create_client

from ..config import Settings, get_settings
from ..db.backends import Backend
from ..db.repositories import UserRepository
from ..exceptions import (
    AuthenticationError,
    BackendError,
    BackendNotConfiguredError,
    ConflictError,
    ErrorCode,
    InvalidCredentialsError,
    ValidationError,
)


logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class SessionUser(BaseModel):
    """The signed-in user as seen by page views."""

    id: str
    email: str

    @property
    def display_name(self) -> str:
        """Local part of the email address."""
        return self.email.split("@", 1)[0]

    @property
    def avatar_initial(self) -> str:
        return self.email[:1].upper()


class AuthSession(BaseModel):
    """Result of sign-in or sign-up.

    ``access_token`` is None when the account still needs email confirmation.
    """

    user: SessionUser
    access_token: Optional[str] = None
    token_type: str = "bearer"
    expires_in: Optional[int] = None


class SessionProvider(ABC):
    """Session collaborator used by the route gate and auth endpoints."""

    @abstractmethod
    def get_current_user(self, token: Optional[str]) -> Optional[SessionUser]:
        """Resolve an access token to a user; None if missing, invalid or expired."""
        pass

    @abstractmethod
    def sign_in(self, email: str, password: str) -> AuthSession:
        """
        Sign in with email and password.

        Raises:
            InvalidCredentialsError: If the credentials do not match
        """
        pass

    @abstractmethod
    def sign_up(self, email: str, password: str) -> AuthSession:
        """
        Create an account.

        Raises:
            ConflictError: If the email is already registered
            ValidationError: If the password is too short
        """
        pass

    @abstractmethod
    def sign_out(self, token: Optional[str]) -> None:
        """End the session behind ``token``."""
        pass

    def initialize(self) -> None:
        pass

    def close(self) -> None:
        pass


def _check_password(password: str) -> None:
    if len(password or "") < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password should be at least {MIN_PASSWORD_LENGTH} characters",
            field="password",
        )


# =============================================================================
# Local accounts
# =============================================================================

class LocalAuthService(SessionProvider):
    """Accounts stored alongside the data in the SQLite backend.

    Provides JWT token creation/validation and password hashing.
    For local development - production uses Supabase Auth.
    """

    def __init__(self, backend: Backend, settings: Optional[Settings] = None) -> None:
        settings = settings or get_settings()
        self._users = UserRepository(backend)
        self._secret_key = settings.jwt_secret_key
        self._algorithm = settings.jwt_algorithm
        self._access_token_expire_minutes = settings.access_token_expire_minutes

    def create_access_token(self, user_id: str, email: str) -> str:
        """Create a JWT access token.

        Args:
            user_id: The user's unique identifier.
            email: The user's email address.

        Returns:
            Encoded JWT access token string.
        """
        now = datetime.now(timezone.utc)
        expire = now + timedelta(minutes=self._access_token_expire_minutes)

        payload = {
            "sub": user_id,
            "email": email,
            "exp": expire,
            "iat": now,
            "type": "access",
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def verify_access_token(self, token: str) -> dict[str, Any]:
        """Verify and decode an access token.

        Raises:
            AuthenticationError: If the token is expired, invalid or not an access token.
        """
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Session has expired", code=ErrorCode.SESSION_EXPIRED)
        except jwt.InvalidTokenError as e:
            raise AuthenticationError(f"Invalid token: {e}")

        if payload.get("type") != "access":
            raise AuthenticationError(
                f"Expected token type 'access', got '{payload.get('type')}'"
            )
        return payload

    @staticmethod
    def hash_password(password: str) -> str:
        """Hash a password using bcrypt."""
        salt = bcrypt.gensalt()
        hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
        return hashed.decode("utf-8")

    @staticmethod
    def verify_password(password: str, hashed_password: str) -> bool:
        """Verify a password against a bcrypt hash; False on any malformed hash."""
        try:
            return bcrypt.checkpw(
                password.encode("utf-8"),
                hashed_password.encode("utf-8"),
            )
        except ValueError:
            return False

    def _session_for(self, user_id: str, email: str) -> AuthSession:
        return AuthSession(
            user=SessionUser(id=user_id, email=email),
            access_token=self.create_access_token(user_id, email),
            expires_in=self._access_token_expire_minutes * 60,
        )

    def get_current_user(self, token: Optional[str]) -> Optional[SessionUser]:
        if not token:
            return None
        try:
            payload = self.verify_access_token(token)
        except AuthenticationError as e:
            logger.debug(f"Rejected session token: {e.message}")
            return None
        return SessionUser(id=payload["sub"], email=payload.get("email", ""))

    def sign_in(self, email: str, password: str) -> AuthSession:
        user = self._users.get_by_email(email)
        if user is None or not self.verify_password(password, user.password_hash):
            logger.info("Failed sign-in attempt")
            raise InvalidCredentialsError()

        logger.info(f"User {user.id} signed in")
        return self._session_for(user.id, user.email)

    def sign_up(self, email: str, password: str) -> AuthSession:
        _check_password(password)
        if self._users.get_by_email(email) is not None:
            raise ConflictError("User already registered")

        user = self._users.create(email, self.hash_password(password))
        logger.info(f"Created local account {user.id}")
        return self._session_for(user.id, user.email)

    def sign_out(self, token: Optional[str]) -> None:
        # Tokens are stateless; clearing the cookie ends the session
        user = self.get_current_user(token)
        if user is not None:
            logger.info(f"User {user.id} signed out")


# =============================================================================
# Supabase Auth
# =============================================================================

class SupabaseAuthService(SessionProvider):
    """Supabase Auth as the session collaborator.

    User-facing calls go through the anon key with a fresh, non-persisting
    client each time, so no session state is shared between requests.
    Sign-out uses the service key to revoke the token server-side.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        settings = settings or get_settings()
        if not settings.supabase_url or not settings.supabase_anon_key:
            raise BackendNotConfiguredError(
                "Supabase URL and anon key are required. "
                "Set SUPABASE_URL and SUPABASE_ANON_KEY."
            )
        self.url = settings.supabase_url
        self._anon_key = settings.supabase_anon_key
        self._service_key = settings.supabase_service_key
        self._admin_client: Optional[Client] = None

    def _client(self) -> Client:
        return create_client(
            self.url,
            self._anon_key,
            options=ClientOptions(persist_session=False, auto_refresh_token=False),
        )

    @property
    def admin_client(self) -> Client:
        """Lazy-initialize the service-key client."""
        if self._admin_client is None:
            self._admin_client = create_client(
                self.url,
                self._service_key or self._anon_key,
                options=ClientOptions(persist_session=False, auto_refresh_token=False),
            )
        return self._admin_client

    def close(self) -> None:
        self._admin_client = None

    @staticmethod
    def _to_session(response, email: str) -> AuthSession:
        if response.user is None:
            raise BackendError("Supabase returned no user", operation="auth")
        user = SessionUser(id=str(response.user.id), email=response.user.email or email)
        session = response.session
        if session is None:
            return AuthSession(user=user)
        return AuthSession(
            user=user,
            access_token=session.access_token,
            expires_in=session.expires_in,
        )

    def get_current_user(self, token: Optional[str]) -> Optional[SessionUser]:
        if not token:
            return None
        try:
            response = self._client().auth.get_user(token)
        except AuthError as e:
            logger.debug(f"Rejected session token: {e.message}")
            return None
        if response is None or response.user is None:
            return None
        return SessionUser(id=str(response.user.id), email=response.user.email or "")

    def sign_in(self, email: str, password: str) -> AuthSession:
        try:
            response = self._client().auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except AuthError as e:
            logger.info("Failed sign-in attempt")
            raise InvalidCredentialsError(e.message) from e
        return self._to_session(response, email)

    def sign_up(self, email: str, password: str) -> AuthSession:
        _check_password(password)
        try:
            response = self._client().auth.sign_up({"email": email, "password": password})
        except AuthError as e:
            raise AuthenticationError(e.message) from e

        auth_session = self._to_session(response, email)
        if auth_session.access_token is None:
            logger.info(f"Account {auth_session.user.id} awaiting email confirmation")
        return auth_session

    def sign_out(self, token: Optional[str]) -> None:
        if not token:
            return
        try:
            self.admin_client.auth.admin.sign_out(token)
        except AuthError as e:
            logger.warning(f"Supabase sign-out failed: {e.message}")


def create_session_provider(
    backend: Backend,
    settings: Optional[Settings] = None,
) -> SessionProvider:
    """Session provider matching ``settings.backend``."""
    settings = settings or get_settings()
    if settings.backend == "supabase":
        return SupabaseAuthService(settings)
    return LocalAuthService(backend, settings)
