"""Tests for the session providers.

This module tests:
1. Local sign-up and sign-in with bcrypt hashes
2. Access token creation, validation and expiry
3. Supabase Auth delegation with a mocked client
"""

import time
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import jwt
import pytest
from supabase import AuthError

from forge.config import Settings
from forge.exceptions import (
    AuthenticationError,
    BackendNotConfiguredError,
    ConflictError,
    ErrorCode,
    InvalidCredentialsError,
    ValidationError,
)
from forge.services.auth_service import (
    LocalAuthService,
    SessionUser,
    SupabaseAuthService,
    create_session_provider,
)


PASSWORD = "correct-horse-battery"


# ============================================================================
# Local accounts
# ============================================================================

class TestLocalSignUp:
    """Tests for local account creation."""

    def test_sign_up_returns_session(self, auth_service):
        session = auth_service.sign_up("kanan@example.com", PASSWORD)

        assert session.user.email == "kanan@example.com"
        assert session.access_token
        assert session.expires_in == 60 * 24 * 7 * 60

    def test_duplicate_email(self, auth_service):
        auth_service.sign_up("kanan@example.com", PASSWORD)

        with pytest.raises(ConflictError, match="already registered"):
            auth_service.sign_up("Kanan@example.com", PASSWORD)

    def test_short_password(self, auth_service):
        with pytest.raises(ValidationError) as exc_info:
            auth_service.sign_up("kanan@example.com", "12345")

        assert exc_info.value.details["field"] == "password"

    def test_password_is_hashed(self, auth_service, backend):
        auth_service.sign_up("kanan@example.com", PASSWORD)

        stored = backend.select("users")[0]["password_hash"]
        assert stored != PASSWORD
        assert stored.startswith("$2")


class TestLocalSignIn:
    def test_sign_in(self, auth_service, session):
        signed_in = auth_service.sign_in("kanan@example.com", PASSWORD)

        assert signed_in.user.id == session.user.id

    def test_wrong_password(self, auth_service, session):
        with pytest.raises(InvalidCredentialsError) as exc_info:
            auth_service.sign_in("kanan@example.com", "wrong-password")

        assert exc_info.value.status_code == 401
        assert exc_info.value.code == ErrorCode.INVALID_CREDENTIALS

    def test_unknown_email(self, auth_service):
        with pytest.raises(InvalidCredentialsError):
            auth_service.sign_in("nobody@example.com", PASSWORD)


class TestTokens:
    """Tests for access token handling."""

    def test_round_trip(self, auth_service):
        token = auth_service.create_access_token("user-1", "kanan@example.com")

        user = auth_service.get_current_user(token)

        assert user == SessionUser(id="user-1", email="kanan@example.com")

    def test_missing_token(self, auth_service):
        assert auth_service.get_current_user(None) is None
        assert auth_service.get_current_user("") is None

    def test_garbage_token(self, auth_service):
        assert auth_service.get_current_user("not-a-jwt") is None

    def test_expired_token(self, auth_service, settings):
        past = datetime.now(timezone.utc) - timedelta(hours=2)
        token = jwt.encode(
            {"sub": "user-1", "email": "a@b.co", "type": "access",
             "iat": past, "exp": past + timedelta(minutes=5)},
            settings.jwt_secret_key,
            algorithm="HS256",
        )

        with pytest.raises(AuthenticationError) as exc_info:
            auth_service.verify_access_token(token)
        assert exc_info.value.code == ErrorCode.SESSION_EXPIRED
        assert auth_service.get_current_user(token) is None

    def test_wrong_token_type(self, auth_service, settings):
        token = jwt.encode(
            {"sub": "user-1", "type": "refresh", "exp": int(time.time()) + 60},
            settings.jwt_secret_key,
            algorithm="HS256",
        )

        with pytest.raises(AuthenticationError, match="Expected token type"):
            auth_service.verify_access_token(token)

    def test_token_signed_with_other_secret(self, auth_service):
        token = jwt.encode(
            {"sub": "user-1", "type": "access", "exp": int(time.time()) + 60},
            "another-secret-that-is-at-least-32-characters",
            algorithm="HS256",
        )
        assert auth_service.get_current_user(token) is None

    def test_verify_password_malformed_hash(self):
        assert LocalAuthService.verify_password("x", "not-a-bcrypt-hash") is False


class TestSessionUser:
    def test_display_fields(self):
        user = SessionUser(id="u", email="kanan@example.com")

        assert user.display_name == "kanan"
        assert user.avatar_initial == "K"


# ============================================================================
# Supabase Auth
# ============================================================================

@pytest.fixture
def supabase_settings():
    return Settings(
        _env_file=None,
        backend="supabase",
        supabase_url="https://test.supabase.co",
        supabase_anon_key="anon-key",
        supabase_service_key="service-key",
    )


def auth_response(session=True):
    user = SimpleNamespace(id="uuid-1", email="kanan@example.com")
    token = SimpleNamespace(access_token="jwt-token", expires_in=3600) if session else None
    return SimpleNamespace(user=user, session=token)


class TestSupabaseAuthService:
    """Tests for Supabase Auth delegation."""

    def test_requires_url_and_anon_key(self):
        with pytest.raises(BackendNotConfiguredError):
            SupabaseAuthService(Settings(_env_file=None, backend="supabase"))

    def test_sign_in(self, supabase_settings):
        service = SupabaseAuthService(supabase_settings)
        client = MagicMock()
        client.auth.sign_in_with_password.return_value = auth_response()

        with patch.object(service, "_client", return_value=client):
            session = service.sign_in("kanan@example.com", PASSWORD)

        assert session.user.id == "uuid-1"
        assert session.access_token == "jwt-token"
        assert session.expires_in == 3600

    def test_sign_in_rejected(self, supabase_settings):
        service = SupabaseAuthService(supabase_settings)
        client = MagicMock()
        client.auth.sign_in_with_password.side_effect = AuthError("Invalid login credentials", None)

        with patch.object(service, "_client", return_value=client):
            with pytest.raises(InvalidCredentialsError):
                service.sign_in("kanan@example.com", "bad-password")

    def test_sign_up_awaiting_confirmation(self, supabase_settings):
        service = SupabaseAuthService(supabase_settings)
        client = MagicMock()
        client.auth.sign_up.return_value = auth_response(session=False)

        with patch.object(service, "_client", return_value=client):
            session = service.sign_up("kanan@example.com", PASSWORD)

        assert session.access_token is None
        assert session.user.email == "kanan@example.com"

    def test_get_current_user_invalid_token(self, supabase_settings):
        service = SupabaseAuthService(supabase_settings)
        client = MagicMock()
        client.auth.get_user.side_effect = AuthError("invalid JWT", None)

        with patch.object(service, "_client", return_value=client):
            assert service.get_current_user("expired") is None
            assert service.get_current_user(None) is None

    def test_sign_out_uses_admin_client(self, supabase_settings):
        service = SupabaseAuthService(supabase_settings)
        service._admin_client = MagicMock()

        service.sign_out("jwt-token")

        service._admin_client.auth.admin.sign_out.assert_called_once_with("jwt-token")

    def test_create_session_provider(self, backend, settings, supabase_settings):
        assert isinstance(create_session_provider(backend, settings), LocalAuthService)
        assert isinstance(create_session_provider(backend, supabase_settings), SupabaseAuthService)
