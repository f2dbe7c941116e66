"""Tests for the route gate, entry page and security headers."""

import pytest

from forge.api.middleware.route_gate import is_protected, safe_next


class TestGateHelpers:
    @pytest.mark.parametrize("path,expected", [
        ("/dashboard", True),
        ("/habits/abc/toggle", True),
        ("/gym/stats", True),
        ("/gymnastics", False),
        ("/", False),
        ("/auth/sign-in", False),
        ("/health", False),
    ])
    def test_is_protected(self, path, expected):
        assert is_protected(path, ["/dashboard", "/courses", "/gym", "/habits", "/todos"]) is expected

    @pytest.mark.parametrize("target,expected", [
        ("/habits", "/habits"),
        ("/todos?x=1", "/todos?x=1"),
        (None, "/dashboard"),
        ("", "/dashboard"),
        ("https://evil.example.com", "/dashboard"),
        ("//evil.example.com", "/dashboard"),
        ("/\\evil.example.com", "/dashboard"),
    ])
    def test_safe_next(self, target, expected):
        assert safe_next(target, "/dashboard") == expected


class TestRouteGate:
    """Tests for session-based redirects."""

    @pytest.mark.parametrize("path", ["/dashboard", "/courses", "/gym", "/habits", "/todos"])
    def test_anonymous_protected_path_redirects_to_entry(self, client, path):
        response = client.get(path)

        assert response.status_code == 307
        assert response.headers["location"] == f"/?next=%2F{path[1:]}"

    def test_redirect_keeps_query_string(self, client):
        response = client.get("/habits?date=2026-02-16")

        assert response.status_code == 307
        assert response.headers["location"] == "/?next=%2Fhabits%3Fdate%3D2026-02-16"

    def test_invalid_token_is_anonymous(self, client):
        response = client.get("/dashboard", headers={"Authorization": "Bearer not-a-token"})
        assert response.status_code == 307

    def test_session_lookup_failure_is_anonymous(self, client, monkeypatch):
        def unreachable(token):
            raise ConnectionError("auth server unreachable")

        provider = client.app.state.session_provider
        monkeypatch.setattr(provider, "get_current_user", unreachable)
        headers = {"Authorization": "Bearer some-token"}

        assert client.get("/dashboard", headers=headers).status_code == 307
        response = client.get("/auth/me", headers=headers)
        assert response.status_code == 401
        assert response.json()["error"]["code"] == "UNAUTHORIZED"

    def test_anonymous_entry_page(self, client):
        response = client.get("/", params={"next": "/gym"})

        assert response.status_code == 200
        assert response.json()["next"] == "/gym"
        assert response.json()["app_name"] == "Forge"

    def test_entry_page_rejects_external_next(self, client):
        response = client.get("/", params={"next": "https://evil.example.com"})
        assert response.json()["next"] == "/dashboard"

    def test_authenticated_entry_redirects_home(self, auth_client):
        response = auth_client.get("/")

        assert response.status_code == 307
        assert response.headers["location"] == "/dashboard"

    def test_authenticated_protected_path_passes(self, auth_client):
        assert auth_client.get("/dashboard").status_code == 200

    def test_session_cookie_is_accepted(self, client, session, settings):
        client.cookies.set(settings.session_cookie_name, session.access_token)

        assert client.get("/habits").status_code == 200

    def test_unprotected_api_route_returns_401_not_redirect(self, client):
        response = client.get("/auth/me")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "UNAUTHORIZED"


class TestShellAndHealth:
    def test_shell(self, auth_client):
        body = auth_client.get("/shell").json()

        assert body["user"] == {"email": "kanan@example.com", "avatar_initial": "K"}
        assert [item["label"] for item in body["nav_items"]] == [
            "Dashboard", "Courses", "Gym", "Habits", "Todos",
        ]
        assert body["sign_out_path"] == "/auth/sign-out"

    def test_health(self, client):
        body = client.get("/health").json()

        assert body["status"] == "healthy"
        assert body["backend"]["backend"] == "sqlite"

    def test_health_degraded(self, client, backend, monkeypatch):
        monkeypatch.setattr(backend, "health_check", lambda: {
            "healthy": False, "backend": "sqlite", "latency_ms": 0.1, "details": {},
        })

        assert client.get("/health").json()["status"] == "degraded"


class TestSecurityHeaders:
    def test_headers_present(self, client):
        response = client.get("/health")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert "default-src 'none'" in response.headers["Content-Security-Policy"]
        assert "Strict-Transport-Security" not in response.headers

    def test_docs_without_csp(self, client):
        response = client.get("/docs")

        assert response.status_code == 200
        assert "Content-Security-Policy" not in response.headers
