"""
Basic application tests.

Validates that the FastAPI app starts and shuts down cleanly, the health
endpoint responds, every response carries the secure headers, identity
is required on the protected routes and callers are throttled per user.
"""

import asyncio
from unittest.mock import MagicMock

from fastapi.testclient import TestClient
from starlette.requests import Request

from app.core.config import settings
from app.infrastructure import database
from app.main import app
from app.shared.security.headers import SECURE_HEADERS
from app.shared.security.rate_limiting import rate_limit_exceeded_handler, rate_limit_key

client = TestClient(app)


def _request(headers: dict | None = None, path: str = "/api/v1/products") -> Request:
    return Request(
        {
            "type": "http",
            "method": "GET",
            "path": path,
            "query_string": b"",
            "headers": [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()],
            "client": ("203.0.113.7", 51234),
            "server": ("testserver", 80),
            "scheme": "http",
        }
    )


class TestHealthEndpoint:
    """Tests for the health check endpoint."""

    def test_health_returns_200(self) -> None:
        """Health endpoint must return HTTP 200 with status ok."""
        response = client.get("/api/v1/health")
        assert response.status_code == 200

    def test_health_response_body(self) -> None:
        body = client.get("/api/v1/health").json()
        assert body["status"] == "ok"
        assert body["service"] == settings.project_name
        assert body["version"] == settings.version
        assert set(body["integrations"]) == {"stripe_checkout", "stripe_webhooks", "cloudinary"}

    def test_reports_missing_credentials(self, monkeypatch) -> None:
        monkeypatch.setattr(settings, "cloudinary_cloud_name", "demo")
        monkeypatch.setattr(settings, "cloudinary_api_key", "key")
        monkeypatch.setattr(settings, "cloudinary_api_secret", "secret")
        monkeypatch.setattr(settings, "stripe_webhook_secret", None)

        body = client.get("/api/v1/health").json()

        assert body["integrations"]["cloudinary"] is True
        assert "stripe_webhooks" in body["missing"]
        assert "cloudinary" not in body["missing"]


class TestSecureHeaders:
    def test_headers_on_success(self) -> None:
        response = client.get("/api/v1/health")
        for name, value in SECURE_HEADERS.items():
            assert response.headers[name] == value

    def test_headers_on_error(self) -> None:
        response = client.get("/api/v1/subscriptions/me")
        assert response.status_code == 401
        assert response.headers["X-Frame-Options"] == "DENY"


class TestIdentityHeaders:
    """Protected routes refuse requests without ``X-User-Id``."""

    def test_missing_user_id(self) -> None:
        response = client.get("/api/v1/orders/mine")
        assert response.status_code == 401
        assert response.json() == {"error": "Not authenticated", "detail": "Non authentifié"}

    def test_blank_user_id(self) -> None:
        response = client.get("/api/v1/pages", headers={"X-User-Id": "   "})
        assert response.status_code == 401

    def test_unknown_role_is_a_customer(self) -> None:
        response = client.get(
            "/api/v1/products", headers={"X-User-Id": "u-1", "X-User-Role": "WIZARD"}
        )
        assert response.status_code == 403


class TestRateLimiting:
    def test_key_is_the_forwarded_user(self) -> None:
        assert rate_limit_key(_request({"X-User-Id": " creator-1 "})) == "user:creator-1"

    def test_anonymous_key_is_the_client_address(self) -> None:
        assert rate_limit_key(_request()) == "ip:203.0.113.7"
        assert rate_limit_key(_request({"X-User-Id": "  "})) == "ip:203.0.113.7"

    def test_exceeded_response(self) -> None:
        exc = MagicMock(detail="10 per 1 minute")

        response = asyncio.run(
            rate_limit_exceeded_handler(_request({"X-User-Id": "creator-1"}), exc)
        )

        assert response.status_code == 429
        assert b'"error":"Too many requests"' in response.body
        assert "10 per 1 minute".encode() in response.body


class TestLifespan:
    def test_shutdown_disposes_built_engine(self, monkeypatch) -> None:
        engine = MagicMock()
        get_engine = MagicMock(return_value=engine)
        get_engine.cache_info.return_value.currsize = 1
        monkeypatch.setattr(database, "get_engine", get_engine)
        monkeypatch.setattr(settings, "auto_create_schema", False)

        with TestClient(app):
            engine.dispose.assert_not_called()

        engine.dispose.assert_called_once()
        get_engine.cache_clear.assert_called_once()

    def test_shutdown_without_engine(self, monkeypatch) -> None:
        get_engine = MagicMock()
        get_engine.cache_info.return_value.currsize = 0
        monkeypatch.setattr(database, "get_engine", get_engine)

        database.dispose_engine()

        get_engine.assert_not_called()
