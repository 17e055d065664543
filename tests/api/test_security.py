"""
Test suite for bearer token verification.

System role: Verification of request authentication
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import jwt
import pytest
from fastapi.testclient import TestClient

from helios.api.deps import get_session_service
from helios.api.main import create_app
from helios.api.security import decode_owner
from helios.configs.auth import AuthSettings


@pytest.fixture
def auth_settings() -> AuthSettings:
    """Provide JWT settings with a known secret."""
    return AuthSettings(secret="test-secret", algorithm="HS256")


@pytest.fixture
def unauthenticated_client() -> TestClient:
    """Provide a client without the owner override."""
    app = create_app()
    service = AsyncMock()
    service.list_sessions.return_value = []
    app.dependency_overrides[get_session_service] = lambda: service
    return TestClient(app)


def _token(claims: dict, secret: str = "test-secret") -> str:
    return jwt.encode(claims, secret, algorithm="HS256")


class TestDecodeOwner:
    """Test suite for decode_owner."""

    def test_id_claim_should_be_owner(self, auth_settings) -> None:
        """Test the id claim identifies the owner."""
        assert decode_owner(_token({"id": "u-1"}), auth_settings) == "u-1"

    def test_sub_claim_should_be_fallback(self, auth_settings) -> None:
        """Test sub is used when id is absent."""
        assert decode_owner(_token({"sub": "u-2"}), auth_settings) == "u-2"

    def test_wrong_signature_should_raise_401(self, auth_settings) -> None:
        """Test tokens signed with another key are rejected."""
        from fastapi import HTTPException

        with pytest.raises(HTTPException) as exc_info:
            decode_owner(_token({"id": "u-1"}, secret="other"), auth_settings)

        assert exc_info.value.status_code == 401

    def test_expired_token_should_raise_401(self, auth_settings) -> None:
        """Test expired tokens are rejected with a specific message."""
        from fastapi import HTTPException

        expired = _token({"id": "u-1", "exp": datetime.now(timezone.utc) - timedelta(minutes=1)})

        with pytest.raises(HTTPException) as exc_info:
            decode_owner(expired, auth_settings)

        assert exc_info.value.detail["message"] == "Token expired"

    def test_token_without_owner_should_raise_401(self, auth_settings) -> None:
        """Test tokens lacking id and sub are rejected."""
        from fastapi import HTTPException

        with pytest.raises(HTTPException):
            decode_owner(_token({"name": "nobody"}), auth_settings)


class TestProtectedRoutes:
    """Test suite for authentication on session routes."""

    def test_missing_token_should_return_401(self, unauthenticated_client) -> None:
        """Test requests without a bearer token are rejected."""
        response = unauthenticated_client.get("/api/v1/sessions")

        assert response.status_code == 401
        assert response.json()["message"] == "No token, authorization denied"
        assert response.headers["www-authenticate"] == "Bearer"

    def test_valid_token_should_reach_route(self, unauthenticated_client) -> None:
        """Test a token signed with the configured secret is accepted."""
        # Arrange
        secret = AuthSettings().secret
        token = _token({"id": "u-1"}, secret=secret)

        # Act
        response = unauthenticated_client.get(
            "/api/v1/sessions", headers={"Authorization": f"Bearer {token}"}
        )

        # Assert
        assert response.status_code == 200
        assert response.json() == []
