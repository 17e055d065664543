"""
API test fixtures.

Provides: Application instance, TestClient, authenticated owner override
Dependencies: fastapi, pytest
System role: HTTP-level test infrastructure
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from helios.api.main import create_app
from helios.api.security import get_current_owner

@pytest.fixture
def test_owner() -> str:
    """Provide the authenticated owner id."""
    return "owner-123"


@pytest.fixture
def app(test_owner: str) -> FastAPI:
    """Create FastAPI test application with an authenticated owner."""
    app = create_app()
    app.dependency_overrides[get_current_owner] = lambda: test_owner
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Provide TestClient for the FastAPI app."""
    return TestClient(app)
