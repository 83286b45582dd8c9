"""
Pytest configuration and fixtures for testing.
Uses the seeded in-memory school repository and a mocked gateway.
"""
import os
import pytest
from fastapi.testclient import TestClient

# Set testing environment before importing app
os.environ["TESTING"] = "True"
os.environ["DEBUG"] = "False"
os.environ["DATA_BACKEND"] = "memory"
os.environ.setdefault("MIDTRANS_SERVER_KEY", "SB-Mid-server-TESTKEY0000000000")
os.environ.setdefault("MIDTRANS_CLIENT_KEY", "SB-Mid-client-TESTKEY0000000000")

from main import app
from services.repository import InMemorySchoolRepository, get_repository
from security import jwt as jwt_utils


@pytest.fixture
def repo():
    """Fresh demo repository for each test."""
    return InMemorySchoolRepository.with_demo_data()


@pytest.fixture
def client(repo):
    """Create a test client with the repository dependency overridden."""
    app.dependency_overrides[get_repository] = lambda: repo
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def student_headers():
    """Authorization headers for Ahmad (student id 1)."""
    return {"Authorization": f"Bearer {jwt_utils.create_access_token('1', 'student')}"}


@pytest.fixture
def admin_headers():
    """Authorization headers for the configured admin."""
    return {"Authorization": f"Bearer {jwt_utils.create_access_token('admin', 'admin')}"}
