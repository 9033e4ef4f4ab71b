"""
Shared fixtures for GreenPlan Server tests

Every test gets a fresh in-memory SQLite database.
"""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
from fastapi.testclient import TestClient

from config import Settings
from managers import DatabaseManager, UserManager, PointManager, MaterialManager, LogManager
from models.api import MaterialRequest, PointRequest
from models.auth import Identity
from server import CreateApp


# =============================================================================
# Core fixtures
# =============================================================================


@pytest.fixture
def settings():
    """Settings for an in-memory database with fast password hashing."""
    return Settings(
        database_url="sqlite://",
        jwt_secret="test-secret",
        bcrypt_rounds=4,
        cors_origins="http://localhost:3000,https://sg-green-plan-server.onrender.com",
        _env_file=None,
    )


@pytest.fixture
def db_manager(settings):
    """Initialized database manager."""
    manager = DatabaseManager(settings.database_url, bcrypt_rounds=settings.bcrypt_rounds)
    manager.InitializeDatabase()
    yield manager
    manager.Dispose()


@pytest.fixture
def users(db_manager):
    return UserManager(db_manager)


@pytest.fixture
def points(db_manager):
    return PointManager(db_manager)


@pytest.fixture
def materials(db_manager):
    return MaterialManager(db_manager)


@pytest.fixture
def logs(db_manager):
    return LogManager(db_manager)


# =============================================================================
# Identities and catalog
# =============================================================================


@pytest.fixture
def alice(users):
    """Regular user."""
    user_id = users.RegisterUser("alice", "pw123", "pw123", "user")
    return Identity(id=user_id, username="alice", role="user")


@pytest.fixture
def carol(users):
    """Second regular user."""
    user_id = users.RegisterUser("carol", "pw456", "pw456", "user")
    return Identity(id=user_id, username="carol", role="user")


@pytest.fixture
def bob(users):
    """Administrator."""
    user_id = users.RegisterUser("bob", "adminpw", "adminpw", "admin")
    return Identity(id=user_id, username="bob", role="admin")


@pytest.fixture
def catalog(points, materials, bob):
    """Two materials and one point accepting both."""
    plastic_id = materials.CreateMaterial(MaterialRequest(material_name="Plastic", icon_url="/icons/plastic.png"), bob)
    paper_id = materials.CreateMaterial(MaterialRequest(material_name="Paper"), bob)
    point_id = points.CreatePoint(
        PointRequest(
            name="Tampines Hub",
            address="1 Tampines Walk",
            postal_code="528523",
            latitude=1.3530,
            longitude=103.9400,
            materials=[plastic_id, paper_id],
        ),
        bob,
    )
    return {"point_id": point_id, "plastic_id": plastic_id, "paper_id": paper_id}


# =============================================================================
# HTTP client
# =============================================================================


@pytest.fixture
def client(settings, db_manager):
    """Test client running the app lifespan against the shared database."""
    app = CreateApp(settings, db_manager=db_manager)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def login(client):
    """Register (if needed) and log in, returning Authorization headers."""

    def _login(username, password="secret", role="user"):
        client.post("/register", json={
            "username": username,
            "password": password,
            "confirmPassword": password,
            "role": role,
        })
        response = client.post("/login", json={"username": username, "password": password})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _login
