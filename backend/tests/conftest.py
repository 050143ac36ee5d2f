"""Global test configuration and fixtures."""

from datetime import datetime

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from fieldtrack.db.session import get_async_db
from fieldtrack.features.tracking import DistanceAccumulator, SessionLockRegistry, TrackingService
from fieldtrack.features.users import UserRepository, hash_password
from fieldtrack.main import app
from fieldtrack.models import Base, register_models

register_models()


# =============================================================================
# Database
# =============================================================================

@pytest.fixture
def db_path(tmp_path):
    """Path of a fresh SQLite file with all tables created."""
    path = tmp_path / "fieldtrack_test.db"
    engine = create_engine(f"sqlite:///{path}")
    Base.metadata.create_all(bind=engine)
    engine.dispose()
    return path


@pytest.fixture
def session_factory(db_path):
    """Async session factory bound to the test database."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}", poolclass=NullPool)
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    """Async database session for repository/service tests."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def officer(db_session):
    """A FIELD-role user."""
    return await UserRepository(db_session).create(
        name="Ravi Kumar",
        phone="9000000001",
        email="ravi@example.com",
        password_hash=hash_password("secret"),
        role="FIELD",
        state="Karnataka",
        district="Bengaluru Urban",
    )


@pytest.fixture
def tracking_service(db_session):
    """TrackingService with default thresholds and a private lock registry."""
    return TrackingService(
        db_session,
        accumulator=DistanceAccumulator(),
        locks=SessionLockRegistry(),
    )


@pytest.fixture
def base_time():
    """Fixed start time for deterministic sessions."""
    return datetime(2026, 3, 2, 9, 0, 0)


# =============================================================================
# HTTP
# =============================================================================

@pytest.fixture
def client(session_factory):
    """Test client with the database dependency pointed at the test database."""

    async def override_get_async_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_async_db] = override_get_async_db
    client = TestClient(app)
    yield client
    # Clean up
    app.dependency_overrides.clear()


def _signup_and_login(client, name, phone, email, role):
    response = client.post("/api/v1/auth/signup", json={
        "name": name,
        "phone": phone,
        "email": email,
        "password": "pass1234",
        "role": role,
    })
    assert response.status_code == 201, response.text

    response = client.post("/api/v1/auth/login", json={
        "email": email,
        "password": "pass1234",
    })
    assert response.status_code == 200, response.text
    body = response.json()
    return {"Authorization": f"Bearer {body['token']}"}, body["user"]["id"]


@pytest.fixture
def field_auth(client):
    """(headers, user_id) of a logged-in field officer."""
    return _signup_and_login(client, "Asha", "9000000010", "asha@example.com", "field")


@pytest.fixture
def admin_auth(client):
    """(headers, user_id) of a logged-in admin."""
    return _signup_and_login(client, "Admin", "9000000099", "admin@example.com", "ADMIN")
