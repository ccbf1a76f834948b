"""Pytest configuration and fixtures."""

import os
import tempfile

import pytest

# Point the app at an in-memory database before any spill_registry import
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOCAL_STORAGE_DIR"] = tempfile.mkdtemp(prefix="spill-registry-")
os.environ["SECRET_KEY"] = "test-secret-key"

from fastapi.testclient import TestClient  # noqa: E402

from spill_registry import models  # noqa: E402, F401
from spill_registry.database import Base, SessionLocal, engine  # noqa: E402


@pytest.fixture
def db():
    """Database session on a fresh schema."""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db, tmp_path):
    """FastAPI test client sharing the test database, attachments under tmp_path."""
    from spill_registry.api.main import app
    from spill_registry.api.reports import get_object_store
    from spill_registry.core.attachments import LocalObjectStore
    from spill_registry.database import get_db

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_object_store] = lambda: LocalObjectStore(str(tmp_path), "http://testserver")
    yield TestClient(app)
    app.dependency_overrides.clear()


def _make_user(db, email, role):
    from spill_registry.api.auth import get_password_hash
    from spill_registry.models.user import User

    user = User(email=email, hashed_password=get_password_hash("secret"), role=role, is_active=True)
    db.add(user)
    db.commit()
    return user


def _login(client, email):
    response = client.post("/api/token", data={"username": email, "password": "secret"})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def auth_headers(client, db):
    """Bearer headers for a regular user."""
    from spill_registry.models.user import UserRole

    _make_user(db, "agent@example.com", UserRole.USER)
    return _login(client, "agent@example.com")


@pytest.fixture
def admin_headers(client, db):
    """Bearer headers for an admin."""
    from spill_registry.models.user import UserRole

    _make_user(db, "admin@example.com", UserRole.ADMIN)
    return _login(client, "admin@example.com")
