# =============================================================================
# PYTEST FIXTURES
# =============================================================================
# Shared fixtures: in-memory database, two users, API client
# =============================================================================

import os

# Must be set before app.config is imported
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi import Header
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.auth import get_current_user_id
from app.database import Base, get_db
from app.main import app


USER_A = "11111111-1111-4111-8111-111111111111"
USER_B = "22222222-2222-4222-8222-222222222222"


# -----------------------------------------------------------------------------
# DATABASE FIXTURE (In-Memory)
# -----------------------------------------------------------------------------

@pytest.fixture
def engine():
    # StaticPool so the TestClient thread sees the same in-memory DB
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


# -----------------------------------------------------------------------------
# API CLIENTS
# -----------------------------------------------------------------------------

@pytest.fixture
def make_client(engine):
    """Build a TestClient authenticated as the given user id."""
    SessionTesting = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        session = SessionTesting()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db

    def _make(user_id):
        client = TestClient(app)
        # Identity travels in a header so two clients can share the app
        client.headers["X-Test-User"] = user_id
        return client

    def current_test_user(x_test_user: str = Header(...)):
        return x_test_user

    app.dependency_overrides[get_current_user_id] = current_test_user
    yield _make
    app.dependency_overrides.clear()


@pytest.fixture
def client(make_client):
    return make_client(USER_A)


@pytest.fixture
def other_client(make_client):
    return make_client(USER_B)


@pytest.fixture
def rect():
    return {"x": 10, "y": 20, "width": 100, "height": 50}
