"""
Shared pytest fixtures.

Tests run against an in-memory SQLite database. SQLite needs two tweaks to
behave like PostgreSQL here:
- foreign keys are off by default (ON DELETE CASCADE / SET NULL rely on them)
- pysqlite's own transaction handling breaks SAVEPOINT, so BEGIN is emitted
  by SQLAlchemy instead
"""

import os

# Settings are read at import time
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key-not-for-production"
os.environ["RESEND_API_KEY"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from whereisit.db.session import get_db
from whereisit.main import app
from whereisit.models import Base, User
from whereisit.services.auth_service import create_access_token


# ============================================================================
# Test Database Setup
# ============================================================================

test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


@event.listens_for(test_engine, "connect")
def _on_connect(dbapi_connection, connection_record):
    dbapi_connection.isolation_level = None
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@event.listens_for(test_engine, "begin")
def _on_begin(conn):
    conn.exec_driver_sql("BEGIN")


TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture
def db():
    """Fresh schema and session for each test."""
    Base.metadata.create_all(bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def client(db):
    """
    API client sharing the test session.

    Whatever a request leaves uncommitted (for instance after an error) is
    rolled back, as closing the real per-request session would.
    """
    def _override_get_db():
        try:
            yield db
        finally:
            db.rollback()

    app.dependency_overrides[get_db] = _override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


# ============================================================================
# Helpers
# ============================================================================

def auth_headers(user_id: str, email: str = None) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user_id, email)}"}


@pytest.fixture
def alice():
    return auth_headers("alice", "alice@example.com")


@pytest.fixture
def bob():
    return auth_headers("bob", "bob@example.com")


@pytest.fixture
def headers_for():
    """Bearer headers for any user id and optional email."""
    return auth_headers


@pytest.fixture
def make_user(db):
    """Create a user row, optionally bound to a household."""
    def _make_user(user_id: str, email: str = None, household_id: int = None) -> User:
        user = User(id=user_id, email=email, household_id=household_id)
        db.add(user)
        db.flush()
        return user
    return _make_user
