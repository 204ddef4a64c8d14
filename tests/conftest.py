"""
Test configuration and fixtures for DigestTrack.

- Function-scoped in-memory SQLite engine, tables created per test
- Session fixture and SqlAlchemyStore over it
- TestClient with database and detector dependency overrides
- In-memory store and mock detector for service tests
"""

from datetime import datetime, timezone
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import digesttrack.models  # noqa: F401
from digesttrack.api.dependencies import get_detector
from digesttrack.database import Base, get_db
from digesttrack.main import app
from digesttrack.repositories.sql import SqlAlchemyStore
from digesttrack.services import correlation_service
from tests.fixtures.fakes import InMemoryStore
from tests.fixtures.mocks import MockIngredientDetector


# =============================================================================
# pytest Configuration
# =============================================================================


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without the HTTP layer")
    config.addinivalue_line("markers", "integration: tests going through the API")


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
def test_engine():
    """
    Fresh in-memory SQLite database per test.

    StaticPool keeps a single connection so the TestClient's worker thread
    sees the same database.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)

    yield engine

    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db(test_engine) -> Generator[Session, None, None]:
    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, bind=test_engine
    )
    session = TestingSessionLocal()
    yield session
    session.close()


@pytest.fixture
def sql_store(db: Session) -> SqlAlchemyStore:
    return SqlAlchemyStore(db)


@pytest.fixture
def memory_store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture(autouse=True)
def reset_user_locks():
    """Per-user locks are process-wide; start every test without any."""
    correlation_service._user_locks.clear()
    yield
    correlation_service._user_locks.clear()


@pytest.fixture
def now() -> datetime:
    """Fixed analysis time, mid-afternoon so same-day entries are in the past."""
    return datetime(2024, 6, 15, 15, 0, tzinfo=timezone.utc)


# =============================================================================
# Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_detector() -> MockIngredientDetector:
    return MockIngredientDetector()


# =============================================================================
# TestClient Fixtures
# =============================================================================


@pytest.fixture
def client(db: Session, mock_detector) -> Generator[TestClient, None, None]:
    """
    TestClient with database and detector dependency overrides.

    Not used as a context manager, so the startup hook that creates tables
    in the configured database never runs.
    """

    def override_get_db():
        try:
            yield db
        finally:
            pass  # Don't close - managed by db fixture

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_detector] = lambda: mock_detector

    yield TestClient(app)

    app.dependency_overrides.clear()
