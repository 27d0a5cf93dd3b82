"""
Pytest configuration and shared fixtures for testing.

Provides reusable test fixtures:
- compensation: Default compensation config
- session_factory / repository: In-memory SQLite record store
- clock: Adjustable clock for the engine
- engine: EarningsEngine on the in-memory store with the adjustable clock
- test_client: FastAPI TestClient wired to the test engine and database
"""

import datetime
import os
import sys
import tempfile
from pathlib import Path

# Environment must be set before nightpay modules read it at import time
TEST_DIR = Path(tempfile.mkdtemp(prefix="nightpay-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DIR / 'nightpay-test.db'}"
os.environ["LOG_DIR"] = str(TEST_DIR / "logs")
os.environ["PRODUCTION"] = "false"
os.environ["TICK_INTERVAL_SECONDS"] = "60"
os.environ.pop("COMPENSATION_CONFIG", None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# ruff: noqa: E402
from nightpay.core.engine import EarningsEngine
from nightpay.core.models import CompensationConfig
from nightpay.core.storage import EarningsRepository
from nightpay.core.time_utils import LOCAL_TZ
from nightpay.database.database import Base, get_db
from nightpay.main import app
from nightpay.routes.shared import get_engine


def local(year, month, day, hour=0, minute=0):
    """Aware datetime in the payroll timezone."""
    return datetime.datetime(year, month, day, hour, minute, tzinfo=LOCAL_TZ)


class FakeClock:
    """Clock returning a settable instant."""

    def __init__(self, now: datetime.datetime):
        self.now = now

    def __call__(self) -> datetime.datetime:
        return self.now


@pytest.fixture
def compensation():
    return CompensationConfig()


@pytest.fixture(scope="function")
def session_factory():
    """
    Session factory on a fresh in-memory SQLite database.

    StaticPool keeps one connection so every session sees the same database.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    try:
        yield TestingSessionLocal
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def repository(session_factory):
    return EarningsRepository(session_factory)


@pytest.fixture
def clock():
    """Monday 2026-10-19 23:00 local, one hour into the Monday night shift."""
    return FakeClock(local(2026, 10, 19, 23, 0))


@pytest.fixture
def engine(compensation, repository, clock):
    return EarningsEngine(compensation, repository, clock=clock)


@pytest.fixture(scope="function")
def test_client(engine, session_factory):
    """
    Create FastAPI TestClient using the test engine and the in-memory database.

    Yields:
        TestClient: FastAPI test client for API testing
    """

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_engine] = lambda: engine

    with TestClient(app) as client:
        yield client

    # Clean up
    app.dependency_overrides.clear()
