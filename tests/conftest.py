"""
Shared test fixtures for EgoFix Diagnostics.

This module provides common fixtures used across all test modules:
- Environment setup (dev mode logging)
- Database session (in-memory SQLite) with all tables created
- SQLAlchemyDiagnosticStore bound to that session
- A fixed "now" for deterministic cooldown and scheduling tests

Usage:
    All fixtures are automatically available to any test in the tests/ directory.
"""

from __future__ import annotations

import os
from datetime import UTC, datetime

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

os.environ.setdefault("EGOFIX_DEV_MODE", "1")

from egofix.models import (  # noqa: E402
    AnalyticsEvent,  # noqa: F401
    Base,
    Bug,  # noqa: F401
    DetectedPattern,  # noqa: F401
    UserProfile,  # noqa: F401
    WeeklyDiagnostic,  # noqa: F401
)
from egofix.services.diagnostic_store import SQLAlchemyDiagnosticStore  # noqa: E402

# ---------------------------------------------------------------------------
# 1. db_session -- in-memory SQLite session for unit tests
# ---------------------------------------------------------------------------

@pytest.fixture()
def db_session():
    """
    Provide a SQLAlchemy session backed by an in-memory SQLite database.

    A fresh database is created for every test that requests this fixture.
    The session is closed and the engine disposed after the test finishes.
    """
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)

    TestingSession = sessionmaker(bind=engine)
    session = TestingSession()

    yield session

    session.close()
    engine.dispose()


# ---------------------------------------------------------------------------
# 2. store -- the SQLAlchemy-backed DiagnosticStore
# ---------------------------------------------------------------------------

@pytest.fixture()
def store(db_session):
    return SQLAlchemyDiagnosticStore(db_session)


# ---------------------------------------------------------------------------
# 3. identities and time
# ---------------------------------------------------------------------------

@pytest.fixture()
def user_id():
    return "00000000-0000-4000-8000-000000000001"


@pytest.fixture()
def now():
    """A fixed Monday morning, UTC."""
    return datetime(2026, 10, 19, 9, 0, tzinfo=UTC)
