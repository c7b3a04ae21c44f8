"""
Pytest configuration and shared fixtures for backend tests.

WHAT: Centralized test configuration, markers and shared helpers
WHY: Every test gets a throwaway SQLite file and fresh provider singletons
HOW: Point DATABASE_URL/LOG_FILE at a temp dir before the app is imported,
     then recreate tables around each test
"""

import os
import tempfile

_TEST_DIR = tempfile.mkdtemp(prefix="dealcounsel-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{_TEST_DIR}/test.db"
os.environ["LOG_FILE"] = f"{_TEST_DIR}/logs/app.log"
os.environ["OPENAI_API_KEY"] = ""
os.environ["GROQ_API_KEY"] = ""

import pytest  # noqa: E402

from dealcounsel.core.config import settings  # noqa: E402
from dealcounsel.core.database import Base, engine, get_db  # noqa: E402
from dealcounsel.core import models  # noqa: E402,F401
from dealcounsel.llm.provider_factory import reset_provider  # noqa: E402


USER_ID = "user-1"
OTHER_USER_ID = "user-2"


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests (isolated component tests)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (multiple components)"
    )


@pytest.fixture(autouse=True)
def reset_provider_singleton():
    """
    Reset provider singletons before each test.

    WHAT: Clear provider cache between tests
    WHY: Providers capture API keys at construction
    HOW: Call reset_provider() before and after each test
    """
    reset_provider()
    yield
    reset_provider()


@pytest.fixture(autouse=True)
def fresh_database():
    """Drop and recreate every table so each test starts empty."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def api_keys(monkeypatch):
    """Configure both upstream keys on the live settings object."""
    monkeypatch.setattr(settings, "OPENAI_API_KEY", "sk-test-openai")
    monkeypatch.setattr(settings, "GROQ_API_KEY", "gsk-test-groq")


@pytest.fixture
def db_session():
    """Open session for direct row setup and assertions."""
    with get_db() as db:
        yield db


@pytest.fixture
def make_profile():
    def _make(user_id: str = USER_ID, full_name: str = "Alex Rivera", **kwargs):
        with get_db() as db:
            profile = models.Profile(user_id=user_id, full_name=full_name, **kwargs)
            db.add(profile)
            db.flush()
            return profile
    return _make
