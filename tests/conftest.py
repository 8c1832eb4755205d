"""
Pytest configuration and fixtures.

This file provides pytest-specific configuration and fixtures.
For standard test utilities, see tests/__init__.py
"""

import pytest

from database.database import DatabaseManager
from database.models import Base
from database.uow import Repositories
from tests import RowFactory, get_test_db_url


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "db: marks tests as requiring database (deselect with '-m \"not db\"')"
    )


@pytest.fixture
def db_manager():
    """
    Fresh schema per test.

    Defaults to in-memory SQLite; TEST_DATABASE_URL points the DB tests at
    an external database instead.
    """
    manager = DatabaseManager(get_test_db_url())
    Base.metadata.drop_all(bind=manager.engine)
    manager.create_tables()
    yield manager
    Base.metadata.drop_all(bind=manager.engine)
    manager.engine.dispose()


@pytest.fixture
def db_session(db_manager):
    session = db_manager.SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def repos(db_session):
    return Repositories.for_session(db_session)


@pytest.fixture
def rows(db_session):
    return RowFactory(db_session)


@pytest.fixture
def match_cache():
    from tests.mocks.boxing_mocks import InMemoryMatchCache
    return InMemoryMatchCache()


@pytest.fixture
def api_client(db_manager, match_cache):
    """
    TestClient over the full app, bound to the test database and an
    in-memory match cache. Rate limiting is switched off.
    """
    from fastapi.testclient import TestClient
    from web.backend.app import create_app
    from web.backend.dependencies import get_cache, get_db
    from web.backend.rate_limit import limiter

    app = create_app()
    app.dependency_overrides[get_db] = db_manager.get_db
    app.dependency_overrides[get_cache] = lambda: match_cache
    limiter.enabled = False
    try:
        with TestClient(app) as client:
            yield client
    finally:
        limiter.enabled = True
        app.dependency_overrides.clear()
