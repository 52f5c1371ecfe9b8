"""Pytest configuration and fixtures."""
import os

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.core.context import AppContext
from app.database.database import init_db
from app.main import create_app
from helpers import SESSION_COOKIE


@pytest.fixture(scope="session")
def require_db():
    """Skip tests that need a real database when DATABASE_URL is not set."""
    if not os.getenv("DATABASE_URL"):
        pytest.skip("DATABASE_URL not set; skipping integration test")


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        DATABASE_URL=f"sqlite:///{tmp_path / 'helping_hand.db'}",
        SECRET_KEY="test-secret",
        SESSION_COOKIE_NAME=SESSION_COOKIE,
        BCRYPT_ROUNDS=4,
        LOG_FILE="",
        DEBUG=True,
        ENVIRONMENT="test",
        EXPORT_ROOT=str(tmp_path / "src"),
    )


@pytest.fixture
def context(settings):
    ctx = AppContext.from_settings(settings)
    init_db(ctx.engine)
    yield ctx
    ctx.dispose()


@pytest.fixture
def db(context):
    session = context.session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def app(context):
    return create_app(context=context)


@pytest.fixture
def make_client(app):
    """Each client keeps its own cookie jar, i.e. its own login."""
    def _make_client(**kwargs):
        return TestClient(app, **kwargs)
    return _make_client


@pytest.fixture
def client(make_client):
    return make_client()
