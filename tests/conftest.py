import os

os.environ.setdefault("ENV", "test")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from boxtracker.db import get_db
from boxtracker.db.schema import run_migrations
from boxtracker.main import create_app

pytest_plugins = [
    "tests.fixtures.box_fixtures",
]


@pytest.fixture(scope="function")
def engine():
    """In-memory SQLite database migrated by the startup schema steps."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    run_migrations(engine)
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def db(engine):
    session = Session(bind=engine)
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def app(db):
    """App in testing mode with get_db bound to the test session."""
    app = create_app(testing=True)

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    yield app
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def client(app):
    with TestClient(app) as c:
        yield c
