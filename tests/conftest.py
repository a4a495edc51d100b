"""
Pytest fixtures shared across the unit, integration and CLI suites.

The environment is fixed before anything from ``daydiary`` is imported:
the application engine points at a private in-memory SQLite database and
no outbound collaborator is configured.
"""
import os
import tempfile

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_DIR"] = tempfile.mkdtemp(prefix="daydiary-test-logs-")
os.environ["ENTRY_TITLE_REQUIRED"] = "true"
for _key in (
    "POSTGRES_URL",
    "CELERY_BROKER_URL",
    "MEDIA_HOST_CLOUD_NAME",
    "MEDIA_HOST_UPLOAD_PRESET",
    "MEDIA_HOST_API_KEY",
    "MEDIA_HOST_API_SECRET",
    "CHAT_API_KEY",
    "QUOTE_API_KEY",
):
    os.environ.pop(_key, None)

import pytest
from sqlmodel import Session, SQLModel

from daydiary import models  # noqa: F401  (registers tables)
from daydiary.core.database import engine


@pytest.fixture
def db_engine():
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def db_session(db_engine):
    session = Session(db_engine)
    yield session
    session.close()


@pytest.fixture
def client(db_engine):
    """TestClient bound to the shared in-memory database (lifespan not run)."""
    from fastapi.testclient import TestClient

    from daydiary.main import app

    return TestClient(app)
