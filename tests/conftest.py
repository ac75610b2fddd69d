"""Test configuration and fixtures."""

from typing import Generator, List, Tuple

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

from support_desk.api import app
from support_desk.db.base import Base, build_engine, get_db
from support_desk.deps import get_dispatcher, get_token_service
from support_desk.errors import SinkError
from support_desk.notifications import NotificationDispatcher, NotificationSink
from support_desk.security import TokenService

TEST_SECRET = "test-signing-secret-not-for-production"


class RecordingSink(NotificationSink):
    """Keeps every delivered message in memory."""

    name = "recording"

    def __init__(self):
        self.sent: List[Tuple[str, str, str]] = []

    def notify(self, to: str, subject: str, body: str) -> None:
        self.sent.append((to, subject, body))


class FailingSink(NotificationSink):
    """Rejects every message."""

    name = "failing"

    def __init__(self, error: Exception = None):
        self.error = error or SinkError("provider unavailable")
        self.attempts = 0

    def notify(self, to: str, subject: str, body: str) -> None:
        self.attempts += 1
        raise self.error


@pytest.fixture
def engine():
    """Fresh in-memory database for each test."""
    from support_desk.db import models  # noqa: F401

    test_engine = build_engine("sqlite:///:memory:")
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def session_factory(engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


@pytest.fixture
def db_session(session_factory) -> Generator[Session, None, None]:
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def dispatcher(sink) -> NotificationDispatcher:
    return NotificationDispatcher(sink)


@pytest.fixture
def token_service() -> TokenService:
    return TokenService(TEST_SECRET)


@pytest.fixture
def client(session_factory, dispatcher, token_service) -> Generator[TestClient, None, None]:
    """API client wired to the per-test database, sink and token service."""

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_dispatcher] = lambda: dispatcher
    app.dependency_overrides[get_token_service] = lambda: token_service

    yield TestClient(app)

    app.dependency_overrides.clear()
