import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import kds.models  # noqa: F401  (registers tables)
from kds.database import Base, get_db, get_session_factory
from kds.main import app
from kds.publishers import get_broadcaster, get_event_publisher
from kds.publishers.base import EventPublisher
from kds.publishers.broadcaster import Broadcaster


class RecordingPublisher(EventPublisher):
    """Collects published events instead of delivering them"""

    def __init__(self):
        self.events = []

    @property
    def provider_name(self) -> str:
        return "recording"

    def publish(self, event, payload):
        self.events.append((event, payload))

    def names(self):
        return [event for event, _ in self.events]


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def publisher():
    return RecordingPublisher()


def _override_store(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory


@pytest.fixture
def client(session_factory, publisher):
    """API client whose events land in ``publisher``"""
    _override_store(session_factory)
    app.dependency_overrides[get_event_publisher] = lambda: publisher
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def broadcaster():
    return Broadcaster()


@pytest.fixture
def live_client(session_factory, broadcaster):
    """API client wired to a real broadcaster for WebSocket tests"""
    _override_store(session_factory)
    app.dependency_overrides[get_event_publisher] = lambda: broadcaster
    app.dependency_overrides[get_broadcaster] = lambda: broadcaster
    yield TestClient(app)
    app.dependency_overrides.clear()
