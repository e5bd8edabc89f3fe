import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import eventhub.models  # noqa: F401
from eventhub.config import Settings, get_settings
from eventhub.database import Base, get_db
from eventhub.main import app

TEST_SETTINGS = Settings(jwt_secret="test-secret")


class AsyncSessionWrapper:
    """Minimal async-compatible wrapper around a synchronous SQLAlchemy Session for testing."""

    def __init__(self, session: Session):
        self._session = session

    async def execute(self, *args, **kwargs):
        return self._session.execute(*args, **kwargs)

    def add(self, instance):
        self._session.add(instance)

    async def commit(self):
        self._session.commit()

    async def rollback(self):
        self._session.rollback()

    async def refresh(self, instance):
        self._session.refresh(instance)

    async def close(self):
        self._session.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()


@pytest.fixture
def settings():
    return TEST_SETTINGS


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    try:
        yield sessionmaker(bind=engine, expire_on_commit=False)
    finally:
        engine.dispose()


@pytest.fixture
def db(session_factory):
    """One wrapped session shared by a whole service-level test."""
    session = session_factory()
    try:
        yield AsyncSessionWrapper(session)
    finally:
        session.close()


@pytest.fixture
def client(session_factory, settings):
    async def _get_db():
        async with AsyncSessionWrapper(session_factory()) as session:
            yield session

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_settings] = lambda: settings
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
