import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from app.core.config import Settings, get_settings
from app.db import build_engine, init_models
from app.main import app


@pytest.fixture(autouse=True)
def reset_env(monkeypatch):
    # Keep switches from the host environment out of the tests
    for name in ("DATABASE_URL", "EXCLUSIVE_ACTOR_ASSIGNMENT", "PARTIAL_UPDATES", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def engine():
    engine = build_engine("sqlite://")
    init_models(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


@pytest.fixture
def session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def client(monkeypatch, session_factory, settings):
    # get_session runs unmodified against the per-test engine
    monkeypatch.setattr("app.db.SessionLocal", session_factory)
    app.dependency_overrides[get_settings] = lambda: settings
    yield TestClient(app)
    app.dependency_overrides.clear()
