"""
Shared fixtures: in-memory SQLite database and an API client bound to it.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
import kickoff.models  # noqa: F401
from kickoff.db.base import Base
from kickoff.db.session import get_db
from kickoff.main import app


@pytest.fixture
def session_factory():
    """Fresh in-memory database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    """Database session for service-level tests."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    """Test client with get_db pointed at the test database."""
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def travelers(client):
    """Alice, Bob and Cara, keyed by name -> id."""
    ids = {}
    for name, color, emoji in [
        ("Alice", "#e11d48", "⚽"),
        ("Bob", "#2563eb", "\U0001F3DF"),
        ("Cara", "#16a34a", "\U0001F697"),
    ]:
        response = client.post("/api/travelers", json={"name": name, "color": color, "emoji": emoji})
        assert response.status_code == 201
        ids[name] = response.json()["id"]
    return ids
