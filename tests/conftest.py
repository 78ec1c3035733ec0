import os

os.environ["ENV"] = "test"
os.environ.setdefault("STORE_BACKEND", "database")
os.environ.setdefault("GENERATION_BACKEND", "local")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

import app.models  # noqa: E402,F401  register mappers
from app.db import Base, SessionLocal, engine, get_db  # noqa: E402
from app.main import create_app  # noqa: E402
from app.stores.memory import InMemoryConversationStore  # noqa: E402
from app.stores.sql import SqlConversationStore  # noqa: E402

pytest_plugins = [
    "tests.fixtures.session_fixtures",
    "tests.fixtures.generation_fixtures",
]


@pytest.fixture(scope="function")
def db():
    """Fresh in-memory SQLite schema per test."""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function", params=["sql", "memory"])
def store(request, db):
    """Each service test runs against both store backends."""
    if request.param == "memory":
        return InMemoryConversationStore()
    return SqlConversationStore(db)


@pytest.fixture(scope="function")
def client(db):
    """Client with db override and testing mode (no lifespan)."""
    app = create_app(testing=True)

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def memory_client():
    """Client backed by the process-local store."""
    app = create_app(testing=True)
    app.state.memory_store = InMemoryConversationStore()
    with TestClient(app) as c:
        yield c
