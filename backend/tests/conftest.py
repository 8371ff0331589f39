import os

# Must be set before anything under app/ is imported: settings and the engine
# are built at import time.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlmodel import Session, SQLModel  # noqa: E402

from app.config import settings  # noqa: E402
from app.database import engine  # noqa: E402
from app.main import app  # noqa: E402
from app.schema import DEFAULT_ADMIN_PASSWORD, DEFAULT_ADMIN_USERNAME, TABLES, ensure_schema  # noqa: E402
from app.services.session_store import InMemorySessionStore, get_session_store  # noqa: E402

# ============================================================================
# Test database
# ============================================================================
# DATABASE_URL=sqlite:// gives the app engine a single StaticPool connection,
# so the app, its startup hook and the tests all see the same in-memory DB.
# Tables are dropped before every test; the client fixture's startup (or the
# session fixture) recreates them.


@pytest.fixture(autouse=True)
def clean_database():
    SQLModel.metadata.drop_all(engine, tables=list(TABLES))
    yield


@pytest.fixture(name="session")
def session_fixture():
    """Session on a database with the schema applied and no rows"""
    ensure_schema(engine)
    with Session(engine) as session:
        yield session


@pytest.fixture(name="store")
def store_fixture():
    return InMemorySessionStore(ttl_seconds=settings.session_ttl_seconds)


@pytest.fixture(name="client")
def client_fixture(store: InMemorySessionStore):
    """Test client whose startup has applied the schema and seeded defaults

    The session store override is installed BEFORE TestClient() so no test
    ever touches the process-wide store.
    """
    app.dependency_overrides[get_session_store] = lambda: store

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture(name="logged_in_client")
def logged_in_client_fixture(client: TestClient):
    response = client.post(
        "/login",
        data={"username": DEFAULT_ADMIN_USERNAME, "password": DEFAULT_ADMIN_PASSWORD},
        follow_redirects=False,
    )
    assert response.status_code == 303
    return client
