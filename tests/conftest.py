"""
Test infrastructure for the Blog API.

Strategy
--------
- SQLite via aiosqlite removes the need for a running Postgres instance in
  CI, keeping the suite fast and self-contained.
- Each test gets its own database file under ``tmp_path``.  A file (rather
  than ``:memory:``) lets the engine hand out several real connections, so
  concurrent requests exercise the store's own write serialisation instead
  of sharing one connection.
- Foreign keys are switched on and the schema is built with the same
  ``init_models`` the application runs at startup.
- The app's ``get_db`` dependency is overridden so every request uses the
  per-test engine rather than the production one.
"""
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from blogapi.database import enable_sqlite_foreign_keys, get_db, init_models
from blogapi.main import app
from blogapi.middleware import count_statements


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def db(tmp_path) -> AsyncEngine:
    """
    Yield a fresh engine bound to an empty database for tests that call
    repositories or the credential gate directly.
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'blog.db'}")
    count_statements(engine)
    enable_sqlite_foreign_keys(engine)
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def async_client(db: AsyncEngine) -> AsyncClient:
    """
    Yield an httpx.AsyncClient wired to the FastAPI app via ASGITransport,
    with ``get_db`` pointing at the per-test engine.
    """
    async def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.pop(get_db, None)


@pytest_asyncio.fixture
async def user(async_client: AsyncClient) -> dict:
    """A registered user; the returned dict carries the plaintext password."""
    resp = await async_client.post(
        "/api/users", json={"username": "ann", "password": "longenough"}
    )
    assert resp.status_code == 201
    return {**resp.json(), "password": "longenough"}


@pytest_asyncio.fixture
async def auth_headers(user: dict) -> dict:
    return {"username": user["username"], "password": user["password"]}
