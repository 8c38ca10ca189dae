"""Service test fixtures: async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test database
    - app.state.db_manager points at the test engine (readiness probe)
    - Two API keys seeded: VALID_KEY authorizes, REVOKED_KEY is rejected
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool

from bookshelf.db.base import Base
from bookshelf.infrastructure.database import get_db, DatabaseSessionManager
from bookshelf.main import app
from bookshelf.models.api_key import ApiKey
import bookshelf.models  # noqa: F401
from tests.services.auth_helpers import AUTH_HEADERS, REVOKED_KEY, VALID_KEY


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def api_keys(test_db):
    test_db.add_all([
        ApiKey(key=VALID_KEY, is_valid=True, label="tests"),
        ApiKey(key=REVOKED_KEY, is_valid=False, label="revoked"),
    ])
    await test_db.commit()
    return {"valid": VALID_KEY, "revoked": REVOKED_KEY}


@pytest.fixture
async def client(test_engine, test_session_factory, api_keys):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = getattr(app.state, "db_manager", None)
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    app.state.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    app.state.db_manager = original_manager


@pytest.fixture
async def create_book(client):
    """POST a book through the API and return its id."""
    async def _create(**fields) -> str:
        body = {"author": "Author", "price": 10, "year_published": 2000}
        body.update(fields)
        res = await client.post("/book", json=body, headers=AUTH_HEADERS)
        assert res.status_code == 201, res.text
        return res.json()["id"]
    return _create
