"""Service test fixtures — async DB, seeded catalog, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB session
    - seed_medicines inserts in list order, so ids follow insertion order

Design Decisions:
    - SQLite in-memory: fast, no external dependency; WORD_BOUNDARY runs through
      the REGEXP function SQLAlchemy registers on SQLite connections
    - StaticPool: one shared connection so every session sees the same memory DB
    - The test engine gets the same Unicode lower() as the application engine
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from medcatalog.db.base import Base
from medcatalog.db.session import register_sqlite_functions
from medcatalog.infrastructure.database import get_db, DatabaseSessionManager
from medcatalog.infrastructure.sql_catalog import SqlCatalog
from medcatalog.models.medicine import Medicine
import medcatalog.infrastructure.database as db_module
from medcatalog.main import app

from tests.services.catalog_factory import NAPA_CATALOG


@pytest.fixture
async def test_engine():
    engine = register_sqlite_functions(create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    ))
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
def catalog(test_db) -> SqlCatalog:
    return SqlCatalog(test_db)


@pytest.fixture
def seed_medicines(test_db):
    """Insert rows in order; returns the persisted Medicine objects."""
    async def _seed(rows: list[dict]) -> list[Medicine]:
        objects = []
        for row in rows:
            obj = Medicine(**row)
            test_db.add(obj)
            await test_db.flush()
            objects.append(obj)
        await test_db.commit()
        return objects
    return _seed


@pytest.fixture
async def napa_catalog(seed_medicines):
    return await seed_medicines(NAPA_CATALOG)


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
