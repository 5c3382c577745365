"""Service test fixtures - async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched so the readiness probe sees the test engine

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for predicate
      execution (LIKE is ASCII case-insensitive here, so tests keep exact case
      when asserting case-sensitive behaviour)
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from dynquery.db.base import Base
from dynquery.infrastructure.database import get_db, DatabaseSessionManager
from dynquery.models.customer import Customer
import dynquery.infrastructure.database as db_module
from dynquery.main import app

# (code, company_name, city, country)
CUSTOMER_ROWS = [
    ("UKPAR", "Channel Traders", "Paris", "UK"),
    ("FRSEA", "Rainier Imports", "Seattle", "FR"),
    ("FRPAR", "Rive Gauche", "Paris", "FR"),
    ("UKSEA", "Puget Sound Tea", "Seattle", "UK"),
    ("AROUT", "Around the Horn", "London", "UK"),
]


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
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


@pytest.fixture
async def seed_customers(test_db):
    """Insert the Country/City matrix used across search tests."""
    customers = [
        Customer(code=code, company_name=name, city=city, country=country)
        for code, name, city, country in CUSTOMER_ROWS
    ]
    test_db.add_all(customers)
    await test_db.commit()
    return {c.code: c for c in customers}
