"""Infrastructure test fixtures — in-memory SQLite behind DatabaseSessionManager.

Invariants:
    - Every test gets a fresh in-memory SQLite database with all tables created
    - Repositories receive a real DatabaseSessionManager wrapping the test engine

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for repository queries
      (ADR: PostgreSQL-specific features not exercised here)
    - StaticPool: every session sees the same in-memory database
"""

import pytest
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from project_catalog.db.base import Base
from project_catalog.infrastructure.database import DatabaseSessionManager
import project_catalog.models  # noqa: F401


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
async def db_manager(test_engine):
    return DatabaseSessionManager.from_engine(test_engine)
