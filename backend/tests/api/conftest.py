"""API test fixtures — FastAPI app wired to fake repositories.

Invariants:
    - Each test gets its own app and CatalogContext (no shared cache between tests)
    - Lifespan disabled: state is set directly on app.state
    - db_manager wraps an in-memory SQLite engine so readiness checks are real

Design Decisions:
    - httpx ASGITransport: exercises routing, dependencies and error handlers
      without a server
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine

from project_catalog.config import Settings
from project_catalog.infrastructure.database import DatabaseSessionManager
from project_catalog.main import create_app
from project_catalog.services.catalog_context import CatalogContext
from project_catalog.services.ttl_cache import TtlCache

from tests.fakes import (
    FakeClock, FakeProjectSource, FakeValueRepository, FakeVerifierStatusRepository,
    T0, make_project, make_value,
)


@pytest.fixture
def catalog_projects():
    return [
        make_project("arbitrum", name="Arbitrum One", is_scaling=True,
                     display={"category": "Optimistic Rollup"}),
        make_project("zksync2", slug="zksync-era", name="ZKsync Era", is_scaling=True,
                     is_zk_catalog=True, zk_catalog_info={"verifiers": [
                         {"contract_address": "0xa", "chain_id": 1},
                         {"contract_address": "0xb", "chain_id": 1},
                     ]}),
        make_project("celestia", name="Celestia", is_da_layer=True),
        make_project("upcoming", is_scaling=True, is_upcoming=True),
    ]


@pytest.fixture
def fakes(catalog_projects):
    return {
        "source": FakeProjectSource(catalog_projects),
        "values": FakeValueRepository([
            make_value("arbitrum", canonical=200, external=50, native=50),
            make_value("celestia", canonical=700),
        ]),
        "statuses": FakeVerifierStatusRepository(records={"0xa": T0}, failing={"0xb"}),
        "clock": FakeClock(),
    }


def _build_app(fakes, mock_mode: bool):
    app = create_app(Settings(), use_lifespan=False)
    app.state.catalog = CatalogContext.create(
        source=fakes["source"],
        values=fakes["values"],
        statuses=fakes["statuses"],
        cache=TtlCache(600, clock=fakes["clock"]),
        mock_mode=mock_mode,
    )
    return app


@pytest.fixture
async def db_manager():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    yield DatabaseSessionManager.from_engine(engine)
    await engine.dispose()


def _client(app):
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest.fixture
async def client(fakes, db_manager):
    app = _build_app(fakes, mock_mode=False)
    app.state.db_manager = db_manager
    async with _client(app) as c:
        yield c


@pytest.fixture
async def mock_client(fakes):
    app = _build_app(fakes, mock_mode=True)
    async with _client(app) as c:
        yield c
