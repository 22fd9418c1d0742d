"""SQL repository tests — latest-value selection and verifier status lookup.

Tests cover:
    - Newest row per (project_id, data_source) returned; older rows ignored
    - Only requested projects returned
    - Empty id list short-circuits to []
    - Numeric columns read back as int
    - Verifier status found by (address, chain_id); None otherwise
    - Timestamps come back timezone-aware
    - Health check succeeds against a live engine
"""

from datetime import timedelta

from project_catalog.core.domain_types import ChainId, ProjectId
from project_catalog.infrastructure.repositories import (
    SqlValueRepository, SqlVerifierStatusRepository,
)
from project_catalog.models.value import Value
from project_catalog.models.verifier_status import VerifierStatus

from tests.fakes import T0


async def _seed(db_manager, *rows):
    async with db_manager.session() as session:
        session.add_all(rows)
        await session.commit()


async def test_latest_value_per_source(db_manager):
    await _seed(
        db_manager,
        Value(project_id="p1", data_source="ethereum", timestamp=T0,
              canonical=1, external=1, native=1),
        Value(project_id="p1", data_source="ethereum", timestamp=T0 + timedelta(hours=1),
              canonical=100, external=20, native=3),
        Value(project_id="p1", data_source="arbitrum", timestamp=T0,
              canonical=7, external=0, native=0),
        Value(project_id="p2", data_source="ethereum", timestamp=T0,
              canonical=9, external=0, native=0),
    )
    repo = SqlValueRepository(db_manager)

    values = await repo.get_latest_values([ProjectId("p1")])

    by_source = {v.data_source: v for v in values}
    assert set(by_source) == {"arbitrum", "ethereum"}
    assert by_source["ethereum"].canonical == 100
    assert by_source["ethereum"].external == 20
    assert by_source["ethereum"].native == 3
    assert isinstance(by_source["ethereum"].canonical, int)
    assert all(v.project_id == "p1" for v in values)
    assert by_source["ethereum"].timestamp.tzinfo is not None


async def test_empty_ids_returns_empty(db_manager):
    repo = SqlValueRepository(db_manager)
    assert await repo.get_latest_values([]) == []


async def test_find_verifier_status(db_manager):
    await _seed(
        db_manager,
        VerifierStatus(address="0xabc", chain_id=1, last_used=T0),
    )
    repo = SqlVerifierStatusRepository(db_manager)

    record = await repo.find_verifier_status("0xabc", ChainId(1))
    assert record is not None
    assert record.last_used.replace(tzinfo=None) == T0.replace(tzinfo=None)
    assert record.last_used.tzinfo is not None

    assert await repo.find_verifier_status("0xabc", ChainId(10)) is None
    assert await repo.find_verifier_status("0xdef", ChainId(1)) is None


async def test_health_check(db_manager):
    assert await db_manager.health_check() is True
