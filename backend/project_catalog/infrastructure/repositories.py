"""SQL Repositories — SQLAlchemy implementations of the core repository protocols.

Invariants:
    - Return core dataclasses (ValueRecord, VerifierStatusRecord), never ORM rows
    - Each call opens its own session through DatabaseSessionManager
    - SQLAlchemy failures surface as DatabaseError (mapped by the session manager)
    - Returned timestamps are timezone-aware UTC

Design Decisions:
    - Latest value = newest timestamp per (project_id, data_source), resolved in one
      grouped subquery join instead of N per-project queries
    - Empty project id list short-circuits to [] (IN () is invalid on some dialects)
"""

import logging
from datetime import datetime, timezone
from typing import Sequence

from sqlalchemy import and_, func, select

from project_catalog.core.domain_types import (
    ChainId, ProjectId, ValueRecord, VerifierStatusRecord,
)
from project_catalog.infrastructure.database import DatabaseSessionManager
from project_catalog.models.value import Value
from project_catalog.models.verifier_status import VerifierStatus

logger = logging.getLogger(__name__)


def _as_utc(ts: datetime) -> datetime:
    # SQLite drops tzinfo on read
    return ts if ts.tzinfo else ts.replace(tzinfo=timezone.utc)


class SqlValueRepository:
    """ValueRepository backed by the tvl_values table."""

    def __init__(self, db: DatabaseSessionManager):
        self.db = db

    async def get_latest_values(
        self, project_ids: Sequence[ProjectId],
    ) -> list[ValueRecord]:
        if not project_ids:
            return []

        latest = (
            select(
                Value.project_id,
                Value.data_source,
                func.max(Value.timestamp).label("latest"),
            )
            .where(Value.project_id.in_(list(project_ids)))
            .group_by(Value.project_id, Value.data_source)
            .subquery()
        )
        query = (
            select(Value)
            .join(latest, and_(
                Value.project_id == latest.c.project_id,
                Value.data_source == latest.c.data_source,
                Value.timestamp == latest.c.latest,
            ))
            .order_by(Value.project_id, Value.data_source)
        )

        async with self.db.session() as session:
            result = await session.execute(query)
            rows = result.scalars().all()

        return [
            ValueRecord(
                project_id=ProjectId(row.project_id),
                data_source=row.data_source,
                timestamp=_as_utc(row.timestamp),
                canonical=int(row.canonical),
                external=int(row.external),
                native=int(row.native),
            )
            for row in rows
        ]


class SqlVerifierStatusRepository:
    """VerifierStatusRepository backed by the verifier_status table."""

    def __init__(self, db: DatabaseSessionManager):
        self.db = db

    async def find_verifier_status(
        self, address: str, chain_id: ChainId,
    ) -> VerifierStatusRecord | None:
        async with self.db.session() as session:
            result = await session.execute(
                select(VerifierStatus)
                .where(VerifierStatus.address == address)
                .where(VerifierStatus.chain_id == chain_id)
            )
            row = result.scalar_one_or_none()

        if row is None:
            return None
        return VerifierStatusRecord(
            address=row.address,
            chain_id=ChainId(row.chain_id),
            last_used=_as_utc(row.last_used),
        )
