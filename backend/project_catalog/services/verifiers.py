"""Verifier Service — cached usage status for zk-catalog verifier contracts.

Invariants:
    - One status lookup per verifier, all issued concurrently
    - A failed lookup affects only its own verifier (timestamp=None), never siblings
    - Result order matches verifier order
    - Whole result cached under zkCatalogVerifiers for one TTL window

Design Decisions:
    - get_verifiers_status_logic takes its collaborators as arguments so it can be
      exercised without a database (mirrors the repository protocol boundary)
    - Per-item failures logged at WARNING with the address, not raised: the listing
      is still useful when one chain's RPC-backed record is unavailable
"""

import asyncio
import logging
from typing import Awaitable, Callable, Sequence

from project_catalog.core.domain_types import (
    ChainId, OnchainVerifier, VerifierStatus, VerifierStatusRecord,
)
from project_catalog.core.repository_protocols import VerifierStatusRepository
from project_catalog.core.verifier_status import extract_verifiers, to_verifier_status
from project_catalog.services.project_service import ProjectService
from project_catalog.services.ttl_cache import TtlCache

logger = logging.getLogger(__name__)

CACHE_KEY = "zkCatalogVerifiers"

FindVerifierStatus = Callable[[str, ChainId], Awaitable[VerifierStatusRecord | None]]


async def get_verifiers_status_logic(
    find_verifier_status: FindVerifierStatus,
    verifiers: Sequence[OnchainVerifier],
) -> list[VerifierStatus]:
    """Look up every verifier concurrently, isolating per-item failures."""
    results = await asyncio.gather(
        *(find_verifier_status(v.contract_address, v.chain_id) for v in verifiers),
        return_exceptions=True,
    )
    statuses = []
    for verifier, result in zip(verifiers, results):
        if isinstance(result, BaseException):
            logger.warning(
                f"Verifier status lookup failed for {verifier.contract_address}: {result}",
                extra={"cache_key": CACHE_KEY, "project_id": verifier.project_id},
            )
            result = None
        statuses.append(to_verifier_status(verifier, result))
    return statuses


class VerifierService:
    """Verifier listing derived from the catalog, backed by the shared TtlCache."""

    def __init__(
        self,
        statuses: VerifierStatusRepository,
        cache: TtlCache,
        projects: ProjectService,
    ):
        self._statuses = statuses
        self._cache = cache
        self._projects = projects

    async def get_verifiers(self) -> list[VerifierStatus]:
        """Status of every verifier declared in the catalog (cached)."""
        return await self._cache.get_or_compute(CACHE_KEY, (), self._compute)

    async def _compute(self) -> list[VerifierStatus]:
        rows = await self._projects.get_projects(
            where=["is_zk_catalog"], select=["zk_catalog_info"],
        )
        verifiers = extract_verifiers(rows)
        return await get_verifiers_status_logic(
            self._statuses.find_verifier_status, verifiers,
        )
