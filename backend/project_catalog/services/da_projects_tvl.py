"""DA Projects TVL — cached per-project TVL aggregate for data-availability views.

Invariants:
    - Live mode: one value fetch per (daProjectsTvl, project ids) bucket per TTL window
    - Mock mode: never touches the cache or the value repository; every catalog
      project gets the same placeholder tvl
    - Fetch failures propagate unchanged; no stale value is substituted

Design Decisions:
    - Bucket args are the sorted, de-duplicated project ids: the aggregate does not
      depend on request order, so permutations share one cache entry
    - pick_tvl_for_projects re-exported here so routes slice one cached aggregate
      without importing core directly
"""

import logging
from typing import Sequence

from project_catalog.core.domain_types import ProjectId, ProjectTvl
from project_catalog.core.repository_protocols import ValueRepository
from project_catalog.core.tvl_aggregation import (
    aggregate_latest_values, mock_projects_tvl, pick_tvl_for_projects,
)
from project_catalog.services.project_service import ProjectService
from project_catalog.services.ttl_cache import TtlCache

logger = logging.getLogger(__name__)

CACHE_KEY = "daProjectsTvl"

__all__ = ["DaProjectsTvlService", "pick_tvl_for_projects"]


class DaProjectsTvlService:
    """TVL aggregate provider backed by the shared TtlCache."""

    def __init__(
        self,
        values: ValueRepository,
        cache: TtlCache,
        projects: ProjectService,
        mock_mode: bool = False,
    ):
        self._values = values
        self._cache = cache
        self._projects = projects
        self._mock_mode = mock_mode

    async def get_da_projects_tvl(
        self, project_ids: Sequence[ProjectId],
    ) -> list[ProjectTvl]:
        """Aggregate TVL for the given projects (cached)."""
        if self._mock_mode:
            catalog = await self._projects.load()
            return mock_projects_tvl(p.id for p in catalog)

        ids = tuple(sorted(set(project_ids)))
        return await self._cache.get_or_compute(
            CACHE_KEY, ids, lambda: self._compute(ids),
        )

    async def _compute(self, project_ids: tuple[ProjectId, ...]) -> list[ProjectTvl]:
        values = await self._values.get_latest_values(list(project_ids))
        aggregate = aggregate_latest_values(values)
        logger.info(
            f"Aggregated TVL for {len(aggregate)} projects from {len(values)} values",
            extra={"cache_key": CACHE_KEY, "project_count": len(aggregate)},
        )
        return aggregate
