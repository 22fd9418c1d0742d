"""Project Service — load-once catalog with structural queries on top.

Invariants:
    - At most one catalog fetch per generation, however many callers arrive concurrently
    - Every caller of a generation receives the identical tuple of projects
    - A failed fetch propagates to all waiters and clears the slot (next call fetches again),
      even when every waiter was cancelled before the failure
    - Loaded catalogs are validated for unique ids and slugs before they are published
    - Queries never mutate the catalog

Design Decisions:
    - Memoize the pending asyncio.Task (ADR: promise memoization) — late arrivals
      attach to the in-flight load instead of issuing a second fetch
    - Catalog stored as a tuple of frozen Projects: nothing downstream can mutate it
    - One ProjectService per CatalogContext, injected into routes (no module global)
"""

import asyncio
import logging
import time
from collections import Counter
from typing import Iterable, Sequence

from project_catalog.core.domain_types import Project, ProjectId
from project_catalog.core.errors import CatalogIntegrityError
from project_catalog.core.project_query import (
    ProjectQuery, ProjectRow, find_many, find_one,
)
from project_catalog.core.repository_protocols import ProjectSource

logger = logging.getLogger(__name__)

Catalog = tuple[Project, ...]


def _check_unique(projects: Sequence[Project]) -> None:
    for field_name in ("id", "slug"):
        counts = Counter(getattr(p, field_name) for p in projects)
        duplicates = sorted(v for v, n in counts.items() if n > 1)
        if duplicates:
            raise CatalogIntegrityError(field_name, duplicates)


class ProjectService:
    """Shared catalog loader and query entry point."""

    def __init__(self, source: ProjectSource):
        self._source = source
        self._projects: asyncio.Task | None = None

    async def load(self) -> Catalog:
        """Return the catalog, fetching it on first use."""
        task = self._projects
        if task is None:
            task = asyncio.ensure_future(self._fetch())
            self._projects = task
        return await asyncio.shield(task)

    async def _fetch(self) -> Catalog:
        started = time.perf_counter()
        try:
            projects = tuple(await self._source.fetch_projects())
            _check_unique(projects)
        except Exception:
            # Cleared by the task itself: waiters may all be cancelled already
            if self._projects is asyncio.current_task():
                self._projects = None
            raise
        logger.info(
            f"Project catalog loaded ({len(projects)} projects)",
            extra={
                "project_count": len(projects),
                "duration_ms": round((time.perf_counter() - started) * 1000, 1),
            },
        )
        return projects

    def invalidate(self) -> None:
        """Forget the current generation; the next load() fetches again."""
        self._projects = None

    async def get_project(
        self,
        id: ProjectId | None = None,
        slug: str | None = None,
        select: Iterable[str] | None = None,
        optional: Iterable[str] | None = None,
        where: Iterable[str] | None = None,
        where_not: Iterable[str] | None = None,
    ) -> ProjectRow | None:
        """First project matching the query, projected; None if none match."""
        query = ProjectQuery.build(
            ids=[id] if id else None,
            slugs=[slug] if slug else None,
            select=select, optional=optional,
            where=where, where_not=where_not,
        )
        return find_one(await self.load(), query)

    async def get_projects(
        self,
        ids: Iterable[ProjectId] | None = None,
        slugs: Iterable[str] | None = None,
        select: Iterable[str] | None = None,
        optional: Iterable[str] | None = None,
        where: Iterable[str] | None = None,
        where_not: Iterable[str] | None = None,
    ) -> list[ProjectRow]:
        """All matching projects in catalog order, projected."""
        query = ProjectQuery.build(
            ids=ids, slugs=slugs, select=select, optional=optional,
            where=where, where_not=where_not,
        )
        return find_many(await self.load(), query)
