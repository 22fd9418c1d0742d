"""Catalog Context — the long-lived object that owns loader, cache and services.

Invariants:
    - One ProjectService and one TtlCache per context; every service shares them
    - Constructed once per process in the FastAPI lifespan (stored on app.state),
      or once per test — never as an import-time global
    - build_context wires shell implementations; tests construct CatalogContext
      directly with fakes

Design Decisions:
    - Explicit context object over module-level singletons (ADR: testable lifecycle)
"""

from dataclasses import dataclass

from project_catalog.config import Settings
from project_catalog.core.repository_protocols import (
    ProjectSource, ValueRepository, VerifierStatusRepository,
)
from project_catalog.infrastructure.database import DatabaseSessionManager
from project_catalog.infrastructure.project_source import JsonFileProjectSource
from project_catalog.infrastructure.repositories import (
    SqlValueRepository, SqlVerifierStatusRepository,
)
from project_catalog.services.da_projects_tvl import DaProjectsTvlService
from project_catalog.services.project_service import ProjectService
from project_catalog.services.ttl_cache import TtlCache
from project_catalog.services.verifiers import VerifierService


@dataclass
class CatalogContext:
    """Shared services for one process (or one test)."""
    projects: ProjectService
    tvl: DaProjectsTvlService
    verifiers: VerifierService
    cache: TtlCache

    @classmethod
    def create(
        cls,
        source: ProjectSource,
        values: ValueRepository,
        statuses: VerifierStatusRepository,
        cache: TtlCache,
        mock_mode: bool = False,
    ) -> "CatalogContext":
        projects = ProjectService(source)
        return cls(
            projects=projects,
            tvl=DaProjectsTvlService(values, cache, projects, mock_mode=mock_mode),
            verifiers=VerifierService(statuses, cache, projects),
            cache=cache,
        )


def build_context(
    settings: Settings, db_manager: DatabaseSessionManager,
) -> CatalogContext:
    """Wire the production context from settings and the database manager."""
    return CatalogContext.create(
        source=JsonFileProjectSource(settings.projects_catalog_path),
        values=SqlValueRepository(db_manager),
        statuses=SqlVerifierStatusRepository(db_manager),
        cache=TtlCache(settings.cache_ttl_seconds),
        mock_mode=settings.mock_mode,
    )
