"""Projects Routes — structural catalog queries over HTTP.

Invariants:
    - Query params map one-to-one onto ProjectService.get_projects arguments
    - Omitted params are "unset"; the route never turns them into empty lists
    - Every returned row is validated against projection_model(select, optional)
    - Unknown attribute names → 400 (InvalidQueryError); unknown slug → 404

Design Decisions:
    - Thin routes: all filtering/projection happens in ProjectService + core
"""

import logging

from fastapi import APIRouter, Depends, Query

from project_catalog.api.deps import get_context
from project_catalog.core.errors import ResourceNotFoundError
from project_catalog.core.project_query import projection_model
from project_catalog.schemas.catalog import ProjectListResponse
from project_catalog.services.catalog_context import CatalogContext

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/projects", tags=["projects"])


@router.get("", response_model=ProjectListResponse)
async def list_projects(
    ids: list[str] | None = Query(None),
    slugs: list[str] | None = Query(None),
    select: list[str] | None = Query(None),
    optional: list[str] | None = Query(None),
    where: list[str] | None = Query(None),
    where_not: list[str] | None = Query(None),
    ctx: CatalogContext = Depends(get_context),
):
    """List projects matching all supplied constraints."""
    rows = await ctx.projects.get_projects(
        ids=ids, slugs=slugs, select=select, optional=optional,
        where=where, where_not=where_not,
    )
    model = projection_model(select, optional)
    projects = [model.model_validate(row).model_dump(mode="json") for row in rows]
    return ProjectListResponse(projects=projects, count=len(projects))


@router.get("/{slug}")
async def get_project(
    slug: str,
    select: list[str] | None = Query(None),
    optional: list[str] | None = Query(None),
    ctx: CatalogContext = Depends(get_context),
):
    """Get one project by slug, projected."""
    row = await ctx.projects.get_project(slug=slug, select=select, optional=optional)
    if row is None:
        raise ResourceNotFoundError("Project", slug)
    return projection_model(select, optional).model_validate(row).model_dump(mode="json")
