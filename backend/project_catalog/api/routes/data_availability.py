"""Data Availability Routes — cached TVL aggregate for DA projects.

Invariants:
    - project_ids is required and non-empty
    - Listed entries are restricted to the requested projects
    - total is pick_tvl_for_projects over the same cached aggregate (display units)
"""

import logging

from fastapi import APIRouter, Depends, Query

from project_catalog.api.deps import get_context
from project_catalog.schemas.catalog import DaProjectsTvlResponse, ProjectTvlEntry
from project_catalog.services.catalog_context import CatalogContext
from project_catalog.services.da_projects_tvl import pick_tvl_for_projects

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/data-availability", tags=["data-availability"])


@router.get("/tvl", response_model=DaProjectsTvlResponse)
async def get_da_projects_tvl(
    project_ids: list[str] = Query(..., min_length=1),
    ctx: CatalogContext = Depends(get_context),
):
    """TVL per requested project and their total."""
    aggregate = await ctx.tvl.get_da_projects_tvl(project_ids)
    requested = set(project_ids)
    return DaProjectsTvlResponse(
        projects=[
            ProjectTvlEntry.model_validate(entry)
            for entry in aggregate if entry.project_id in requested
        ],
        total=pick_tvl_for_projects(aggregate, project_ids),
    )
