"""ZK Catalog Routes — verifier usage status.

Invariants:
    - Always 200 with one entry per declared verifier, even when some lookups failed
"""

from fastapi import APIRouter, Depends

from project_catalog.api.deps import get_context
from project_catalog.schemas.catalog import VerifierStatusSchema
from project_catalog.services.catalog_context import CatalogContext

router = APIRouter(prefix="/api/v1/zk-catalog", tags=["zk-catalog"])


@router.get("/verifiers", response_model=list[VerifierStatusSchema])
async def get_verifiers(ctx: CatalogContext = Depends(get_context)):
    """Status of every verifier declared in the catalog."""
    statuses = await ctx.verifiers.get_verifiers()
    return [VerifierStatusSchema.model_validate(s) for s in statuses]
