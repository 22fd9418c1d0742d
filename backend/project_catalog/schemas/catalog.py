"""Catalog Schemas — Pydantic response models for TVL and verifier endpoints.

Invariants:
    - Value components are integers in smallest units (cents)
    - total is in display units (cents / 100) with two decimal places
    - VerifierStatusSchema.timestamp is None when the verifier was never seen

Design Decisions:
    - Project rows are not modelled here: their shape depends on the query, so the
      projects route validates them with core.project_query.projection_model
    - from_attributes=True: built directly from core dataclasses
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict


class ProjectTvlEntry(BaseModel):
    """Aggregated TVL of a single project."""
    model_config = ConfigDict(from_attributes=True)

    project_id: str
    canonical: int
    external: int
    native: int
    tvl: int


class DaProjectsTvlResponse(BaseModel):
    """Per-project aggregate plus the summed total for the requested projects."""
    projects: list[ProjectTvlEntry] = []
    total: Decimal


class VerifierStatusSchema(BaseModel):
    """Usage status of one verifier contract."""
    model_config = ConfigDict(from_attributes=True)

    address: str
    timestamp: datetime | None = None


class ProjectListResponse(BaseModel):
    """Projected project rows in catalog order."""
    projects: list[dict]
    count: int
