"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - ProjectId and ChainId wrap primitives — never use a bare str/int for them in domain logic
    - Project.id and Project.slug are always present; every other attribute may be None
    - Project is frozen: a loaded catalog can never be mutated by a caller
    - Value components (canonical, external, native) are ints in smallest units (cents)

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - Project as a frozen pydantic model: the catalog file is validated at load time
      and records are hashable/immutable afterwards (ADR: shared read-only snapshot)
    - Python int for value components: arbitrary precision, no float drift across sums
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, NewType

from pydantic import BaseModel, ConfigDict


# ─── Identity Types ──────────────────────────────────────────────

ProjectId = NewType("ProjectId", str)
ChainId = NewType("ChainId", int)


# ─── Constants ───────────────────────────────────────────────────

IDENTITY_KEYS: tuple[str, ...] = ("id", "slug")
CENTS_PER_UNIT = 100
MOCK_PROJECT_TVL = 100_000


# ─── Catalog Records ─────────────────────────────────────────────

class Project(BaseModel):
    """A catalog entry. Identity is (id, slug); everything else is optional."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: ProjectId
    slug: str
    name: str | None = None
    short_name: str | None = None
    added_at: datetime | None = None
    is_bridge: bool | None = None
    is_scaling: bool | None = None
    is_zk_catalog: bool | None = None
    is_da_layer: bool | None = None
    is_archived: bool | None = None
    is_upcoming: bool | None = None
    has_activity: bool | None = None
    display: dict[str, Any] | None = None
    statuses: dict[str, Any] | None = None
    tvl_config: dict[str, Any] | None = None
    chain_config: dict[str, Any] | None = None
    milestones: list[dict[str, Any]] | None = None
    da_bridge: dict[str, Any] | None = None
    scaling_info: dict[str, Any] | None = None
    zk_catalog_info: dict[str, Any] | None = None


# Attribute names a query may filter on or select (identity keys excluded)
PROJECT_ATTRIBUTES: frozenset[str] = frozenset(
    name for name in Project.model_fields if name not in IDENTITY_KEYS
)


# ─── Value Records ───────────────────────────────────────────────

@dataclass(frozen=True)
class ValueRecord:
    """Latest value sample for one (project, data source) pair."""
    project_id: ProjectId
    data_source: str
    timestamp: datetime
    canonical: int
    external: int
    native: int


@dataclass(frozen=True)
class ProjectTvl:
    """Per-project aggregate. tvl is always canonical + external + native."""
    project_id: ProjectId
    canonical: int
    external: int
    native: int
    tvl: int


# ─── Verifiers ───────────────────────────────────────────────────

@dataclass(frozen=True)
class OnchainVerifier:
    """A verifier contract declared by a zk-catalog project."""
    contract_address: str
    chain_id: ChainId
    project_id: ProjectId | None = None


@dataclass(frozen=True)
class VerifierStatusRecord:
    """Persisted usage status of a verifier contract."""
    address: str
    chain_id: ChainId
    last_used: datetime


@dataclass(frozen=True)
class VerifierStatus:
    """Public status of a verifier. timestamp is None when unknown."""
    address: str
    timestamp: datetime | None
