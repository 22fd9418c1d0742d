"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection
    - Implementations raise on failure; callers never receive partial results

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy (ADR: ExMA anti-pattern)
    - Async in Protocol: boundary methods are async because implementations do IO,
      but core pure functions that USE their results are never async themselves —
      the services layer orchestrates the async calls around the pure logic
"""

from typing import Protocol, Sequence

from project_catalog.core.domain_types import (
    ChainId, Project, ProjectId, ValueRecord, VerifierStatusRecord,
)


class ProjectSource(Protocol):
    """Contract for the full project catalog — implemented by shell."""
    async def fetch_projects(self) -> Sequence[Project]: ...


class ValueRepository(Protocol):
    """Contract for latest value samples — implemented by shell."""
    async def get_latest_values(
        self, project_ids: Sequence[ProjectId],
    ) -> list[ValueRecord]: ...


class VerifierStatusRepository(Protocol):
    """Contract for verifier usage status — implemented by shell."""
    async def find_verifier_status(
        self, address: str, chain_id: ChainId,
    ) -> VerifierStatusRecord | None: ...
