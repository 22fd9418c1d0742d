"""Verifier Extraction — derive on-chain verifiers from zk-catalog projects.

Invariants:
    - Pure: reads projected catalog rows, never touches IO
    - Rows without a zk_catalog_info.verifiers list contribute nothing
    - Verifier order follows catalog order, then declaration order within a project
"""

from typing import Any, Iterable

from project_catalog.core.domain_types import (
    ChainId, OnchainVerifier, ProjectId, VerifierStatus, VerifierStatusRecord,
)


def extract_verifiers(rows: Iterable[dict[str, Any]]) -> list[OnchainVerifier]:
    """Flatten zk_catalog_info.verifiers across projected rows."""
    verifiers = []
    for row in rows:
        info = row.get("zk_catalog_info") or {}
        for entry in info.get("verifiers", []):
            verifiers.append(OnchainVerifier(
                contract_address=str(entry["contract_address"]),
                chain_id=ChainId(int(entry["chain_id"])),
                project_id=ProjectId(row["id"]),
            ))
    return verifiers


def to_verifier_status(
    verifier: OnchainVerifier, record: VerifierStatusRecord | None,
) -> VerifierStatus:
    """Public status; timestamp is None when the verifier was never seen."""
    return VerifierStatus(
        address=verifier.contract_address,
        timestamp=record.last_used if record else None,
    )
