"""ORM Models — SQLAlchemy declarative models backing the repository protocols.

Invariants:
    - All models inherit from Base (db/base.py)
    - Models never leave infrastructure/: repositories convert rows to core dataclasses

Design Decisions:
    - One file per entity for locality (ADR: ExMA max 3-4 files to understand a feature)
    - All models imported here so Base.metadata is complete before create_all/autogenerate
"""

from project_catalog.models.value import Value  # noqa: F401
from project_catalog.models.verifier_status import VerifierStatus  # noqa: F401
