"""Services Layer — async orchestration around the pure core.

Invariants:
    - Services own all caching and single-flight state; core stays pure
    - Collaborators arrive through repository protocols (no direct DB imports)

Design Decisions:
    - One service per feature (catalog, TVL, verifiers) sharing one TtlCache
      via CatalogContext (ADR: ExMA no god objects)
"""
