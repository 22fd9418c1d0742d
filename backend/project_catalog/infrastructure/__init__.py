"""Infrastructure Layer — database, catalog source and logging.

Invariants:
    - Implements the protocols in core/repository_protocols.py
    - All external failures mapped to CatalogError subclasses before leaving this layer

Design Decisions:
    - Shell implementations injected via CatalogContext (ADR: ExMA single responsibility)
"""
