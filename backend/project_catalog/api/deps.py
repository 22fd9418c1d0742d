"""API Dependencies — FastAPI providers for the shared CatalogContext.

Invariants:
    - Routes get services only through get_context (no module-level singletons)
    - Context must exist on app.state before the first request (set in lifespan)
"""

from fastapi import Request

from project_catalog.services.catalog_context import CatalogContext


def get_context(request: Request) -> CatalogContext:
    """FastAPI dependency for the process-wide CatalogContext."""
    context = getattr(request.app.state, "catalog", None)
    if context is None:
        raise RuntimeError("Catalog context not initialized")
    return context
