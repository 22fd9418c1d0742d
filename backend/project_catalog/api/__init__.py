"""API Layer — FastAPI routes, dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.create_app (no auto-discovery)
    - Routes reach services only through api/deps.get_context

Design Decisions:
    - Thin routes delegate to services (ADR: ExMA impureim sandwich)
"""
