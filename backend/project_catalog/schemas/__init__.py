"""Pydantic Schemas — response contracts for API endpoints.

Invariants:
    - Schemas validate at system boundary (API responses)
    - Core dataclasses are converted here, never serialized directly

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence (ADR: DDD boundary)
"""
