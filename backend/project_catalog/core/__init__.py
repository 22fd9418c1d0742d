"""Core Layer — catalog queries, TVL aggregation and verifier extraction.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - No IO, no async, no DB: every function maps data in to data out

Design Decisions:
    - Functional core separated from imperative shell (ADR: ExMA impureim sandwich);
      caching and single-flight live in services/, never here
"""
