"""Database Infrastructure — SQLAlchemy Base shared by models and migrations.

Invariants:
    - All sessions are async (AsyncSession), created by DatabaseSessionManager

Design Decisions:
    - asyncpg driver for PostgreSQL, aiosqlite for tests (ADR: native async, no thread pool overhead)
"""
