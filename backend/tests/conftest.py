"""Root conftest — shared test configuration."""

import os

# Ensure tests never reach a real database or live-data switch
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///:memory:",
)
os.environ.setdefault("MOCK", "false")
os.environ.setdefault("LOG_FORMAT", "text")
