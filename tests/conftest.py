"""Root conftest — shared test configuration."""

import os

# Ensure tests never reach a real database or the repo's seed file
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("PRODUCTS_BACKEND", "database")
os.environ.setdefault("FIXTURE_PATH", "tests/does-not-exist.json")
os.environ.setdefault("LOG_FORMAT", "text")
