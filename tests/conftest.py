"""Root pytest configuration.

Test Structure:
    tests/
    ├── unit/                  # Fast tests, one module at a time
    │   ├── persistence/       # Stores (SQLAlchemy tests use SQLite)
    │   ├── services/
    │   ├── application/
    │   ├── config/
    │   └── cli/
    ├── e2e/                   # Register/login through the real stack
    └── shared/                # Shared fixtures and utilities

Environment Variables:
    TEST_DATABASE_URL    Run database tests against this async URL
                         instead of a temporary SQLite file
"""

from pathlib import Path

import pytest
from dotenv import load_dotenv

from gatekeep_config import clear_settings_cache
from tests.shared.fixtures.database import (  # noqa: F401
    async_engine,
    credential_repo,
    session_maker,
)

PROJECT_ROOT = Path(__file__).resolve().parents[1]

# Load .env.dev for tests (same as local development)
CONFIG_DIR = PROJECT_ROOT / "config"
if (CONFIG_DIR / ".env.dev").exists():
    load_dotenv(CONFIG_DIR / ".env.dev")


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "slow: Tests that take more than 1 second",
    )


@pytest.fixture(autouse=True)
def clear_cached_settings():
    """Ensure every test reads settings from its own environment."""
    clear_settings_cache()
    yield
    clear_settings_cache()
