"""Shared pytest fixtures for all test domains."""

from tests.shared.fixtures.database import (
    async_engine,
    credential_repo,
    session_maker,
)

__all__ = [
    "async_engine",
    "credential_repo",
    "session_maker",
]
