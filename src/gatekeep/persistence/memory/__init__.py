"""In-memory credential store."""

from gatekeep.persistence.memory.credential_repository import (
    InMemoryCredentialRepository,
)

__all__ = ["InMemoryCredentialRepository"]
