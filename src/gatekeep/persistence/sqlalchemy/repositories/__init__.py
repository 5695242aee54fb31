"""SQLAlchemy repository implementations."""

from gatekeep.persistence.sqlalchemy.repositories.credential_repository import (
    CredentialRepositorySQLAlchemy,
)

__all__ = ["CredentialRepositorySQLAlchemy"]
