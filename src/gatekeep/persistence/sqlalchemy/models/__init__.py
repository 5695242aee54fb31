"""SQLAlchemy models for credential storage."""

from gatekeep.persistence.sqlalchemy.models.credential_model import CredentialModel

__all__ = ["CredentialModel"]
