"""Repository interfaces for gatekeep.

This package defines the abstract credential store that can be implemented
by different persistence technologies. Implementations live in
gatekeep.persistence.
"""

from gatekeep.repositories.credential_repository import (
    CredentialData,
    CredentialRepository,
)

__all__ = ["CredentialData", "CredentialRepository"]
