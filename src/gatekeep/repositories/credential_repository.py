"""Abstract repository interface for credentials.

This interface defines the contract for credential persistence.
Implementations can use SQLAlchemy, an in-process dictionary, or any
other storage, as long as uniqueness of username and email is enforced by
the storage itself.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class CredentialData:
    """Immutable credential data returned by repository.

    ``password_hash`` is left out of ``repr()`` so a credential can be
    logged without exposing the stored hash.
    """

    id: UUID
    username: str
    email: str
    password_hash: str = field(repr=False)
    created_at: datetime


class CredentialRepository(ABC):
    """
    Abstract repository interface for username/email/password credentials.

    Implementations must guarantee that ``insert`` fails with
    ``DuplicateCredentialError`` whenever the username or the email is
    already taken, even if a previous ``exists`` call returned False.
    ``exists`` is an early check only; the storage constraint decides.

    Matching is exact and case-sensitive.
    """

    @abstractmethod
    async def exists(self, username: str, email: str) -> bool:
        """
        Check whether the username or the email is already registered.

        Parameters
        ----------
        username
            Candidate username
        email
            Candidate email

        Returns
        -------
        True if a credential with that username OR that email exists
        """

    @abstractmethod
    async def insert(
        self,
        username: str,
        email: str,
        password_hash: str,
    ) -> CredentialData:
        """
        Persist a new credential.

        Parameters
        ----------
        username
            Validated username
        email
            Validated email
        password_hash
            The bcrypt password hash

        Returns
        -------
        The stored credential data

        Raises
        ------
        DuplicateCredentialError
            If the username or email is already registered
        StoreUnavailableError
            If the storage cannot be reached
        """

    @abstractmethod
    async def find_by_identifier(self, identifier: str) -> CredentialData | None:
        """
        Find a credential by username or email.

        Parameters
        ----------
        identifier
            Either a username or an email address

        Returns
        -------
        Credential data if found, None otherwise
        """

    @abstractmethod
    async def count(self) -> int:
        """Count stored credentials."""
