"""
In-memory implementation of CredentialRepository.

Credentials live in Python dictionaries and are lost when the process
exits. The username and email indexes are updated under a single lock,
so check-and-insert is atomic for all coroutines on one event loop.
"""

import asyncio
import logging
from uuid import uuid4

from gatekeep.exceptions import DuplicateCredentialError
from gatekeep.repositories import CredentialData, CredentialRepository
from gatekeep.time import utc_now

logger = logging.getLogger(__name__)


class InMemoryCredentialRepository(CredentialRepository):
    """In-memory implementation of CredentialRepository using Python dicts"""

    def __init__(self):
        self._by_username: dict[str, CredentialData] = {}
        self._by_email: dict[str, CredentialData] = {}  # email -> same object
        self._lock = asyncio.Lock()

    async def exists(self, username: str, email: str) -> bool:
        async with self._lock:
            return username in self._by_username or email in self._by_email

    async def insert(
        self,
        username: str,
        email: str,
        password_hash: str,
    ) -> CredentialData:
        async with self._lock:
            if username in self._by_username or email in self._by_email:
                raise DuplicateCredentialError(username, email)

            credential = CredentialData(
                id=uuid4(),
                username=username,
                email=email,
                password_hash=password_hash,
                created_at=utc_now(),
            )
            self._by_username[username] = credential
            self._by_email[email] = credential

        logger.debug("Stored credential in memory: %s", username)
        return credential

    async def find_by_identifier(self, identifier: str) -> CredentialData | None:
        async with self._lock:
            return self._by_username.get(identifier) or self._by_email.get(identifier)

    async def count(self) -> int:
        async with self._lock:
            return len(self._by_username)
