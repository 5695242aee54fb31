"""Authentication service for user registration and login."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from gatekeep.exceptions import DuplicateCredentialError
from gatekeep.schemas import (
    Authenticated,
    LoginResult,
    Registered,
    RegisterResult,
    Rejected,
    RejectionReason,
)
from gatekeep.validation import invalid_registration_fields

if TYPE_CHECKING:
    from gatekeep.repositories import CredentialRepository
    from gatekeep.services import PasswordHashingService

logger = logging.getLogger(__name__)


class AuthenticationService:
    """
    Application service for user authentication.

    Orchestrates validation, the credential store and password hashing to
    provide:
    - User registration
    - Login with username or email and password

    Both operations are stateless. Business outcomes are returned as
    ``Registered``/``Authenticated``/``Rejected`` values; only
    StoreUnavailableError propagates as an exception.

    An unknown identifier and a wrong password yield the same
    ``Rejected(INVALID_CREDENTIALS)``. Logs tell them apart; callers cannot.
    """

    def __init__(
        self,
        credential_repository: CredentialRepository,
        password_service: PasswordHashingService,
    ):
        self._credential_repo = credential_repository
        self._password_service = password_service
        self._dummy_hash: str | None = None

    def _get_dummy_hash(self) -> str:
        # Verified against when the identifier is unknown, so both
        # failure paths spend exactly one bcrypt verification.
        if self._dummy_hash is None:
            self._dummy_hash = self._password_service.dummy_hash()
        return self._dummy_hash

    async def register(
        self,
        username: str,
        email: str,
        password: str,
    ) -> RegisterResult:
        invalid_fields = invalid_registration_fields(username, email, password)
        if invalid_fields:
            logger.info("Registration rejected: invalid %s", ", ".join(invalid_fields))
            return Rejected(
                RejectionReason.INVALID_INPUT,
                invalid_fields=tuple(invalid_fields),
            )

        if await self._credential_repo.exists(username, email):
            logger.info("Registration rejected: identity taken (username: %s)", username)
            return Rejected(RejectionReason.DUPLICATE_IDENTITY)

        password_hash = await asyncio.to_thread(self._password_service.hash, password)

        try:
            credential = await self._credential_repo.insert(
                username=username,
                email=email,
                password_hash=password_hash,
            )
        except DuplicateCredentialError:
            logger.info(
                "Registration rejected: lost race for identity (username: %s)",
                username,
            )
            return Rejected(RejectionReason.DUPLICATE_IDENTITY)

        logger.info("User registered: %s", credential.username)
        return Registered(username=credential.username)

    async def login(
        self,
        identifier: str,
        password: str,
    ) -> LoginResult:
        credential = None
        if isinstance(identifier, str) and identifier:
            credential = await self._credential_repo.find_by_identifier(identifier)

        if credential is None:
            await asyncio.to_thread(
                self._password_service.verify,
                password,
                self._get_dummy_hash(),
            )
            logger.info("Login failed: unknown identifier")
            return Rejected(RejectionReason.INVALID_CREDENTIALS)

        is_valid = await asyncio.to_thread(
            self._password_service.verify,
            password,
            credential.password_hash,
        )
        if not is_valid:
            logger.info("Login failed: wrong password for user %s", credential.username)
            return Rejected(RejectionReason.INVALID_CREDENTIALS)

        logger.info("User logged in: %s", credential.username)
        return Authenticated(username=credential.username)
