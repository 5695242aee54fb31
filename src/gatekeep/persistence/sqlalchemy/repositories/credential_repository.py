"""SQLAlchemy implementation of CredentialRepository.

Each operation runs in its own short-lived session taken from the
session maker passed to the constructor. ``insert`` commits its own
transaction, so the unique constraints on ``credentials`` are checked by
the database against every other committed or in-flight registration.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from gatekeep.exceptions import DuplicateCredentialError, StoreUnavailableError
from gatekeep.persistence.sqlalchemy.models import CredentialModel
from gatekeep.repositories import CredentialData, CredentialRepository

logger = logging.getLogger(__name__)


def _is_unique_violation(exc: IntegrityError) -> bool:
    # Supports SQLite ("UNIQUE constraint failed") and PostgreSQL
    # ("duplicate key value violates unique constraint")
    msg = str(getattr(exc, "orig", exc)).lower()
    return "unique" in msg or "duplicate" in msg


class CredentialRepositorySQLAlchemy(CredentialRepository):
    """
    SQLAlchemy implementation of CredentialRepository.

    Connection-level failures are reported as StoreUnavailableError so the
    caller can tell them apart from authentication outcomes.
    """

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        """Initialize repository with a session factory.

        Parameters
        ----------
        session_maker
            Factory producing async sessions bound to the credential database
        """
        self._session_maker = session_maker

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[AsyncSession]:
        try:
            async with self._session_maker() as session:
                yield session
        except (OperationalError, InterfaceError, PoolTimeoutError, OSError) as exc:
            logger.error("Credential store unavailable: %s", type(exc).__name__)
            raise StoreUnavailableError from exc

    def _to_data(self, model: CredentialModel) -> CredentialData:
        """Map SQLAlchemy model to data transfer object."""
        return CredentialData(
            id=model.id,
            username=model.username,
            email=model.email,
            password_hash=model.password_hash,
            created_at=model.created_at,
        )

    async def exists(self, username: str, email: str) -> bool:
        stmt = (
            select(func.count())
            .select_from(CredentialModel)
            .where(
                or_(
                    CredentialModel.username == username,
                    CredentialModel.email == email,
                ),
            )
        )
        async with self._session() as session:
            result = await session.execute(stmt)
            return result.scalar_one() > 0

    async def insert(
        self,
        username: str,
        email: str,
        password_hash: str,
    ) -> CredentialData:
        model = CredentialModel(
            username=username,
            email=email,
            password_hash=password_hash,
        )
        try:
            async with self._session() as session, session.begin():
                session.add(model)
                await session.flush()
                # Read before commit expires the instance
                credential = self._to_data(model)
        except IntegrityError as exc:
            if not _is_unique_violation(exc):
                raise
            logger.info("Insert rejected by unique constraint (username: %s)", username)
            raise DuplicateCredentialError(username, email) from exc

        logger.info("Created credential: %s", credential.id)
        return credential

    async def find_by_identifier(self, identifier: str) -> CredentialData | None:
        stmt = (
            select(CredentialModel)
            .where(
                or_(
                    CredentialModel.username == identifier,
                    CredentialModel.email == identifier,
                ),
            )
            .limit(1)
        )
        async with self._session() as session:
            result = await session.execute(stmt)
            model = result.scalar_one_or_none()
            return self._to_data(model) if model else None

    async def count(self) -> int:
        stmt = select(func.count()).select_from(CredentialModel)
        async with self._session() as session:
            result = await session.execute(stmt)
            return result.scalar_one()
