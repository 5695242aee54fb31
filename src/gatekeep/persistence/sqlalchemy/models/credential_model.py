"""SQLAlchemy model for credentials.

This model stores usernames, emails and password hashes.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import DateTime, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from gatekeep.persistence.sqlalchemy.base import AuthBase
from gatekeep.time import utc_now


class CredentialModel(AuthBase):
    """
    SQLAlchemy model for a registered credential.

    Username and email each carry their own unique constraint. These
    constraints, not application-level checks, decide which of two
    concurrent registrations for the same identity wins.

    Table: credentials
    """

    __tablename__ = "credentials"
    __table_args__ = (
        UniqueConstraint("username", name="uq_credentials_username"),
        UniqueConstraint("email", name="uq_credentials_email"),
    )

    # Primary key
    id: Mapped[UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid4,
    )

    # Identity (exact, case-sensitive matching)
    username: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str] = mapped_column(String, nullable=False)

    # Password hash (bcrypt format, 60 chars)
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )

    def __repr__(self) -> str:
        return f"<CredentialModel(id={self.id}, username={self.username})>"
