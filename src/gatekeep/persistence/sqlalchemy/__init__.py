"""SQLAlchemy implementation for gatekeep persistence.

Provides:
- AuthBase: Declarative base for credential models
- CredentialModel: SQLAlchemy model for credentials
- CredentialRepositorySQLAlchemy: Repository implementation
- Engine/session helpers and schema creation

Examples
--------
engine = create_database_engine("sqlite+aiosqlite:///gatekeep.db")
await create_tables(engine)
repository = CredentialRepositorySQLAlchemy(create_session_maker(engine))
"""

from gatekeep.persistence.sqlalchemy.base import AuthBase
from gatekeep.persistence.sqlalchemy.database import (
    create_database_engine,
    create_session_maker,
    create_tables,
    drop_tables,
)
from gatekeep.persistence.sqlalchemy.models import CredentialModel
from gatekeep.persistence.sqlalchemy.repositories import (
    CredentialRepositorySQLAlchemy,
)

__all__ = [
    "AuthBase",
    "CredentialModel",
    "CredentialRepositorySQLAlchemy",
    "create_database_engine",
    "create_session_maker",
    "create_tables",
    "drop_tables",
]
