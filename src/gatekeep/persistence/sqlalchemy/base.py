"""SQLAlchemy declarative base for gatekeep models.

Applications that keep other tables in the same database can include
AuthBase.metadata in their migration configuration.

Examples
--------
# In Alembic env.py:
from gatekeep.persistence.sqlalchemy import AuthBase

target_metadata = AuthBase.metadata
"""

from sqlalchemy.orm import DeclarativeBase


class AuthBase(DeclarativeBase):
    """Declarative base for gatekeep models."""
