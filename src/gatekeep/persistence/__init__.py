"""Persistence implementations for gatekeep.

This package contains storage-specific implementations of the
repository interfaces defined in gatekeep.repositories.

Structure:
    persistence/
    ├── sqlalchemy/     # SQLAlchemy/SQL database implementation
    └── memory/         # In-process implementation for tests and demos

Usage:
    from gatekeep.persistence.sqlalchemy import (
        CredentialRepositorySQLAlchemy,
        create_database_engine,
        create_session_maker,
    )
"""
