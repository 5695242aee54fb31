"""gatekeep - Credential registration and authentication.

This package validates candidate identities, stores credentials with a
salted bcrypt hash, and verifies presented passwords. It handles:
- Input validation (username, email, password)
- Password hashing (bcrypt)
- Credential storage (with pluggable persistence)
- Registration and login decisions

Architecture:
    gatekeep/
    ├── validation.py       # Pure input checks
    ├── services/           # Password hashing
    ├── repositories/       # Abstract credential store
    ├── persistence/        # Implementations by technology
    │   ├── sqlalchemy/     # SQLAlchemy implementation
    │   └── memory/         # In-process implementation
    ├── application/        # AuthenticationService
    ├── cli/                # Typer command line shell
    ├── schemas.py          # Result types
    └── exceptions.py       # Auth exceptions

Usage:
    from gatekeep import AuthenticationService, PasswordHashingService
    from gatekeep.persistence.sqlalchemy import (
        CredentialRepositorySQLAlchemy,
        create_database_engine,
        create_session_maker,
    )

    engine = create_database_engine(settings.database_url)
    service = AuthenticationService(
        credential_repository=CredentialRepositorySQLAlchemy(
            create_session_maker(engine),
        ),
        password_service=PasswordHashingService(rounds=12),
    )
    result = await service.login("alice", "goodpass1")
"""

from gatekeep.application.services import AuthenticationService
from gatekeep.exceptions import (
    AuthError,
    DuplicateCredentialError,
    StoreUnavailableError,
)
from gatekeep.repositories import CredentialData, CredentialRepository
from gatekeep.schemas import (
    Authenticated,
    LoginResult,
    Registered,
    RegisterResult,
    Rejected,
    RejectionReason,
)
from gatekeep.services import PasswordHashingService
from gatekeep.validation import (
    is_valid_email,
    is_valid_password,
    is_valid_username,
)

__all__ = [
    # Application
    "AuthenticationService",
    # Services
    "PasswordHashingService",
    # Repositories (interfaces)
    "CredentialData",
    "CredentialRepository",
    # Schemas
    "Authenticated",
    "LoginResult",
    "Registered",
    "RegisterResult",
    "Rejected",
    "RejectionReason",
    # Validation
    "is_valid_email",
    "is_valid_password",
    "is_valid_username",
    # Exceptions
    "AuthError",
    "DuplicateCredentialError",
    "StoreUnavailableError",
]
