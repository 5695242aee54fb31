"""Application services for credential management."""

from gatekeep.application.services.authentication_service import (
    AuthenticationService,
)

__all__ = ["AuthenticationService"]
