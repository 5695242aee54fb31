"""Authentication services.

Provides password hashing and verification.
"""

from gatekeep.services.password_service import PasswordHashingService

__all__ = [
    "PasswordHashingService",
]
