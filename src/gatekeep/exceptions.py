"""Authentication exceptions.

Business outcomes (invalid input, duplicate identity, invalid credentials)
are returned as ``Rejected`` results by the AuthenticationService. The
exceptions below cover the cases that are not normal control flow:
uniqueness violations surfaced by a credential store, and infrastructure
failures that callers may retry.
"""


class AuthError(Exception):
    """Base exception for all authentication errors."""

    def __init__(self, message: str = "Authentication error"):
        self.message = message
        super().__init__(self.message)


class DuplicateCredentialError(AuthError):
    """Raised when a store rejects an insert because of a unique constraint."""

    def __init__(
        self,
        username: str,
        email: str,
        message: str = "Username or email already registered",
    ):
        self.username = username
        self.email = email
        super().__init__(message)


class StoreUnavailableError(AuthError):
    """Raised when the credential store cannot be reached.

    This is an infrastructure fault, not a security decision. Callers
    decide whether to retry.
    """

    def __init__(self, message: str = "Credential store is unavailable"):
        super().__init__(message)
