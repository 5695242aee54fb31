"""Result types returned by the AuthenticationService.

Registration and login never answer with a bare boolean. Each call
returns either a success value or a ``Rejected`` carrying the reason,
so callers can branch on the outcome without catching exceptions.
"""

from dataclasses import dataclass
from enum import Enum


class RejectionReason(str, Enum):
    """Why a registration or login was refused."""

    INVALID_INPUT = "invalid_input"
    DUPLICATE_IDENTITY = "duplicate_identity"
    INVALID_CREDENTIALS = "invalid_credentials"


@dataclass(frozen=True)
class Registered:
    """A new credential was stored for ``username``."""

    username: str

    @property
    def is_success(self) -> bool:
        return True


@dataclass(frozen=True)
class Authenticated:
    """The presented password matched the credential of ``username``."""

    username: str

    @property
    def is_success(self) -> bool:
        return True


@dataclass(frozen=True)
class Rejected:
    """The request was refused.

    Attributes
    ----------
    reason
        The rejection category
    invalid_fields
        Names of the inputs that failed validation. Only populated for
        ``RejectionReason.INVALID_INPUT``.
    """

    reason: RejectionReason
    invalid_fields: tuple[str, ...] = ()

    @property
    def is_success(self) -> bool:
        return False


RegisterResult = Registered | Rejected
LoginResult = Authenticated | Rejected
