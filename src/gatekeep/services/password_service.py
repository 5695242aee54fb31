"""Password hashing service using bcrypt.

Provides salted one-way hashing and constant-time verification with a
configurable work factor.
"""

import base64
import hashlib
import secrets

import bcrypt

MIN_ROUNDS = 4
MAX_ROUNDS = 31

# bcrypt's base64 variant and the encoded digest length after the salt
BCRYPT_ALPHABET = "./ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789"
BCRYPT_DIGEST_LENGTH = 31


class PasswordHashingService:
    """Service for secure password hashing and verification.

    Uses bcrypt for password hashing with configurable work factor.
    Passwords are reduced to a base64-encoded SHA-256 digest before
    bcrypt sees them, so every character of a long password counts
    (bcrypt itself only consumes 72 bytes).

    Examples
    --------
    >>> service = PasswordHashingService()
    >>> hash = service.hash("my_secure_password")
    >>> service.verify("my_secure_password", hash)
    True
    >>> service.verify("wrong_password", hash)
    False
    """

    DEFAULT_ROUNDS = 12

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        """Initialize the password hashing service.

        Parameters
        ----------
        rounds
            The bcrypt work factor (log2 of iterations). Default is 12,
            which keeps a verification in the tens to low hundreds of
            milliseconds on commodity hardware. Hashes created with a
            different work factor still verify, since bcrypt stores the
            factor inside the hash.
        """
        if not MIN_ROUNDS <= rounds <= MAX_ROUNDS:
            msg = f"bcrypt rounds must be between {MIN_ROUNDS} and {MAX_ROUNDS}"
            raise ValueError(msg)
        self._rounds = rounds

    @property
    def rounds(self) -> int:
        return self._rounds

    @staticmethod
    def _prehash(password: str) -> bytes:
        digest = hashlib.sha256(password.encode("utf-8")).digest()
        return base64.b64encode(digest)

    def hash(self, password: str) -> str:
        """Hash a plaintext password.

        Every call uses a fresh random salt, so hashing the same password
        twice yields two different strings.

        Parameters
        ----------
        password
            The plaintext password to hash

        Returns
        -------
        The bcrypt hash as a string (``$2b$<rounds>$<salt><digest>``)
        """
        salt = bcrypt.gensalt(rounds=self._rounds)
        hashed = bcrypt.hashpw(self._prehash(password), salt)
        return hashed.decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Verify a password against a hash.

        Parameters
        ----------
        password
            The plaintext password to check
        password_hash
            The bcrypt hash to verify against

        Returns
        -------
        True if password matches, False otherwise (including for a
        malformed hash)
        """
        if not isinstance(password, str) or not isinstance(password_hash, str):
            return False
        try:
            return bcrypt.checkpw(
                self._prehash(password),
                password_hash.encode("utf-8"),
            )
        except (ValueError, TypeError):
            # Invalid hash format
            return False

    def dummy_hash(self) -> str:
        """Return a well-formed hash that no password matches.

        Verifying against it costs the same as verifying against a real
        hash with the configured work factor, but building it costs no
        bcrypt round. Used when a login names an unknown identifier.

        Returns
        -------
        A random ``$2b$<rounds>$`` string of standard bcrypt length
        """
        salt = bcrypt.gensalt(rounds=self._rounds).decode("utf-8")
        digest = "".join(
            secrets.choice(BCRYPT_ALPHABET) for _ in range(BCRYPT_DIGEST_LENGTH)
        )
        return salt + digest
