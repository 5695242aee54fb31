"""Syntactic checks for registration input.

All predicates are pure and accept any object; anything that is not a
string is invalid.
"""

import re

USERNAME_PATTERN = re.compile(r"[a-zA-Z0-9_]+")

# Simple but effective email regex
# Validates: user@domain.tld (minimum requirements)
EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 255


def _is_blank(value: object) -> bool:
    return not isinstance(value, str) or not value or value.isspace()


def is_valid_username(value: object) -> bool:
    """Letters, digits and underscores only."""
    if _is_blank(value):
        return False
    return USERNAME_PATTERN.fullmatch(value) is not None


def is_valid_email(value: object) -> bool:
    """Shape ``local@domain.tld``; not a deliverability check."""
    if _is_blank(value):
        return False
    return EMAIL_PATTERN.fullmatch(value) is not None


def is_valid_password(value: object) -> bool:
    """Between 8 and 255 characters, not whitespace only."""
    if _is_blank(value):
        return False
    return PASSWORD_MIN_LENGTH <= len(value) <= PASSWORD_MAX_LENGTH


def invalid_registration_fields(
    username: object,
    email: object,
    password: object,
) -> list[str]:
    """Return the names of the registration fields that fail validation."""
    checks = (
        ("username", is_valid_username(username)),
        ("email", is_valid_email(email)),
        ("password", is_valid_password(password)),
    )
    return [name for name, ok in checks if not ok]
