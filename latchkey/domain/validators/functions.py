"""Centralized validation functions.

All field rules are defined once and reused by request schemas (through the
Annotated types in ``latchkey.domain.types``) and by handlers that validate
optional fields themselves. Validators are pure functions that raise
``ValueError`` with a user-facing message.
"""

import re

from latchkey.core.constants import (
    BCRYPT_MAX_PASSWORD_BYTES,
    TOKEN_BYTES,
    TOTP_CODE_DIGITS,
)
from latchkey.domain.enums import UserRole

USERNAME_PATTERN = re.compile(r"^[a-zA-Z_][a-zA-Z0-9._]{2,19}$")
EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")
PASSWORD_PATTERN = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[!@#$%^&*]).{16,}$")
TOKEN_PATTERN = re.compile(rf"^[a-fA-F0-9]{{{TOKEN_BYTES * 2}}}$")


def validate_username(v: str) -> str:
    """Validate username format.

    Args:
        v: Username to validate.

    Returns:
        Username unchanged.

    Raises:
        ValueError: If empty or not 3-20 characters of letters, digits,
            periods and underscores starting with a letter or underscore.

    Example:
        >>> validate_username("ada_l")
        'ada_l'
    """
    if not v or not v.strip():
        raise ValueError("Username required")
    if not USERNAME_PATTERN.match(v):
        raise ValueError(
            "Username must be between 3 and 20 characters, start with a letter "
            "or an underscore and contain only letters, numbers, periods and "
            "underscores"
        )
    return v


def validate_email(v: str) -> str:
    """Validate email format.

    Case is preserved; uniqueness checks compare case-insensitively.

    Raises:
        ValueError: If empty or malformed.

    Example:
        >>> validate_email("Ada@Example.com")
        'Ada@Example.com'
    """
    if not v or not v.strip():
        raise ValueError("Email address required")
    if not EMAIL_PATTERN.match(v):
        raise ValueError(
            "Email address must contain only letters, numbers, periods, "
            "underscores, hyphens, plus signs and percent signs before the "
            '"@", a domain name after the "@", and a valid domain extension '
            '(e.g. ".com", ".net", ".org") of at least two letters'
        )
    return v


def validate_password(v: str) -> str:
    """Validate password strength.

    Requirements:
        - At least 16 characters
        - Lowercase, uppercase, digit and one of ``!@#$%^&*``
        - At most 72 bytes once UTF-8 encoded (bcrypt input limit)

    Raises:
        ValueError: If empty or too weak.
    """
    if not v:
        raise ValueError("Password required")
    if not PASSWORD_PATTERN.match(v):
        raise ValueError(
            "Password must be at least 16 characters and include at least one "
            "lowercase letter, one capital letter, one number and one symbol "
            "(!@#$%^&*)"
        )
    if len(v.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
        raise ValueError(
            f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes long"
        )
    return v


def validate_role(v: str) -> str:
    """Validate role is one of the static roles."""
    if not UserRole.is_valid(v):
        raise ValueError(
            f"Role must be one of the following: {', '.join(UserRole.values())}"
        )
    return v


def validate_totp_code(v: str) -> str:
    """Validate a 6-digit TOTP code."""
    if len(v) != TOTP_CODE_DIGITS or not v.isdigit():
        raise ValueError(f"TOTP code must be {TOTP_CODE_DIGITS} digits")
    return v


def validate_token_format(v: str) -> str:
    """Validate verification token format (64 hex characters).

    Raises:
        ValueError: If the token is not 64 hexadecimal characters.
    """
    if not TOKEN_PATTERN.fullmatch(v):
        raise ValueError("Token must be 64 hexadecimal characters")
    return v.lower()
