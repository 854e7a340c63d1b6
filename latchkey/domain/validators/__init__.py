"""Centralized validators.

Usage:
    from latchkey.domain.validators import validate_email, validate_password
"""

from latchkey.domain.validators.functions import (
    validate_email,
    validate_password,
    validate_role,
    validate_token_format,
    validate_totp_code,
    validate_username,
)

__all__ = [
    "validate_email",
    "validate_password",
    "validate_role",
    "validate_token_format",
    "validate_totp_code",
    "validate_username",
]
