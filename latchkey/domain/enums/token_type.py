"""Verification token purposes.

Each purpose gates exactly one privileged state change. A user holds at most
one token row per purpose.
"""

from enum import Enum


class TokenType(str, Enum):
    """Purpose of a single-use verification token."""

    ACCOUNT_VERIFICATION = "account_verification"
    """Flips ``account_verified`` after registration."""

    EMAIL_CHANGE = "email_change"
    """Swaps ``email`` with ``email_pending``."""

    PASSWORD_RESET = "password_reset"
    """Replaces the password hash without a session."""

    ACCOUNT_DELETION = "account_deletion"
    """Removes the user record."""
