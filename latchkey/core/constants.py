"""Centralized constants for internal implementation details.

These are fixed implementation details, NOT environment-specific
configuration. For environment-specific settings use
``latchkey.core.config``.

Example:
    >>> from latchkey.core.constants import TOKEN_BYTES
    >>> token = secrets.token_hex(TOKEN_BYTES)
"""

# =============================================================================
# Token and Key Lengths
# =============================================================================

TOKEN_BYTES: int = 32
"""Number of random bytes in a verification token (32 bytes = 256 bits)."""

AES_KEY_LENGTH: int = 32
"""AES-256 encryption key length in bytes."""

AES_GCM_IV_LENGTH: int = 12
"""AES-GCM nonce length in bytes (96 bits)."""

AES_GCM_TAG_LENGTH: int = 16
"""AES-GCM authentication tag length in bytes."""

JWT_SECRET_MIN_LENGTH: int = 32
"""Minimum length of a JWT signing secret (256 bits)."""

BCRYPT_ROUNDS_DEFAULT: int = 12
"""Default bcrypt work factor (cost parameter)."""

BCRYPT_MAX_PASSWORD_BYTES: int = 72
"""Bcrypt ignores input beyond this many bytes."""

TOKEN_LOG_PREFIX_LENGTH: int = 8
"""Characters of a token value that may appear in logs."""

MAX_USER_ID: int = 2**63 - 1
"""Largest user id (BIGINT primary key)."""


# =============================================================================
# Lifetimes
# =============================================================================

ACCESS_TOKEN_TTL_SECONDS: int = 60 * 60
"""Access token (and cookie) lifetime: 1 hour."""

REFRESH_TOKEN_TTL_SECONDS: int = 7 * 24 * 60 * 60
"""Refresh token (and cookie) lifetime: 7 days."""

VERIFICATION_TOKEN_TTL_SECONDS: int = 60 * 60
"""Verification token lifetime: 1 hour."""


# =============================================================================
# TOTP
# =============================================================================

TOTP_CODE_DIGITS: int = 6
"""Digits in a TOTP code."""

TOTP_VALID_WINDOW: int = 1
"""Accepted clock skew in 30-second steps on either side."""

QR_CODE_SCALE: int = 5
"""Module size in pixels for the provisioning QR image."""


# =============================================================================
# Cookies
# =============================================================================

ACCESS_TOKEN_COOKIE: str = "accessToken"
"""Cookie carrying the access token."""

REFRESH_TOKEN_COOKIE: str = "refreshToken"
"""Cookie carrying the refresh token."""


# =============================================================================
# Timeouts
# =============================================================================

CAPTCHA_TIMEOUT_DEFAULT: float = 10.0
"""Default timeout for the CAPTCHA verification call in seconds."""

SMTP_TIMEOUT_DEFAULT: float = 15.0
"""Default timeout for SMTP delivery in seconds."""
