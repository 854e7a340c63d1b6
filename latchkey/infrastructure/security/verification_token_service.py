"""Verification token value generation.

Token values are 32 random bytes, hex-encoded (64 characters), valid for
one hour from issue.
"""

import secrets
from datetime import UTC, datetime, timedelta

from latchkey.core.constants import TOKEN_BYTES, VERIFICATION_TOKEN_TTL_SECONDS


class VerificationTokenService:
    """Generate verification token values and expiry timestamps."""

    def __init__(self, ttl_seconds: int = VERIFICATION_TOKEN_TTL_SECONDS) -> None:
        self._ttl = timedelta(seconds=ttl_seconds)

    def generate_token(self) -> str:
        """Generate a 64-character hex token (256 bits of entropy)."""
        return secrets.token_hex(TOKEN_BYTES)

    def calculate_expiration(self, now: datetime | None = None) -> datetime:
        """Return the absolute expiry for a token issued at ``now``."""
        return (now or datetime.now(UTC)) + self._ttl
