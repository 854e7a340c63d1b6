"""Verification token entity.

A verification token represents one pending privileged operation. The
store keeps at most one row per (user, token_type); re-issuing replaces the
value and resets expiry and ``used_at``.
"""

from dataclasses import dataclass
from datetime import UTC, datetime

from latchkey.domain.enums import TokenType


@dataclass(frozen=True, slots=True, kw_only=True)
class IssuedToken:
    """Value handed back to the caller that issued a token.

    Attributes:
        token_value: Hex-encoded random value (sent by email, never stored elsewhere).
        expires_at: Absolute expiry.
    """

    token_value: str
    expires_at: datetime


@dataclass
class VerificationToken:
    """Stored verification token.

    Attributes:
        user_id: Owning user.
        token_type: Purpose of the token.
        token_value: Hex-encoded random value.
        expires_at: Absolute expiry (issue time + 1 hour).
        created_at: Issue time of the current value.
        used_at: Consumption time (None while active).
    """

    user_id: int
    token_type: TokenType
    token_value: str
    expires_at: datetime
    created_at: datetime
    used_at: datetime | None = None

    def is_expired(self, now: datetime | None = None) -> bool:
        """Expired tokens fail consumption regardless of ``used_at``."""
        return (now or datetime.now(UTC)) >= self.expires_at

    def is_used(self) -> bool:
        """Consumed tokens can never be consumed again."""
        return self.used_at is not None
